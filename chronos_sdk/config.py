"""
Configuration for chronos SDK.

Defaults point at the public testnet deployment. Every field can be
overridden from the environment (see SDKConfig.from_env).
"""

import os
from dataclasses import dataclass, field, replace
from typing import Optional, Dict, List

from .core import NetworkType, SDKMode, RPC_URLS
from .errors import ValidationError


DEFAULT_API_BASE_URL = "https://api.chronosvault.org"
DEFAULT_TIMEOUT = 30.0  # seconds
ARBITRUM_SEPOLIA_CHAIN_ID = 421614


@dataclass
class ArbitrumConfig:
    """Arbitrum (EVM) provider configuration."""
    rpc_url: str = RPC_URLS["arbitrum"]["testnet"]
    private_key: str = ""  # For signing (optional)
    chain_id: int = ARBITRUM_SEPOLIA_CHAIN_ID
    timeout: float = DEFAULT_TIMEOUT


@dataclass
class SolanaConfig:
    rpc_url: str = RPC_URLS["solana"]["testnet"]
    commitment: str = "confirmed"  # processed | confirmed | finalized
    timeout: float = DEFAULT_TIMEOUT


@dataclass
class TonConfig:
    endpoint: str = RPC_URLS["ton"]["testnet"]
    api_key: str = ""
    network: str = "testnet"
    timeout: float = DEFAULT_TIMEOUT


@dataclass
class RPCConfig:
    """Direct chain access. A missing section means that chain is not wired."""
    arbitrum: Optional[ArbitrumConfig] = None
    solana: Optional[SolanaConfig] = None
    ton: Optional[TonConfig] = None

    def is_empty(self) -> bool:
        return self.arbitrum is None and self.solana is None and self.ton is None


@dataclass
class SDKConfig:
    """Top-level SDK configuration."""
    network: NetworkType = NetworkType.TESTNET
    api_base_url: str = DEFAULT_API_BASE_URL
    api_key: str = ""
    timeout: float = DEFAULT_TIMEOUT
    mode: SDKMode = SDKMode.API
    rpc: RPCConfig = field(default_factory=RPCConfig)
    debug: bool = False

    def __post_init__(self):
        # Accept plain strings for the enum fields
        if not isinstance(self.network, NetworkType):
            try:
                self.network = NetworkType(str(self.network).lower())
            except ValueError:
                raise ValidationError(f"Unknown network: {self.network}", "network")
        if not isinstance(self.mode, SDKMode):
            try:
                self.mode = SDKMode(str(self.mode).lower())
            except ValueError:
                raise ValidationError(f"Unknown SDK mode: {self.mode}", "mode")
        if self.timeout <= 0:
            raise ValidationError("timeout must be positive", "timeout")
        self.api_base_url = self.api_base_url.rstrip("/")

    def merged(self, **overrides) -> "SDKConfig":
        """Return a copy with the given fields replaced."""
        unknown = set(overrides) - set(self.__dataclass_fields__)
        if unknown:
            raise ValidationError(f"Unknown config fields: {sorted(unknown)}", "config")
        return replace(self, **overrides)

    @classmethod
    def from_env(cls) -> "SDKConfig":
        """
        Build config from CHRONOS_* environment variables.

        RPC sections are only created when their URL variable is set.
        """
        rpc = RPCConfig()
        arb_url = os.environ.get("CHRONOS_ARBITRUM_RPC")
        if arb_url:
            rpc.arbitrum = ArbitrumConfig(
                rpc_url=arb_url,
                private_key=os.environ.get("CHRONOS_ARBITRUM_KEY", ""),
                chain_id=int(os.environ.get("CHRONOS_ARBITRUM_CHAIN_ID", ARBITRUM_SEPOLIA_CHAIN_ID)),
            )
        sol_url = os.environ.get("CHRONOS_SOLANA_RPC")
        if sol_url:
            rpc.solana = SolanaConfig(rpc_url=sol_url)
        ton_url = os.environ.get("CHRONOS_TON_RPC")
        if ton_url:
            rpc.ton = TonConfig(endpoint=ton_url, api_key=os.environ.get("CHRONOS_TON_API_KEY", ""))

        return cls(
            network=os.environ.get("CHRONOS_NETWORK", "testnet"),
            api_base_url=os.environ.get("CHRONOS_API_URL", DEFAULT_API_BASE_URL),
            api_key=os.environ.get("CHRONOS_API_KEY", ""),
            timeout=float(os.environ.get("CHRONOS_TIMEOUT", DEFAULT_TIMEOUT)),
            mode=os.environ.get("CHRONOS_MODE", "api"),
            rpc=rpc,
            debug=os.environ.get("CHRONOS_DEBUG", "") in ("1", "true", "yes"),
        )


# =============================================================================
# Network presets
# =============================================================================

@dataclass(frozen=True)
class NetworkConfig:
    name: str
    chain_id: int
    rpc_url: str
    explorer_url: str
    contracts: Dict[str, str]


ARBITRUM_SEPOLIA = NetworkConfig(
    name="Arbitrum Sepolia",
    chain_id=ARBITRUM_SEPOLIA_CHAIN_ID,
    rpc_url="https://arb-sepolia.g.alchemy.com/v2",
    explorer_url="https://sepolia.arbiscan.io",
    contracts={
        "TrinityConsensusVerifier": "0x59396D58Fa856025bD5249E342729d5550Be151C",
        "TrinityShieldVerifierV2": "0x5E1EE00E5DFa54488AC5052C747B97c7564872F9",
        "EmergencyMultiSig": "0x066A39Af76b625c1074aE96ce9A111532950Fc41",
        "TrinityKeeperRegistry": "0xAe9bd988011583D87d6bbc206C19e4a9Bda04830",
        "TrinityGovernanceTimelock": "0xf6b9AB802b323f8Be35ca1C733e155D4BdcDb61b",
        "CrossChainMessageRelay": "0xC6F4f855fc690CB52159eE3B13C9d9Fb8D403E59",
        "TrinityExitGateway": "0xE6FeBd695e4b5681DCF274fDB47d786523796C04",
        "TrinityFeeSplitter": "0x4F777c8c7D3Ea270c7c6D9Db8250ceBe1648A058",
        "TrinityRelayerCoordinator": "0x4023B7307BF9e1098e0c34F7E8653a435b20e635",
        "HTLCChronosBridge": "0x82C3AbF6036cEE41E151A90FE00181f6b18af8ca",
        "HTLCArbToL1": "0xaDDAC5670941416063551c996e169b0fa569B8e1",
        "ChronosVaultOptimized": "0xAE408eC592f0f865bA0012C480E8867e12B4F32D",
        "TestERC20": "0x4567853BE0d5780099E3542Df2e00C5B633E0161",
    },
)

SOLANA_DEVNET = NetworkConfig(
    name="Solana Devnet",
    chain_id=2,
    rpc_url="https://api.devnet.solana.com",
    explorer_url="https://explorer.solana.com",
    contracts={
        "TrinityValidator": "CYaDJYRqm35udQ8vkxoajSER8oaniQUcV8Vvw5BqJyo2",
    },
)

TON_TESTNET = NetworkConfig(
    name="TON Testnet",
    chain_id=3,
    rpc_url="https://testnet.toncenter.com/api/v2",
    explorer_url="https://testnet.tonscan.org",
    contracts={
        "TrinityConsensus": "EQeGlYzwupSROVWGucOmKyUDbSaKmPfIpHHP5mV73odL8",
        "ChronosVault": "EQjUVidQfn4m-Rougn0fol7ECCthba2HV0M6xz9zAfax4",
        "CrossChainBridge": "EQgWobA9D4u6Xem3B8e6Sde_NEFZYicyy7_5_XvOT18mA",
    },
)


def get_alchemy_rpc_url(api_key: str) -> str:
    return f"{ARBITRUM_SEPOLIA.rpc_url}/{api_key}"


def get_solana_rpc_urls() -> List[str]:
    """Public devnet endpoints, preferred first."""
    return [
        "https://api.devnet.solana.com",
        "https://devnet.helius-rpc.com",
        "https://rpc.ankr.com/solana_devnet",
    ]


def get_ton_rpc_url(api_key: Optional[str] = None) -> str:
    if api_key:
        return f"https://testnet.toncenter.com/api/v2/jsonRPC?api_key={api_key}"
    return "https://testnet.toncenter.com/api/v2/jsonRPC"
