"""
Multi-chain provider bundle.
"""

import logging
from typing import Optional, Dict, Any, Union

from ..config import RPCConfig
from ..core import ChainId, NetworkType, get_contract_address
from ..errors import SDKError, TransactionError
from .arbitrum import ArbitrumProvider, TransactionResult
from .solana import SolanaProvider
from .ton import TonProvider

log = logging.getLogger(__name__)


class MultiChainProvider:
    """Holds whichever providers the RPC config enables."""

    def __init__(self, config: RPCConfig):
        self.arbitrum: Optional[ArbitrumProvider] = None
        self.solana: Optional[SolanaProvider] = None
        self.ton: Optional[TonProvider] = None

        if config.arbitrum:
            self.arbitrum = ArbitrumProvider(config.arbitrum)
        if config.solana:
            self.solana = SolanaProvider(config.solana)
        if config.ton:
            self.ton = TonProvider(config.ton)

    def get_chain_statuses(self) -> Dict[str, Dict[str, Any]]:
        """
        Probe each chain. Never raises: unreachable or unconfigured chains
        report connected=False.
        """
        return probe_chains(self.arbitrum, self.solana, self.ton)

    def close(self):
        for provider in (self.solana, self.ton):
            if provider is not None:
                provider.close()


def probe_chains(arbitrum: Optional[ArbitrumProvider],
                 solana: Optional[SolanaProvider],
                 ton: Optional[TonProvider]) -> Dict[str, Dict[str, Any]]:
    statuses: Dict[str, Dict[str, Any]] = {
        "arbitrum": {"connected": False},
        "solana": {"connected": False},
        "ton": {"connected": False},
    }

    if arbitrum is not None:
        try:
            statuses["arbitrum"] = {"connected": True, "block_number": arbitrum.get_block_number()}
        except SDKError as e:
            log.warning(f"Arbitrum unreachable: {e}")

    if solana is not None:
        try:
            statuses["solana"] = {"connected": True, "slot": solana.get_slot()}
        except SDKError as e:
            log.warning(f"Solana unreachable: {e}")

    if ton is not None:
        try:
            info = ton.get_masterchain_info()
            seqno = (info or {}).get("last", {}).get("seqno")
            statuses["ton"] = {"connected": True, "block_number": seqno}
        except SDKError as e:
            log.warning(f"TON unreachable: {e}")

    return statuses


class ChainRPCClient:
    """
    Base for the contract-level clients. Providers are shared when a
    MultiChainProvider is passed in, otherwise built from the config.
    """

    def __init__(self, config: RPCConfig, network: Union[NetworkType, str] = NetworkType.TESTNET,
                 providers: Optional[MultiChainProvider] = None):
        self.config = config
        self.network = network if isinstance(network, NetworkType) else NetworkType(str(network).lower())
        self.providers = providers or MultiChainProvider(config)

    @property
    def arbitrum(self) -> Optional[ArbitrumProvider]:
        return self.providers.arbitrum

    def _require_arbitrum(self) -> ArbitrumProvider:
        if self.providers.arbitrum is None:
            raise SDKError("Arbitrum provider not configured")
        return self.providers.arbitrum

    def _contract(self, name: str) -> str:
        address = get_contract_address(ChainId.ARBITRUM, self.network, name)
        if not address:
            raise SDKError(f"{name} is not deployed on Arbitrum {self.network.value}")
        return address

    def get_arbitrum_provider(self) -> Optional[ArbitrumProvider]:
        return self.providers.arbitrum

    def get_solana_provider(self) -> Optional[SolanaProvider]:
        return self.providers.solana

    def get_ton_provider(self) -> Optional[TonProvider]:
        return self.providers.ton

    def _transact(self, address: str, abi, method: str, args, **value) -> TransactionResult:
        """Send a contract write; a reverted receipt raises TransactionError."""
        tx = self._require_arbitrum().send_transaction(address, abi, method, args, **value)
        if not tx.success:
            raise TransactionError(f"{method} reverted", tx.hash, "arbitrum")
        return tx
