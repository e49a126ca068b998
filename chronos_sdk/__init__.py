"""
chronos SDK - Chronos Vault / Trinity Protocol client library

REST and RPC wrappers for a cross-chain vault product secured by 2-of-3
consensus across Arbitrum, Solana and TON.

Usage:
    from chronos_sdk import ChronosVaultSDK, generate_secret

    sdk = ChronosVaultSDK(api_key="...")

    # Consensus status
    op = sdk.trinity.wait_for_consensus(operation_id)

    # HTLC swap
    secret, hashlock = generate_secret()
    swap = sdk.htlc.create_swap("arbitrum", "solana", "0.1", participant)

    # Vault deposit
    sdk.vault.deposit(vault_id, "1.5", tx_hash)
"""

from .core import (
    ChainId,
    NetworkType,
    SDKMode,
    HTLCSwapStatus,
    BridgeTransactionStatus,
    Validator,
    ChainStatus,
    TrinityStats,
    SecurityLayer,
    TrinityShieldAttestation,
    LeanProof,
    ConsensusOperation,
    HTLCSwap,
    Vault,
    BridgeTransaction,
    BridgeStatus,
    BridgeFees,
    QuantumStatus,
    generate_secret,
    hash_secret,
    verify_secret,
    to_bytes32,
    chain_to_number,
    CONTRACTS,
    VALIDATORS,
    RPC_URLS,
    CHAIN_IDS,
    SECURITY_LAYERS,
    CONSENSUS_THRESHOLD,
    TOTAL_VALIDATORS,
)

from .errors import (
    SDKError,
    ProviderError,
    ValidationError,
    ConsensusError,
    TransactionError,
    TimeoutError,
    ApiError,
    is_sdk_error,
    normalize_error,
)

from .config import SDKConfig, RPCConfig, ArbitrumConfig, SolanaConfig, TonConfig

from .chains import ArbitrumProvider, SolanaProvider, TonProvider, MultiChainProvider

from .trinity import TrinityProtocolClient, TrinityRPCClient
from .htlc import HTLCClient, HTLCRPCClient, AtomicSwapClient, SecretStore
from .vault import VaultClient, VaultRPCClient
from .bridge import BridgeClient, BridgeRPCClient

from .watcher import ConsensusWatcher, ConsensusMonitor, WatcherConfig
from .sdk import ChronosVaultSDK, VERSION

__version__ = VERSION
__all__ = [
    # Facade
    "ChronosVaultSDK",
    # Core types
    "ChainId",
    "NetworkType",
    "SDKMode",
    "HTLCSwapStatus",
    "BridgeTransactionStatus",
    "Validator",
    "ChainStatus",
    "TrinityStats",
    "SecurityLayer",
    "TrinityShieldAttestation",
    "LeanProof",
    "ConsensusOperation",
    "HTLCSwap",
    "Vault",
    "BridgeTransaction",
    "BridgeStatus",
    "BridgeFees",
    "QuantumStatus",
    # Utilities
    "generate_secret",
    "hash_secret",
    "verify_secret",
    "to_bytes32",
    "chain_to_number",
    # Constants
    "CONTRACTS",
    "VALIDATORS",
    "RPC_URLS",
    "CHAIN_IDS",
    "SECURITY_LAYERS",
    "CONSENSUS_THRESHOLD",
    "TOTAL_VALIDATORS",
    # Errors
    "SDKError",
    "ProviderError",
    "ValidationError",
    "ConsensusError",
    "TransactionError",
    "TimeoutError",
    "ApiError",
    "is_sdk_error",
    "normalize_error",
    # Config
    "SDKConfig",
    "RPCConfig",
    "ArbitrumConfig",
    "SolanaConfig",
    "TonConfig",
    # Providers
    "ArbitrumProvider",
    "SolanaProvider",
    "TonProvider",
    "MultiChainProvider",
    # Clients
    "TrinityProtocolClient",
    "TrinityRPCClient",
    "HTLCClient",
    "HTLCRPCClient",
    "AtomicSwapClient",
    "SecretStore",
    "VaultClient",
    "VaultRPCClient",
    "BridgeClient",
    "BridgeRPCClient",
    # Watcher
    "ConsensusWatcher",
    "ConsensusMonitor",
    "WatcherConfig",
]
