"""
Vault clients.

- VaultClient: vault management over REST
- VaultRPCClient: ChronosVaultOptimized (ERC-4626) on Arbitrum
"""

from .api import VaultClient, VAULT_TYPES
from .rpc import VaultRPCClient, VaultInfo, CHRONOS_VAULT_OPTIMIZED_ABI

__all__ = [
    "VaultClient",
    "VAULT_TYPES",
    "VaultRPCClient",
    "VaultInfo",
    "CHRONOS_VAULT_OPTIMIZED_ABI",
]
