"""
HTLC (Hash Time-Locked Contract) clients for cross-chain swaps.

Funds can only be claimed with the secret preimage, and are refunded to
the sender once the timelock passes.

- HTLCClient: backend-coordinated swaps over REST
- HTLCRPCClient: HTLCChronosBridge contract on Arbitrum
- AtomicSwapClient: client-side secrets, create -> consensus -> claim
"""

from .api import HTLCClient
from .rpc import HTLCRPCClient, SwapState, SwapStatus, SwapCreated, HTLC_CHRONOS_BRIDGE_ABI
from .atomic import AtomicSwapClient, SwapParams, SwapOrder, OrderStatus
from .secret_store import SecretStore

__all__ = [
    "HTLCClient",
    "HTLCRPCClient",
    "SwapState",
    "SwapStatus",
    "SwapCreated",
    "HTLC_CHRONOS_BRIDGE_ABI",
    "AtomicSwapClient",
    "SwapParams",
    "SwapOrder",
    "OrderStatus",
    "SecretStore",
]
