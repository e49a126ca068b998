"""
Cross-chain bridge clients.

- BridgeClient: transfers over REST
- BridgeRPCClient: CrossChainMessageRelay and TrinityExitGateway on Arbitrum
"""

from .api import BridgeClient, ROUTES, is_route_available
from .rpc import BridgeRPCClient, CROSS_CHAIN_RELAY_ABI, EXIT_GATEWAY_ABI

__all__ = [
    "BridgeClient",
    "ROUTES",
    "is_route_available",
    "BridgeRPCClient",
    "CROSS_CHAIN_RELAY_ABI",
    "EXIT_GATEWAY_ABI",
]
