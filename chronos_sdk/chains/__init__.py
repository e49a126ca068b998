"""
Chain providers for chronos SDK.

Each provider wraps one chain's RPC surface:
- Arbitrum: web3.py contract calls and signed transactions
- Solana: JSON-RPC reads and raw transaction broadcast
- TON: toncenter JSON-RPC reads and BOC broadcast
"""

from .arbitrum import ArbitrumProvider, TransactionResult
from .solana import SolanaProvider
from .ton import TonProvider
from .multichain import MultiChainProvider, ChainRPCClient

__all__ = [
    "ArbitrumProvider",
    "TransactionResult",
    "SolanaProvider",
    "TonProvider",
    "MultiChainProvider",
    "ChainRPCClient",
]
