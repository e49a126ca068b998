"""
HTLC RPC client for the HTLCChronosBridge contract on Arbitrum.

Hashlocks are keccak256(secret) over the raw 32 secret bytes, matching
what the contract checks in claimSwap.
"""

import time
import logging
from dataclasses import dataclass
from typing import Tuple, List, Dict, Any

from web3 import Web3

from ..chains.multichain import ChainRPCClient
from ..core import to_bytes32, generate_secret, checksum_address, parse_ether
from ..errors import TransactionError

log = logging.getLogger(__name__)

CONTRACT_NAME = "HTLCChronosBridge"

HTLC_CHRONOS_BRIDGE_ABI = [
    {
        "name": "createSwap",
        "type": "function",
        "stateMutability": "payable",
        "inputs": [
            {"name": "recipient", "type": "address"},
            {"name": "hashlock", "type": "bytes32"},
            {"name": "timelock", "type": "uint256"},
            {"name": "destinationChainId", "type": "uint256"}
        ],
        "outputs": [{"name": "swapId", "type": "bytes32"}]
    },
    {
        "name": "claimSwap",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "swapId", "type": "bytes32"},
            {"name": "preimage", "type": "bytes32"}
        ],
        "outputs": []
    },
    {
        "name": "refundSwap",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [{"name": "swapId", "type": "bytes32"}],
        "outputs": []
    },
    {
        "name": "swaps",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "", "type": "bytes32"}],
        "outputs": [
            {"name": "sender", "type": "address"},
            {"name": "recipient", "type": "address"},
            {"name": "amount", "type": "uint256"},
            {"name": "hashlock", "type": "bytes32"},
            {"name": "timelock", "type": "uint256"},
            {"name": "destinationChainId", "type": "uint256"},
            {"name": "claimed", "type": "bool"},
            {"name": "refunded", "type": "bool"}
        ]
    },
    {
        "name": "getSwapStatus",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "swapId", "type": "bytes32"}],
        "outputs": [
            {"name": "exists", "type": "bool"},
            {"name": "claimed", "type": "bool"},
            {"name": "refunded", "type": "bool"},
            {"name": "expired", "type": "bool"}
        ]
    },
    {
        "name": "MIN_TIMELOCK",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}]
    },
    {
        "name": "MAX_TIMELOCK",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}]
    },
    {
        "name": "SwapCreated",
        "type": "event",
        "anonymous": False,
        "inputs": [
            {"name": "swapId", "type": "bytes32", "indexed": True},
            {"name": "sender", "type": "address", "indexed": True},
            {"name": "recipient", "type": "address", "indexed": True},
            {"name": "amount", "type": "uint256", "indexed": False},
            {"name": "hashlock", "type": "bytes32", "indexed": False},
            {"name": "timelock", "type": "uint256", "indexed": False}
        ]
    }
]

SWAP_CREATED_TOPIC = Web3.to_hex(Web3.keccak(
    text="SwapCreated(bytes32,address,address,uint256,bytes32,uint256)"
))


@dataclass
class SwapState:
    """Raw on-chain swap record."""
    sender: str
    recipient: str
    amount: str             # wei, decimal string
    hashlock: str
    timelock: int
    destination_chain_id: int
    claimed: bool
    refunded: bool


@dataclass
class SwapStatus:
    exists: bool
    claimed: bool
    refunded: bool
    expired: bool


@dataclass
class SwapCreated:
    swap_id: str
    tx_hash: str


def swap_id_from_logs(logs: List[Dict[str, Any]], tx_hash: str, hashlock: str) -> str:
    """
    Swap id from the SwapCreated event (first indexed topic).

    Falls back to keccak256("<txHash>-<hashlock>") when the event is
    missing from the receipt.
    """
    for entry in logs:
        topics = entry.get("topics") or []
        if len(topics) >= 2 and topics[0].lower() == SWAP_CREATED_TOPIC.lower():
            return topics[1]
    log.warning(f"SwapCreated event not found in {tx_hash}, deriving swap id")
    return Web3.to_hex(Web3.keccak(text=f"{tx_hash}-{hashlock}"))


class HTLCRPCClient(ChainRPCClient):
    """Direct access to HTLCChronosBridge."""

    def _call(self, method: str, *args) -> Any:
        return self._require_arbitrum().call_contract_method(
            self._contract(CONTRACT_NAME), HTLC_CHRONOS_BRIDGE_ABI, method, list(args)
        )

    def _send(self, method: str, args: List[Any], value_wei: int = 0):
        return self._transact(
            self._contract(CONTRACT_NAME), HTLC_CHRONOS_BRIDGE_ABI, method, args, value_wei=value_wei
        )

    def generate_secret(self) -> Tuple[str, str]:
        return generate_secret()

    def create_swap(self, recipient: str, hashlock: str, timelock_seconds: int,
                    destination_chain_id: int, amount_eth: str) -> SwapCreated:
        """
        Lock `amount_eth` under `hashlock` for `timelock_seconds` from now.

        Returns:
            SwapCreated(swap_id, tx_hash)
        """
        timelock = int(time.time()) + int(timelock_seconds)

        tx = self._send(
            "createSwap",
            [checksum_address(recipient, "recipient"), to_bytes32(hashlock, "hashlock"),
             timelock, int(destination_chain_id)],
            value_wei=parse_ether(amount_eth, "amount_eth"),
        )

        swap_id = swap_id_from_logs(tx.logs, tx.hash, hashlock)
        log.info(f"HTLC created on Arbitrum: {swap_id} ({amount_eth} ETH, tx {tx.hash})")
        return SwapCreated(swap_id=swap_id, tx_hash=tx.hash)

    def claim_swap(self, swap_id: str, preimage: str) -> str:
        """Reveal the preimage and claim. Returns the tx hash."""
        status = self.get_swap_status(swap_id)
        if not status.exists:
            raise TransactionError("Swap does not exist", swap_id, "arbitrum")
        if status.claimed:
            raise TransactionError("Swap already claimed", swap_id, "arbitrum")
        if status.refunded:
            raise TransactionError("Swap already refunded", swap_id, "arbitrum")

        tx = self._send("claimSwap", [to_bytes32(swap_id, "swap_id"), to_bytes32(preimage, "preimage")])
        log.info(f"HTLC claimed: {swap_id} (tx {tx.hash})")
        return tx.hash

    def refund_swap(self, swap_id: str) -> str:
        """Refund after expiry. Returns the tx hash."""
        status = self.get_swap_status(swap_id)
        if not status.exists:
            raise TransactionError("Swap does not exist", swap_id, "arbitrum")
        if status.claimed:
            raise TransactionError("Swap already claimed", swap_id, "arbitrum")
        if status.refunded:
            raise TransactionError("Swap already refunded", swap_id, "arbitrum")
        if not status.expired:
            raise TransactionError("Swap has not expired yet", swap_id, "arbitrum")

        tx = self._send("refundSwap", [to_bytes32(swap_id, "swap_id")])
        log.info(f"HTLC refunded: {swap_id} (tx {tx.hash})")
        return tx.hash

    def get_swap_state(self, swap_id: str) -> SwapState:
        result = self._call("swaps", to_bytes32(swap_id, "swap_id"))
        return SwapState(
            sender=result[0],
            recipient=result[1],
            amount=str(result[2]),
            hashlock=Web3.to_hex(result[3]) if isinstance(result[3], (bytes, bytearray)) else str(result[3]),
            timelock=int(result[4]),
            destination_chain_id=int(result[5]),
            claimed=bool(result[6]),
            refunded=bool(result[7]),
        )

    def get_swap_status(self, swap_id: str) -> SwapStatus:
        result = self._call("getSwapStatus", to_bytes32(swap_id, "swap_id"))
        return SwapStatus(
            exists=bool(result[0]),
            claimed=bool(result[1]),
            refunded=bool(result[2]),
            expired=bool(result[3]),
        )

    def get_min_timelock(self) -> int:
        return int(self._call("MIN_TIMELOCK"))

    def get_max_timelock(self) -> int:
        return int(self._call("MAX_TIMELOCK"))
