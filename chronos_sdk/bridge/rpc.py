"""
Bridge RPC client.

Cross-chain messages go through CrossChainMessageRelay; withdrawals to
another chain go through TrinityExitGateway. Both live on Arbitrum.
"""

import logging
from typing import Dict, List, Any

from web3 import Web3

from ..chains.multichain import ChainRPCClient
from ..core import (
    ChainLike, chain_to_number, to_bytes32, hex_to_bytes, checksum_address, parse_ether, format_units,
)
from .api import is_route_available

log = logging.getLogger(__name__)

RELAY_CONTRACT = "CrossChainMessageRelay"
EXIT_GATEWAY_CONTRACT = "TrinityExitGateway"

CROSS_CHAIN_RELAY_ABI = [
    {
        "name": "sendMessage",
        "type": "function",
        "stateMutability": "payable",
        "inputs": [
            {"name": "targetChainId", "type": "uint256"},
            {"name": "recipient", "type": "address"},
            {"name": "data", "type": "bytes"}
        ],
        "outputs": [{"name": "", "type": "bytes32"}]
    },
    {
        "name": "relayMessage",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "messageId", "type": "bytes32"},
            {"name": "proof", "type": "bytes"}
        ],
        "outputs": []
    },
    {
        "name": "getMessageStatus",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "messageId", "type": "bytes32"}],
        "outputs": [{"name": "", "type": "uint8"}]
    },
    {
        "name": "getMessageFee",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "targetChainId", "type": "uint256"}],
        "outputs": [{"name": "", "type": "uint256"}]
    },
    {
        "name": "nonces",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}]
    },
    {
        "name": "MessageSent",
        "type": "event",
        "anonymous": False,
        "inputs": [
            {"name": "messageId", "type": "bytes32", "indexed": True},
            {"name": "targetChainId", "type": "uint256", "indexed": False},
            {"name": "sender", "type": "address", "indexed": False},
            {"name": "recipient", "type": "address", "indexed": False},
            {"name": "data", "type": "bytes", "indexed": False}
        ]
    }
]

EXIT_GATEWAY_ABI = [
    {
        "name": "initiateExit",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "token", "type": "address"},
            {"name": "amount", "type": "uint256"},
            {"name": "targetChainId", "type": "uint256"},
            {"name": "recipient", "type": "address"}
        ],
        "outputs": []
    },
    {
        "name": "completeExit",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "exitId", "type": "bytes32"},
            {"name": "proof", "type": "bytes"}
        ],
        "outputs": []
    },
    {
        "name": "getExitStatus",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "exitId", "type": "bytes32"}],
        "outputs": [{"name": "", "type": "uint8"}]
    },
    {
        "name": "getPendingExits",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "user", "type": "address"}],
        "outputs": [{"name": "", "type": "bytes32[]"}]
    },
    {
        "name": "ExitInitiated",
        "type": "event",
        "anonymous": False,
        "inputs": [
            {"name": "exitId", "type": "bytes32", "indexed": True},
            {"name": "token", "type": "address", "indexed": False},
            {"name": "amount", "type": "uint256", "indexed": False},
            {"name": "targetChainId", "type": "uint256", "indexed": False},
            {"name": "recipient", "type": "address", "indexed": False}
        ]
    }
]

MESSAGE_SENT_TOPIC = Web3.to_hex(Web3.keccak(text="MessageSent(bytes32,uint256,address,address,bytes)"))
EXIT_INITIATED_TOPIC = Web3.to_hex(Web3.keccak(text="ExitInitiated(bytes32,address,uint256,uint256,address)"))

MESSAGE_STATUS = {0: "pending", 1: "relayed", 2: "executed", 3: "failed"}
EXIT_STATUS = {0: "pending", 1: "completed", 2: "failed"}


def _event_id(logs: List[Dict[str, Any]], topic: str) -> str:
    """First indexed topic of the matching event, "" if absent."""
    for entry in logs:
        topics = entry.get("topics") or []
        if len(topics) >= 2 and topics[0].lower() == topic.lower():
            return topics[1]
    return ""


def _hex(value: Any) -> str:
    return Web3.to_hex(value) if isinstance(value, (bytes, bytearray)) else str(value)


class BridgeRPCClient(ChainRPCClient):
    """Relay and exit-gateway calls on Arbitrum."""

    def _relay_call(self, method: str, *args) -> Any:
        return self._require_arbitrum().call_contract_method(
            self._contract(RELAY_CONTRACT), CROSS_CHAIN_RELAY_ABI, method, list(args)
        )

    def _gateway_call(self, method: str, *args) -> Any:
        return self._require_arbitrum().call_contract_method(
            self._contract(EXIT_GATEWAY_CONTRACT), EXIT_GATEWAY_ABI, method, list(args)
        )

    # =========================================================================
    # Messages
    # =========================================================================

    def _message_fee_wei(self, target_chain: ChainLike) -> int:
        return int(self._relay_call("getMessageFee", chain_to_number(target_chain)))

    def get_message_fee(self, target_chain: ChainLike) -> str:
        """Relay fee in ETH."""
        return format_units(self._message_fee_wei(target_chain), 18)

    def send_message(self, target_chain: ChainLike, recipient: str, data: str) -> Dict[str, str]:
        """
        Send a cross-chain message, paying the relay fee.

        Returns:
            {"tx_hash": ..., "message_id": ...} (message_id "" if the event is missing)
        """
        target = chain_to_number(target_chain)
        args = [target, checksum_address(recipient, "recipient"), hex_to_bytes(data)]
        fee = self._message_fee_wei(target_chain)

        tx = self._transact(
            self._contract(RELAY_CONTRACT),
            CROSS_CHAIN_RELAY_ABI,
            "sendMessage",
            args,
            value_wei=fee,
        )
        message_id = _event_id(tx.logs, MESSAGE_SENT_TOPIC)
        log.info(f"Bridge message sent to chain {target}: {message_id or '?'} (tx {tx.hash})")
        return {"tx_hash": tx.hash, "message_id": message_id}

    def get_message_status(self, message_id: str) -> str:
        status = self._relay_call("getMessageStatus", to_bytes32(message_id, "message_id"))
        return MESSAGE_STATUS.get(int(status), "pending")

    def get_nonce(self, address: str) -> int:
        return int(self._relay_call("nonces", checksum_address(address)))

    def estimate_gas(self, target_chain: ChainLike, recipient: str, data: str) -> str:
        """Gas units for send_message, as a decimal string."""
        args = [chain_to_number(target_chain), checksum_address(recipient, "recipient"), hex_to_bytes(data)]
        fee = self._message_fee_wei(target_chain)
        gas = self._require_arbitrum().estimate_gas(
            self._contract(RELAY_CONTRACT),
            CROSS_CHAIN_RELAY_ABI,
            "sendMessage",
            args,
            value_wei=fee,
        )
        return str(gas)

    # =========================================================================
    # Exits
    # =========================================================================

    def initiate_exit(self, token_address: str, amount_eth: str, target_chain: ChainLike,
                      recipient: str) -> Dict[str, str]:
        """
        Start an exit of `amount_eth` (18-decimal units) of `token_address`.

        Returns:
            {"tx_hash": ..., "exit_id": ...}
        """
        args = [checksum_address(token_address, "token_address"), parse_ether(amount_eth, "amount_eth"),
                chain_to_number(target_chain), checksum_address(recipient, "recipient")]
        tx = self._transact(
            self._contract(EXIT_GATEWAY_CONTRACT),
            EXIT_GATEWAY_ABI,
            "initiateExit",
            args,
        )
        exit_id = _event_id(tx.logs, EXIT_INITIATED_TOPIC)
        log.info(f"Exit initiated: {exit_id or '?'} ({amount_eth} to {recipient}, tx {tx.hash})")
        return {"tx_hash": tx.hash, "exit_id": exit_id}

    def get_exit_status(self, exit_id: str) -> str:
        status = self._gateway_call("getExitStatus", to_bytes32(exit_id, "exit_id"))
        return EXIT_STATUS.get(int(status), "pending")

    def get_pending_exits(self, user_address: str) -> List[str]:
        exits = self._gateway_call("getPendingExits", checksum_address(user_address, "user_address"))
        return [_hex(e) for e in exits]

    def is_route_available(self, source_chain: ChainLike, target_chain: ChainLike) -> bool:
        return is_route_available(source_chain, target_chain)

    def get_contract_addresses(self) -> Dict[str, str]:
        return {
            "relay": self._contract(RELAY_CONTRACT),
            "exit": self._contract(EXIT_GATEWAY_CONTRACT),
        }