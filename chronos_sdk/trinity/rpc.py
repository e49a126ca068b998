"""
Trinity Protocol RPC client.

Direct calls against TrinityConsensusVerifier on Arbitrum. Operation ids
are bytes32; pass them as 0x-hex.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Any

from ..chains.multichain import ChainRPCClient, probe_chains
from ..core import to_bytes32, hex_to_bytes, checksum_address, ZERO_ADDRESS
from ..errors import ConsensusError

log = logging.getLogger(__name__)

CONTRACT_NAME = "TrinityConsensusVerifier"

TRINITY_CONSENSUS_VERIFIER_ABI = [
    {
        "name": "CONSENSUS_THRESHOLD",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint8"}]
    },
    {
        "name": "TOTAL_CHAINS",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint8"}]
    },
    {
        "name": "validators",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "chainId", "type": "uint8"}],
        "outputs": [{"name": "", "type": "address"}]
    },
    {
        "name": "operations",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "operationId", "type": "bytes32"}],
        "outputs": [
            {"name": "chainConfirmations", "type": "uint8"},
            {"name": "arbitrumConfirmed", "type": "bool"},
            {"name": "solanaConfirmed", "type": "bool"},
            {"name": "tonConfirmed", "type": "bool"},
            {"name": "expiresAt", "type": "uint256"},
            {"name": "executed", "type": "bool"}
        ]
    },
    {
        "name": "confirmOperation",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "operationId", "type": "bytes32"},
            {"name": "chainId", "type": "uint8"},
            {"name": "signature", "type": "bytes"}
        ],
        "outputs": []
    },
    {
        "name": "hasConsensus",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "operationId", "type": "bytes32"}],
        "outputs": [{"name": "", "type": "bool"}]
    },
    {
        "name": "getConfirmationStatus",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "operationId", "type": "bytes32"}],
        "outputs": [
            {"name": "confirmations", "type": "uint8"},
            {"name": "arbitrum", "type": "bool"},
            {"name": "solana", "type": "bool"},
            {"name": "ton", "type": "bool"}
        ]
    },
    {
        "name": "executeOperation",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "operationId", "type": "bytes32"},
            {"name": "target", "type": "address"},
            {"name": "data", "type": "bytes"},
            {"name": "value", "type": "uint256"}
        ],
        "outputs": [{"name": "", "type": "bool"}]
    }
]


@dataclass
class OperationState:
    """On-chain record of a consensus operation."""
    chain_confirmations: int
    arbitrum_confirmed: bool
    solana_confirmed: bool
    ton_confirmed: bool
    expires_at: int         # Unix timestamp
    executed: bool

    @property
    def exists(self) -> bool:
        return self.expires_at != 0


@dataclass
class ConfirmationStatus:
    confirmations: int
    arbitrum: bool
    solana: bool
    ton: bool


class TrinityRPCClient(ChainRPCClient):
    """Contract-level access to 2-of-3 consensus."""

    def _call(self, method: str, *args) -> Any:
        return self._require_arbitrum().call_contract_method(
            self._contract(CONTRACT_NAME), TRINITY_CONSENSUS_VERIFIER_ABI, method, list(args)
        )

    def get_consensus_threshold(self) -> int:
        return int(self._call("CONSENSUS_THRESHOLD"))

    def get_total_chains(self) -> int:
        return int(self._call("TOTAL_CHAINS"))

    def get_validator(self, chain_id: int) -> str:
        """Validator address for protocol chain 1/2/3, zero address if unset."""
        return self._call("validators", chain_id) or ZERO_ADDRESS

    def get_operation_state(self, operation_id: str) -> OperationState:
        result = self._call("operations", to_bytes32(operation_id, "operation_id"))
        return OperationState(
            chain_confirmations=int(result[0]),
            arbitrum_confirmed=bool(result[1]),
            solana_confirmed=bool(result[2]),
            ton_confirmed=bool(result[3]),
            expires_at=int(result[4]),
            executed=bool(result[5]),
        )

    def has_consensus(self, operation_id: str) -> bool:
        return bool(self._call("hasConsensus", to_bytes32(operation_id, "operation_id")))

    def get_confirmation_status(self, operation_id: str) -> ConfirmationStatus:
        result = self._call("getConfirmationStatus", to_bytes32(operation_id, "operation_id"))
        return ConfirmationStatus(
            confirmations=int(result[0]),
            arbitrum=bool(result[1]),
            solana=bool(result[2]),
            ton=bool(result[3]),
        )

    def confirm_operation(self, operation_id: str, chain_id: int, signature: str) -> str:
        """Submit this chain's confirmation. Returns the tx hash."""
        tx = self._transact(
            self._contract(CONTRACT_NAME),
            TRINITY_CONSENSUS_VERIFIER_ABI,
            "confirmOperation",
            [to_bytes32(operation_id, "operation_id"), chain_id, hex_to_bytes(signature, "signature")],
        )
        log.info(f"Confirmed operation {operation_id[:18]}... for chain {chain_id}: {tx.hash}")
        return tx.hash

    def execute_operation(self, operation_id: str, target: str, data: str, value: int = 0) -> str:
        """
        Execute an operation that already has 2-of-3 consensus.

        Raises:
            ConsensusError: threshold not reached yet
        """
        if not self.has_consensus(operation_id):
            raise ConsensusError("Operation does not have consensus", operation_id)

        tx = self._transact(
            self._contract(CONTRACT_NAME),
            TRINITY_CONSENSUS_VERIFIER_ABI,
            "executeOperation",
            [to_bytes32(operation_id, "operation_id"), checksum_address(target, "target"),
             hex_to_bytes(data), int(value)],
        )
        log.info(f"Executed operation {operation_id[:18]}...: {tx.hash}")
        return tx.hash

    def get_multi_chain_status(self) -> Dict[str, Dict[str, Any]]:
        return probe_chains(self.providers.arbitrum, self.providers.solana, self.providers.ton)
