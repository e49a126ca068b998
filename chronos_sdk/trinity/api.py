"""
Trinity Protocol REST client.

Read side of 2-of-3 consensus: scanner stats, validators, consensus
operations, TEE attestations and formal-verification proofs.
"""

import time
import logging
from typing import Optional, Dict, Any, List, Callable

from ..api import ApiClient
from ..config import SDKConfig
from ..core import (
    ChainLike, parse_chain,
    Validator, ChainStatus, TrinityStats, SecurityLayer,
    TrinityShieldAttestation, LeanProof, ConsensusOperation, QuantumStatus,
    CONTRACTS, VALIDATORS, RPC_URLS, SECURITY_LAYERS,
)
from ..errors import SDKError, ConsensusError, TimeoutError

log = logging.getLogger(__name__)

LAYER_DESCRIPTIONS = {
    "groth16": "ZK-SNARKs for privacy-preserving verification",
    "lean4": "Mathematical proofs with Lean 4 theorem prover",
    "mpc": "Shamir Secret Sharing with CRYSTALS-Kyber",
    "vdf": "Wesolowski VDF time-locks",
    "ai-governance": "Anomaly detection and threat prediction",
    "pqc": "ML-KEM-1024 and CRYSTALS-Dilithium-5",
    "consensus": "2-of-3 multi-chain validator consensus",
    "tee": "Intel SGX/AMD SEV hardware enclaves",
}

# Reported when /api/quantum/status is unreachable
QUANTUM_FALLBACK_ALGORITHMS = ["ML-KEM-1024", "CRYSTALS-Dilithium-5"]
QUANTUM_FALLBACK_KEY_STRENGTH = 256

TERMINAL_FAILURE_STATES = ("failed", "expired")


class TrinityProtocolClient:
    """REST client for consensus data."""

    def __init__(self, config: SDKConfig, api: Optional[ApiClient] = None):
        self.config = config
        self.api = api or ApiClient(config)

    def update_config(self, config: SDKConfig):
        self.config = config
        self.api.update_config(config)

    # =========================================================================
    # Scanner
    # =========================================================================

    def get_stats(self) -> TrinityStats:
        return TrinityStats.from_dict(self.api.get("/api/scanner/stats"))

    def get_chains(self) -> List[ChainStatus]:
        return [ChainStatus.from_dict(c) for c in self.api.get("/api/scanner/chains")]

    def get_chain_status(self, chain: ChainLike) -> ChainStatus:
        chain_id = parse_chain(chain)
        return ChainStatus.from_dict(self.api.get(f"/api/scanner/chains/{chain_id.value}"))

    # =========================================================================
    # Validators
    # =========================================================================

    def get_validators(self, status: Optional[str] = None) -> List[Validator]:
        data = self.api.get("/api/validators", params={"status": status})
        return [Validator.from_dict(v) for v in data]

    def get_validator_by_wallet(self, address: str) -> Optional[Validator]:
        """None when the wallet is not a registered validator."""
        try:
            return Validator.from_dict(self.api.get(f"/api/validators/wallet/{address}"))
        except SDKError as e:
            log.debug(f"No validator for {address}: {e}")
            return None

    def verify_attestation(self, validator_id: int) -> Optional[TrinityShieldAttestation]:
        """Latest TEE attestation for a validator, or None."""
        try:
            data = self.api.get(f"/api/validators/{validator_id}/attestation")
        except SDKError as e:
            log.debug(f"No attestation for validator {validator_id}: {e}")
            return None
        return TrinityShieldAttestation.from_dict(data)

    def get_security_layers(self) -> List[SecurityLayer]:
        """The eight defense layers. Static; live counters come from get_stats()."""
        return [
            SecurityLayer(
                id=layer["id"],
                name=layer["name"],
                type=layer["type"],
                status="active",
                description=LAYER_DESCRIPTIONS.get(layer["type"], "Unknown layer"),
                verification_count=0,
            )
            for layer in SECURITY_LAYERS
        ]

    # =========================================================================
    # Consensus operations
    # =========================================================================

    def get_consensus_operations(self, limit: int = 10) -> List[ConsensusOperation]:
        data = self.api.get("/api/scanner/consensus", params={"limit": limit})
        return [ConsensusOperation.from_dict(op) for op in data]

    def get_consensus_operation(self, operation_id: str) -> ConsensusOperation:
        return ConsensusOperation.from_dict(self.api.get(f"/api/scanner/consensus/{operation_id}"))

    def submit_consensus_operation(self, operation_type: str,
                                   data: Optional[Dict[str, Any]] = None) -> ConsensusOperation:
        """Register a new operation for validators to confirm."""
        result = self.api.post("/api/scanner/consensus", json={
            "operationType": operation_type,
            "data": data or {},
        })
        op = ConsensusOperation.from_dict(result)
        log.info(f"Consensus operation submitted: {op.id} ({operation_type})")
        return op

    def wait_for_consensus(self, operation_id: str, timeout: float = 300,
                           poll_interval: float = 5,
                           on_progress: Optional[Callable[[ConsensusOperation], None]] = None
                           ) -> ConsensusOperation:
        """
        Poll an operation until it reaches its confirmation threshold.

        Args:
            operation_id: Consensus operation ID
            timeout: Max seconds to wait
            poll_interval: Seconds between polls
            on_progress: Called with each polled state

        Returns:
            The operation once confirmations >= required_confirmations

        Raises:
            ConsensusError: operation failed or expired
            TimeoutError: threshold not reached in time
        """
        deadline = time.time() + timeout
        last_confirmations = -1

        while True:
            op = self.get_consensus_operation(operation_id)
            if on_progress:
                on_progress(op)

            if op.confirmations != last_confirmations:
                log.info(f"Operation {operation_id}: {op.confirmations}/{op.required_confirmations} confirmations")
                last_confirmations = op.confirmations

            if op.has_consensus:
                return op
            if op.status in TERMINAL_FAILURE_STATES:
                raise ConsensusError(f"Operation {op.status}", operation_id, op.confirmations)

            if time.time() + poll_interval > deadline:
                raise TimeoutError(f"Consensus not reached for {operation_id}",
                                   operation="wait_for_consensus", timeout=timeout)
            time.sleep(poll_interval)

    # =========================================================================
    # Security
    # =========================================================================

    def get_lean_proofs(self) -> List[LeanProof]:
        return [LeanProof.from_dict(p) for p in self.api.get("/api/security/lean-proofs")]

    def get_quantum_status(self) -> QuantumStatus:
        try:
            return QuantumStatus.from_dict(self.api.get("/api/quantum/status"))
        except SDKError as e:
            log.warning(f"Quantum status unavailable, using defaults: {e}")
            return QuantumStatus(
                is_quantum_safe=True,
                algorithms=list(QUANTUM_FALLBACK_ALGORITHMS),
                key_strength=QUANTUM_FALLBACK_KEY_STRENGTH,
            )

    # =========================================================================
    # Static deployment info
    # =========================================================================

    def get_contracts(self) -> Dict[str, Dict[str, Dict[str, str]]]:
        return CONTRACTS

    def get_validator_addresses(self) -> Dict[str, Dict[str, str]]:
        return VALIDATORS

    def get_rpc_urls(self) -> Dict[str, Dict[str, str]]:
        return RPC_URLS
