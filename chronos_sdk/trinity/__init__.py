"""
Trinity Protocol 2-of-3 consensus clients.

- TrinityProtocolClient: REST (scanner, validators, attestations)
- TrinityRPCClient: TrinityConsensusVerifier contract on Arbitrum
"""

from .api import TrinityProtocolClient
from .rpc import TrinityRPCClient, OperationState, ConfirmationStatus, TRINITY_CONSENSUS_VERIFIER_ABI

__all__ = [
    "TrinityProtocolClient",
    "TrinityRPCClient",
    "OperationState",
    "ConfirmationStatus",
    "TRINITY_CONSENSUS_VERIFIER_ABI",
]
