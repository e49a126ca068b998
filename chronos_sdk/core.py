"""
Core types and constants for chronos SDK.

The REST backend speaks camelCase JSON; every record here has a
`from_dict()` that accepts that shape and a `to_dict()` that emits
snake_case for Python callers.
"""

import secrets
from decimal import Decimal
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Tuple, Union

from web3 import Web3

from .errors import ValidationError


class ChainId(Enum):
    """Chains participating in Trinity 2-of-3 consensus."""
    ARBITRUM = "arbitrum"
    SOLANA = "solana"
    TON = "ton"


class NetworkType(Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"


class SDKMode(Enum):
    """How the facade talks to the protocol."""
    API = "api"         # REST backend only
    RPC = "rpc"         # Direct contract calls (REST clients still available)
    HYBRID = "hybrid"   # Both, caller chooses per call


class HTLCSwapStatus(Enum):
    """HTLC swap lifecycle states."""
    INITIATED = "initiated"   # Swap registered, not funded
    FUNDED = "funded"         # Lock TX confirmed
    CLAIMED = "claimed"       # Recipient revealed the secret
    REFUNDED = "refunded"     # Timelock passed, sender refunded
    EXPIRED = "expired"       # Timelock passed, not yet refunded


class BridgeTransactionStatus(Enum):
    PENDING = "pending"
    CONFIRMING = "confirming"
    COMPLETED = "completed"
    FAILED = "failed"


ChainLike = Union[ChainId, str]


def _get(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """First present key wins (snake_case or camelCase)."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _chain(value: ChainLike) -> ChainId:
    if isinstance(value, ChainId):
        return value
    try:
        return ChainId(str(value).lower())
    except ValueError:
        raise ValidationError(f"Unknown chain: {value}", "chain")


def _chain_or_raw(value: Any) -> Any:
    try:
        return _chain(value)
    except ValidationError:
        return value


def _enum_or_raw(enum_cls, value: Any) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _value(obj: Any) -> Any:
    return obj.value if isinstance(obj, Enum) else obj


# =============================================================================
# Protocol records
# =============================================================================

@dataclass
class Validator:
    id: int
    wallet_address: str
    operator_name: str
    hardware_type: str      # "sgx" | "sev"
    role: Any               # ChainId
    status: str             # draft/submitted/attesting/approved/rejected
    is_active: bool

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Validator":
        return cls(
            id=int(_get(data, "id", default=0)),
            wallet_address=_get(data, "wallet_address", "walletAddress", default=""),
            operator_name=_get(data, "operator_name", "operatorName", default=""),
            hardware_type=_get(data, "hardware_type", "hardwareType", default=""),
            role=_chain_or_raw(_get(data, "role", default="")),
            status=_get(data, "status", default=""),
            is_active=bool(_get(data, "is_active", "isActive", default=False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "wallet_address": self.wallet_address,
            "operator_name": self.operator_name,
            "hardware_type": self.hardware_type,
            "role": _value(self.role),
            "status": self.status,
            "is_active": self.is_active,
        }


@dataclass
class ChainStatus:
    chain_id: Any
    chain_name: str
    status: str             # active | degraded | offline
    tx_count_24h: int = 0
    avg_block_time: float = 0.0
    last_block: Optional[str] = None
    contracts: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChainStatus":
        return cls(
            chain_id=_chain_or_raw(_get(data, "chain_id", "chainId", default="")),
            chain_name=_get(data, "chain_name", "chainName", "name", default=""),
            status=_get(data, "status", default="offline"),
            tx_count_24h=int(_get(data, "tx_count_24h", "txCount24h", default=0)),
            avg_block_time=float(_get(data, "avg_block_time", "avgBlockTime", default=0.0)),
            last_block=_get(data, "last_block", "lastBlock"),
            contracts=dict(_get(data, "contracts", default={})),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chain_id": _value(self.chain_id),
            "chain_name": self.chain_name,
            "status": self.status,
            "tx_count_24h": self.tx_count_24h,
            "avg_block_time": self.avg_block_time,
            "last_block": self.last_block,
            "contracts": self.contracts,
        }


@dataclass
class TrinityStats:
    """Aggregate scanner statistics. Nested sections are kept as dicts."""
    chains: Dict[str, ChainStatus]
    protocol: Dict[str, Any]
    vaults: Dict[str, Any]
    validators: Dict[str, Any]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrinityStats":
        chains = {
            name: ChainStatus.from_dict(status)
            for name, status in (_get(data, "chains", default={}) or {}).items()
        }
        return cls(
            chains=chains,
            protocol=dict(_get(data, "protocol", default={})),
            vaults=dict(_get(data, "vaults", default={})),
            validators=dict(_get(data, "validators", default={})),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chains": {name: status.to_dict() for name, status in self.chains.items()},
            "protocol": self.protocol,
            "vaults": self.vaults,
            "validators": self.validators,
        }


@dataclass
class SecurityLayer:
    id: int
    name: str
    type: str
    status: str
    description: str
    verification_count: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SecurityLayer":
        return cls(
            id=int(_get(data, "id", default=0)),
            name=_get(data, "name", default=""),
            type=_get(data, "type", default=""),
            status=_get(data, "status", default="active"),
            description=_get(data, "description", default=""),
            verification_count=int(_get(data, "verification_count", "verificationCount", default=0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "status": self.status,
            "description": self.description,
            "verification_count": self.verification_count,
        }


@dataclass
class TrinityShieldAttestation:
    id: int
    validator_id: int
    attestation_type: str   # "sgx" | "sev"
    quote: str
    report_data: str
    status: str             # pending | verified | expired | failed
    expires_at: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrinityShieldAttestation":
        return cls(
            id=int(_get(data, "id", default=0)),
            validator_id=int(_get(data, "validator_id", "validatorId", default=0)),
            attestation_type=_get(data, "attestation_type", "attestationType", default=""),
            quote=_get(data, "quote", default=""),
            report_data=_get(data, "report_data", "reportData", default=""),
            status=_get(data, "status", default="pending"),
            expires_at=_get(data, "expires_at", "expiresAt", default=""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "validator_id": self.validator_id,
            "attestation_type": self.attestation_type,
            "quote": self.quote,
            "report_data": self.report_data,
            "status": self.status,
            "expires_at": self.expires_at,
        }


@dataclass
class LeanProof:
    id: str
    theorem_name: str
    proof_hash: str
    status: str
    verified_at: Optional[str] = None
    contract_address: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LeanProof":
        return cls(
            id=str(_get(data, "id", default="")),
            theorem_name=_get(data, "theorem_name", "theoremName", default=""),
            proof_hash=_get(data, "proof_hash", "proofHash", default=""),
            status=_get(data, "status", default="pending"),
            verified_at=_get(data, "verified_at", "verifiedAt"),
            contract_address=_get(data, "contract_address", "contractAddress"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "theorem_name": self.theorem_name,
            "proof_hash": self.proof_hash,
            "status": self.status,
            "verified_at": self.verified_at,
            "contract_address": self.contract_address,
        }


@dataclass
class ConsensusOperation:
    """A protocol operation gated on 2-of-3 chain confirmations."""
    id: str
    operation_type: str
    status: str             # pending | confirmed | failed | expired
    confirmations: int
    required_confirmations: int
    chains: Dict[str, bool] = field(default_factory=dict)
    created_at: Optional[str] = None
    expires_at: Optional[str] = None
    tx_hashes: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConsensusOperation":
        chains = {}
        for name, value in (_get(data, "chains", default={}) or {}).items():
            # Scanner returns either a bool or {"confirmed": bool, ...}
            if isinstance(value, dict):
                value = value.get("confirmed", False)
            chains[name] = bool(value)
        return cls(
            id=str(_get(data, "id", default="")),
            operation_type=_get(data, "operation_type", "operationType", default=""),
            status=_get(data, "status", default="pending"),
            confirmations=int(_get(data, "confirmations", default=0)),
            required_confirmations=int(_get(
                data, "required_confirmations", "requiredConfirmations",
                default=CONSENSUS_THRESHOLD,
            )),
            chains=chains,
            created_at=_get(data, "created_at", "createdAt"),
            expires_at=_get(data, "expires_at", "expiresAt"),
            tx_hashes=dict(_get(data, "tx_hashes", "txHashes", default={})),
        )

    @property
    def has_consensus(self) -> bool:
        return self.confirmations >= self.required_confirmations

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "operation_type": self.operation_type,
            "status": self.status,
            "confirmations": self.confirmations,
            "required_confirmations": self.required_confirmations,
            "chains": self.chains,
            "created_at": self.created_at,
            "expires_at": self.expires_at,
            "tx_hashes": self.tx_hashes,
        }


@dataclass
class HTLCSwap:
    """HTLC swap as tracked by the backend."""
    id: str
    hash_lock: str
    time_lock: int          # Unix timestamp
    source_chain: Any
    target_chain: Any
    initiator: str
    participant: str
    amount: str
    status: Any             # HTLCSwapStatus
    secret_hash: str
    created_at: str = ""
    secret: Optional[str] = None
    claimed_at: Optional[str] = None
    refunded_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HTLCSwap":
        return cls(
            id=str(_get(data, "id", default="")),
            hash_lock=_get(data, "hash_lock", "hashLock", default=""),
            time_lock=int(_get(data, "time_lock", "timeLock", default=0)),
            source_chain=_chain_or_raw(_get(data, "source_chain", "sourceChain", default="")),
            target_chain=_chain_or_raw(_get(data, "target_chain", "targetChain", default="")),
            initiator=_get(data, "initiator", default=""),
            participant=_get(data, "participant", default=""),
            amount=str(_get(data, "amount", default="0")),
            status=_enum_or_raw(HTLCSwapStatus, _get(data, "status", default="initiated")),
            secret_hash=_get(data, "secret_hash", "secretHash", default=""),
            created_at=_get(data, "created_at", "createdAt", default=""),
            secret=_get(data, "secret"),
            claimed_at=_get(data, "claimed_at", "claimedAt"),
            refunded_at=_get(data, "refunded_at", "refundedAt"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "hash_lock": self.hash_lock,
            "time_lock": self.time_lock,
            "source_chain": _value(self.source_chain),
            "target_chain": _value(self.target_chain),
            "initiator": self.initiator,
            "participant": self.participant,
            "amount": self.amount,
            "status": _value(self.status),
            "secret_hash": self.secret_hash,
            "created_at": self.created_at,
            "claimed_at": self.claimed_at,
            "refunded_at": self.refunded_at,
        }


@dataclass
class Vault:
    id: str
    name: str
    vault_type: str
    chain: Any
    contract_address: str
    owner: str
    balance: str
    status: str             # active | locked | unlocked | closed
    created_at: str = ""
    unlock_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Vault":
        return cls(
            id=str(_get(data, "id", default="")),
            name=_get(data, "name", default=""),
            vault_type=_get(data, "vault_type", "vaultType", default="standard"),
            chain=_chain_or_raw(_get(data, "chain", default="")),
            contract_address=_get(data, "contract_address", "contractAddress", default=""),
            owner=_get(data, "owner", default=""),
            balance=str(_get(data, "balance", default="0")),
            status=_get(data, "status", default="active"),
            created_at=_get(data, "created_at", "createdAt", default=""),
            unlock_at=_get(data, "unlock_at", "unlockAt"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "vault_type": self.vault_type,
            "chain": _value(self.chain),
            "contract_address": self.contract_address,
            "owner": self.owner,
            "balance": self.balance,
            "status": self.status,
            "created_at": self.created_at,
            "unlock_at": self.unlock_at,
        }


@dataclass
class BridgeTransaction:
    id: str
    source_chain: Any
    target_chain: Any
    amount: str
    asset_type: str
    sender_address: str
    recipient_address: str
    status: Any             # BridgeTransactionStatus
    source_transaction_id: Optional[str] = None
    target_transaction_id: Optional[str] = None
    created_at: str = ""
    completed_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BridgeTransaction":
        return cls(
            id=str(_get(data, "id", default="")),
            source_chain=_chain_or_raw(_get(data, "source_chain", "sourceChain", default="")),
            target_chain=_chain_or_raw(_get(data, "target_chain", "targetChain", default="")),
            amount=str(_get(data, "amount", default="0")),
            asset_type=_get(data, "asset_type", "assetType", default=""),
            sender_address=_get(data, "sender_address", "senderAddress", default=""),
            recipient_address=_get(data, "recipient_address", "recipientAddress", default=""),
            status=_enum_or_raw(BridgeTransactionStatus, _get(data, "status", default="pending")),
            source_transaction_id=_get(data, "source_transaction_id", "sourceTransactionId"),
            target_transaction_id=_get(data, "target_transaction_id", "targetTransactionId"),
            created_at=_get(data, "created_at", "createdAt", default=""),
            completed_at=_get(data, "completed_at", "completedAt"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "source_chain": _value(self.source_chain),
            "target_chain": _value(self.target_chain),
            "amount": self.amount,
            "asset_type": self.asset_type,
            "sender_address": self.sender_address,
            "recipient_address": self.recipient_address,
            "status": _value(self.status),
            "source_transaction_id": self.source_transaction_id,
            "target_transaction_id": self.target_transaction_id,
            "created_at": self.created_at,
            "completed_at": self.completed_at,
        }


@dataclass
class BridgeStatus:
    source_chain: Any
    target_chain: Any
    status: str             # operational | degraded | down
    latency: float = 0.0
    pending_transactions: int = 0
    success_rate: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BridgeStatus":
        return cls(
            source_chain=_chain_or_raw(_get(data, "source_chain", "sourceChain", default="")),
            target_chain=_chain_or_raw(_get(data, "target_chain", "targetChain", default="")),
            status=_get(data, "status", default="down"),
            latency=float(_get(data, "latency", default=0.0)),
            pending_transactions=int(_get(data, "pending_transactions", "pendingTransactions", default=0)),
            success_rate=float(_get(data, "success_rate", "successRate", default=0.0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_chain": _value(self.source_chain),
            "target_chain": _value(self.target_chain),
            "status": self.status,
            "latency": self.latency,
            "pending_transactions": self.pending_transactions,
            "success_rate": self.success_rate,
        }


@dataclass
class BridgeFees:
    base_fee: str
    percentage_fee: float
    estimated_gas: str
    total_fee: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BridgeFees":
        return cls(
            base_fee=str(_get(data, "base_fee", "baseFee", default="0")),
            percentage_fee=float(_get(data, "percentage_fee", "percentageFee", default=0.0)),
            estimated_gas=str(_get(data, "estimated_gas", "estimatedGas", default="0")),
            total_fee=str(_get(data, "total_fee", "totalFee", default="0")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base_fee": self.base_fee,
            "percentage_fee": self.percentage_fee,
            "estimated_gas": self.estimated_gas,
            "total_fee": self.total_fee,
        }


@dataclass
class QuantumStatus:
    is_quantum_safe: bool
    algorithms: List[str]
    key_strength: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuantumStatus":
        return cls(
            is_quantum_safe=bool(_get(data, "is_quantum_safe", "isQuantumSafe", default=False)),
            algorithms=list(_get(data, "algorithms", default=[])),
            key_strength=int(_get(data, "key_strength", "keyStrength", default=0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_quantum_safe": self.is_quantum_safe,
            "algorithms": self.algorithms,
            "key_strength": self.key_strength,
        }


# =============================================================================
# HTLC Utilities
# =============================================================================

def _strip_0x(value: str) -> str:
    return value[2:] if value.startswith(("0x", "0X")) else value


def to_bytes32(value: Union[str, bytes], field_name: str = "value") -> bytes:
    """
    Normalize a hex string (with or without 0x) into exactly 32 bytes.

    Raises:
        ValidationError: not hex, or not 32 bytes long
    """
    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    else:
        try:
            raw = bytes.fromhex(_strip_0x(str(value)))
        except ValueError:
            raise ValidationError(f"{field_name} is not valid hex", field_name)
    if len(raw) != 32:
        raise ValidationError(f"{field_name} must be 32 bytes, got {len(raw)}", field_name)
    return raw


def hex_to_bytes(value: Union[str, bytes, None], field_name: str = "data") -> bytes:
    """Arbitrary-length hex calldata to bytes; empty or None gives b""."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not value:
        return b""
    try:
        return bytes.fromhex(_strip_0x(str(value)))
    except ValueError:
        raise ValidationError(f"{field_name} is not valid hex", field_name)


def checksum_address(address: str, field_name: str = "address") -> str:
    """EIP-55 checksum an EVM address."""
    try:
        return Web3.to_checksum_address(address)
    except (ValueError, TypeError):
        raise ValidationError(f"{field_name} is not a valid EVM address: {address!r}", field_name)


def parse_ether(amount: Union[str, int, Decimal], field_name: str = "amount") -> int:
    """Decimal ETH (18 decimals) to wei."""
    try:
        return Web3.to_wei(Decimal(str(amount)), "ether")
    except (ValueError, TypeError, ArithmeticError):
        raise ValidationError(f"{field_name} is not a valid amount: {amount!r}", field_name)


def hash_secret(secret_hex: str) -> str:
    """keccak256 over the raw secret bytes, 0x-prefixed."""
    return Web3.to_hex(Web3.keccak(to_bytes32(secret_hex, "secret")))


def generate_secret() -> Tuple[str, str]:
    """
    Generate a random 32-byte secret and its keccak256 hashlock.

    The hash matches Solidity's keccak256(abi.encodePacked(bytes32 secret)),
    which is what HTLCChronosBridge checks on claim.

    Returns:
        (secret_hex, secret_hash_hex), both 0x-prefixed
    """
    secret = "0x" + secrets.token_bytes(32).hex()
    return secret, hash_secret(secret)


def verify_secret(secret_hex: str, hash_hex: str) -> bool:
    """Check keccak256(secret) == hash. Malformed input is simply False."""
    try:
        expected = to_bytes32(hash_hex, "hash")
        return bytes.fromhex(_strip_0x(hash_secret(secret_hex))) == expected
    except (ValidationError, ValueError, TypeError):
        return False


def chain_to_number(chain: ChainLike) -> int:
    """Protocol chain number (1=arbitrum, 2=solana, 3=ton)."""
    return CHAIN_IDS[_chain(chain)]


def parse_chain(chain: ChainLike) -> ChainId:
    return _chain(chain)


def format_units(value: int, decimals: int) -> str:
    """Integer base units as an exact decimal string (1 wei -> "0.000000000000000001")."""
    value = int(value)
    sign = "-" if value < 0 else ""
    whole, frac = divmod(abs(value), 10 ** decimals)
    if not frac:
        return f"{sign}{whole}"
    return f"{sign}{whole}.{str(frac).zfill(decimals).rstrip('0')}"


# =============================================================================
# Constants
# =============================================================================

CONTRACTS: Dict[str, Dict[str, Dict[str, str]]] = {
    "arbitrum": {
        "testnet": {
            "TrinityConsensusVerifier": "0x59396D58Fa856025bD5249E342729d5550Be151C",
            "TrinityShieldVerifierV2": "0x5E1EE00E5DFa54488AC5052C747B97c7564872F9",
            "TrinityShieldVerifier": "0x2971c0c3139F89808F87b2445e53E5Fb83b6A002",  # deprecated
            "EmergencyMultiSig": "0x066A39Af76b625c1074aE96ce9A111532950Fc41",
            "TrinityKeeperRegistry": "0xAe9bd988011583D87d6bbc206C19e4a9Bda04830",
            "TrinityGovernanceTimelock": "0xf6b9AB802b323f8Be35ca1C733e155D4BdcDb61b",
            "CrossChainMessageRelay": "0xC6F4f855fc690CB52159eE3B13C9d9Fb8D403E59",
            "TrinityExitGateway": "0xE6FeBd695e4b5681DCF274fDB47d786523796C04",
            "TrinityFeeSplitter": "0x4F777c8c7D3Ea270c7c6D9Db8250ceBe1648A058",
            "TrinityRelayerCoordinator": "0x4023B7307BF9e1098e0c34F7E8653a435b20e635",
            "HTLCChronosBridge": "0x82C3AbF6036cEE41E151A90FE00181f6b18af8ca",
            "HTLCArbToL1": "0xaDDAC5670941416063551c996e169b0fa569B8e1",
            "ChronosVaultOptimized": "0xAE408eC592f0f865bA0012C480E8867e12B4F32D",
            "TestERC20": "0x4567853BE0d5780099E3542Df2e00C5B633E0161",
        },
        "mainnet": {},  # Not deployed yet
    },
    "solana": {
        "testnet": {
            "TrinityProgram": "CYaDJYRqm35udQ8vkxoajSER8oaniQUcV8Vvw5BqJyo2",
            "CVTToken": "5g3TkqFxyVe1ismrC5r2QD345CA1YdfWn6s6p4AYNmy4",
            "BridgeProgram": "6wo8Gso3uB8M6t9UGiritdGmc4UTPEtM5NhC6vbb9CdK",
            "VestingProgram": "3dxjcEGP8MurCtodLCJi1V6JBizdRRAYg91nZkhmX1sB",
        },
        "mainnet": {},
    },
    "ton": {
        "testnet": {
            "TrinityConsensus": "EQeGlYzwupSROVWGucOmKyUDbSaKmPfIpHHP5mV73odL8",
            "ChronosVault": "EQjUVidQfn4m-Rougn0fol7ECCthba2HV0M6xz9zAfax4",
            "CrossChainBridge": "EQgWobA9D4u6Xem3B8e6Sde_NEFZYicyy7_5_XvOT18mA",
            "CVTJetton": "EQDJAnXDPT-NivritpEhQeP0XmG20NdeUtxgh4nUiWH-DF7M",
            "CVTBridge": "EQAOJxa1WDjGZ7f3n53JILojhZoDdTOKWl6h41_yOWX3v0tq",
        },
        "mainnet": {},
    },
}

VALIDATORS: Dict[str, Dict[str, str]] = {
    "testnet": {
        "arbitrum": "0x3A92fD5b39Ec9598225DB5b9f15af0523445E3d8",
        "solana": "0x2554324ae222673F4C36D1Ae0E58C19fFFf69cd5",
        "ton": "0x9662e22D1f037C7EB370DD0463c597C6cd69B4c4",
    },
    "mainnet": {
        "arbitrum": "",
        "solana": "",
        "ton": "",
    },
}

RPC_URLS: Dict[str, Dict[str, str]] = {
    "arbitrum": {
        "testnet": "https://sepolia-rollup.arbitrum.io/rpc",
        "mainnet": "https://arb1.arbitrum.io/rpc",
    },
    "solana": {
        "testnet": "https://api.devnet.solana.com",
        "mainnet": "https://api.mainnet-beta.solana.com",
    },
    "ton": {
        "testnet": "https://testnet.toncenter.com/api/v2/jsonRPC",
        "mainnet": "https://toncenter.com/api/v2/jsonRPC",
    },
}

CHAIN_IDS: Dict[ChainId, int] = {
    ChainId.ARBITRUM: 1,
    ChainId.SOLANA: 2,
    ChainId.TON: 3,
}

SECURITY_LAYERS = [
    {"id": 1, "name": "Zero-Knowledge Proof Engine", "type": "groth16"},
    {"id": 2, "name": "Formal Verification Pipeline", "type": "lean4"},
    {"id": 3, "name": "Multi-Party Computation", "type": "mpc"},
    {"id": 4, "name": "Verifiable Delay Functions", "type": "vdf"},
    {"id": 5, "name": "AI + Cryptographic Governance", "type": "ai-governance"},
    {"id": 6, "name": "Quantum-Resistant Cryptography", "type": "pqc"},
    {"id": 7, "name": "Trinity Protocol Consensus", "type": "consensus"},
    {"id": 8, "name": "Trinity Shield TEE", "type": "tee"},
]

CONSENSUS_THRESHOLD = 2
TOTAL_VALIDATORS = 3
ATTESTATION_VALIDITY_HOURS = 24
MAX_QUOTE_AGE_MINUTES = 10

# Default HTLC timelock for REST-created swaps
DEFAULT_TIMELOCK_HOURS = 24

ZERO_ADDRESS = "0x" + "0" * 40


def get_contract_address(chain: ChainLike, network: Union[NetworkType, str], name: str) -> str:
    """Deployed address or "" when the contract is not on that network."""
    chain_key = _chain(chain).value
    network_key = _value(network)
    return CONTRACTS.get(chain_key, {}).get(network_key, {}).get(name, "")
