"""
Vault REST client.
"""

import time
import logging
from datetime import datetime
from typing import Optional, Dict, Any, List

from ..api import ApiClient
from ..config import SDKConfig
from ..core import ChainLike, parse_chain, Vault, get_contract_address
from ..errors import ValidationError

log = logging.getLogger(__name__)

VAULT_TYPES: List[Dict[str, Any]] = [
    {
        "type": "standard",
        "name": "Standard Vault",
        "description": "Basic secure storage with Trinity consensus protection",
        "features": ["2-of-3 consensus", "Cross-chain verification", "Emergency recovery"],
    },
    {
        "type": "erc4626",
        "name": "Investment Vault",
        "description": "ERC-4626 compliant vault for yield strategies",
        "features": ["Yield optimization", "Auto-compounding", "Standardized interface"],
    },
    {
        "type": "timelock",
        "name": "Time-Lock Vault",
        "description": "Vault with configurable time-based unlock conditions",
        "features": ["VDF time-locks", "Scheduled releases", "Inheritance planning"],
    },
    {
        "type": "multisig",
        "name": "Multi-Signature Vault",
        "description": "Vault requiring multiple signers for operations",
        "features": ["M-of-N signatures", "Role-based access", "Corporate treasury"],
    },
]

VALID_VAULT_TYPES = tuple(t["type"] for t in VAULT_TYPES)


def _parse_timestamp(value: Any) -> float:
    """Unix seconds from an ISO-8601 string or a number."""
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text).timestamp()


class VaultClient:
    """REST client for vault management."""

    def __init__(self, config: SDKConfig, api: Optional[ApiClient] = None):
        self.config = config
        self.api = api or ApiClient(config)

    def update_config(self, config: SDKConfig):
        self.config = config
        self.api.update_config(config)

    def create_vault(self, name: str, vault_type: str, chain: ChainLike,
                     deposit_amount: Optional[str] = None,
                     beneficiaries: Optional[List[str]] = None,
                     time_lock_duration: Optional[int] = None,
                     required_signatures: Optional[int] = None) -> Vault:
        """
        Create a vault.

        Raises:
            ValidationError: unknown vault type or chain
        """
        if vault_type not in VALID_VAULT_TYPES:
            raise ValidationError(f"Unknown vault type: {vault_type}", "vault_type")
        chain_id = parse_chain(chain)

        payload: Dict[str, Any] = {
            "name": name,
            "vaultType": vault_type,
            "chain": chain_id.value,
        }
        if deposit_amount is not None:
            payload["depositAmount"] = str(deposit_amount)
        if beneficiaries:
            payload["beneficiaries"] = list(beneficiaries)
        if time_lock_duration is not None:
            payload["timeLockDuration"] = time_lock_duration
        if required_signatures is not None:
            payload["requiredSignatures"] = required_signatures

        vault = Vault.from_dict(self.api.post("/api/vaults/create", json=payload))
        log.info(f"Vault created: {vault.id} ({vault_type} on {chain_id.value})")
        return vault

    def get_vault(self, vault_id: str) -> Vault:
        return Vault.from_dict(self.api.get(f"/api/vaults/{vault_id}"))

    def get_vaults_by_owner(self, owner: str) -> List[Vault]:
        return [Vault.from_dict(v) for v in self.api.get(f"/api/vaults/owner/{owner}")]

    def get_recent_vault_operations(self, limit: int = 10) -> List[Vault]:
        return [Vault.from_dict(v) for v in self.api.get("/api/scanner/vaults", params={"limit": limit})]

    def deposit(self, vault_id: str, amount: str, tx_hash: Optional[str] = None) -> Vault:
        """Record a deposit; pass the on-chain tx hash when there is one."""
        payload = {"amount": str(amount)}
        if tx_hash:
            payload["txHash"] = tx_hash
        vault = Vault.from_dict(self.api.post(f"/api/vaults/{vault_id}/deposit", json=payload))
        log.info(f"Deposited {amount} into vault {vault_id}")
        return vault

    def withdraw(self, vault_id: str, amount: str, recipient: str) -> Vault:
        if not recipient:
            raise ValidationError("recipient is required", "recipient")
        vault = Vault.from_dict(self.api.post(f"/api/vaults/{vault_id}/withdraw", json={
            "amount": str(amount),
            "recipient": recipient,
        }))
        log.info(f"Withdrew {amount} from vault {vault_id} to {recipient}")
        return vault

    def lock_vault(self, vault_id: str, unlock_time: int) -> Vault:
        """Lock until `unlock_time` (Unix seconds)."""
        return Vault.from_dict(self.api.post(f"/api/vaults/{vault_id}/lock", json={"unlockTime": unlock_time}))

    def unlock_vault(self, vault_id: str) -> Vault:
        return Vault.from_dict(self.api.post(f"/api/vaults/{vault_id}/unlock"))

    def get_contract_addresses(self) -> Dict[str, str]:
        network = self.config.network
        return {
            "arbitrum": get_contract_address("arbitrum", network, "ChronosVaultOptimized"),
            "solana": "",  # No vault program on Solana yet
            "ton": get_contract_address("ton", network, "ChronosVault"),
        }

    def get_vault_types(self) -> List[Dict[str, Any]]:
        return [dict(t, features=list(t["features"])) for t in VAULT_TYPES]

    def can_unlock(self, vault: Vault, now: Optional[float] = None) -> bool:
        """Locked, and either no unlock time or it has passed."""
        if vault.status != "locked":
            return False
        if not vault.unlock_at:
            return True
        now = time.time() if now is None else now
        return now >= _parse_timestamp(vault.unlock_at)
