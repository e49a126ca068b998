"""
Vault RPC client for ChronosVaultOptimized (ERC-4626) on Arbitrum.

Amounts are integer base units of the underlying asset; results come
back as decimal strings.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Any, Union

from ..chains.multichain import ChainRPCClient
from ..core import checksum_address
from ..errors import ValidationError

log = logging.getLogger(__name__)

CONTRACT_NAME = "ChronosVaultOptimized"

Amount = Union[int, str]


def _uint(name: str, inputs=()):
    return {
        "name": name,
        "type": "function",
        "stateMutability": "view",
        "inputs": list(inputs),
        "outputs": [{"name": "", "type": "uint256"}]
    }


CHRONOS_VAULT_OPTIMIZED_ABI = [
    {
        "name": "asset",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "address"}]
    },
    _uint("totalAssets"),
    _uint("totalSupply"),
    _uint("balanceOf", [{"name": "account", "type": "address"}]),
    _uint("convertToAssets", [{"name": "shares", "type": "uint256"}]),
    _uint("convertToShares", [{"name": "assets", "type": "uint256"}]),
    _uint("maxDeposit", [{"name": "receiver", "type": "address"}]),
    _uint("maxWithdraw", [{"name": "owner", "type": "address"}]),
    {
        "name": "deposit",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "assets", "type": "uint256"},
            {"name": "receiver", "type": "address"}
        ],
        "outputs": [{"name": "shares", "type": "uint256"}]
    },
    {
        "name": "mint",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "shares", "type": "uint256"},
            {"name": "receiver", "type": "address"}
        ],
        "outputs": [{"name": "assets", "type": "uint256"}]
    },
    {
        "name": "withdraw",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "assets", "type": "uint256"},
            {"name": "receiver", "type": "address"},
            {"name": "owner", "type": "address"}
        ],
        "outputs": [{"name": "shares", "type": "uint256"}]
    },
    {
        "name": "redeem",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "shares", "type": "uint256"},
            {"name": "receiver", "type": "address"},
            {"name": "owner", "type": "address"}
        ],
        "outputs": [{"name": "assets", "type": "uint256"}]
    },
    {
        "name": "consensusRequired",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "bool"}]
    },
    {
        "name": "trinityVerifier",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "address"}]
    }
]


def _units(value: Amount, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer amount of base units", field_name)


@dataclass
class VaultInfo:
    asset: str
    total_assets: str
    total_supply: str
    consensus_required: bool
    trinity_verifier: str


class VaultRPCClient(ChainRPCClient):
    """ERC-4626 vault calls. Every method takes an optional vault address."""

    def _address(self, vault_address: Optional[str]) -> str:
        if vault_address:
            return checksum_address(vault_address, "vault_address")
        return self._contract(CONTRACT_NAME)

    def _call(self, vault_address: Optional[str], method: str, *args) -> Any:
        return self._require_arbitrum().call_contract_method(
            self._address(vault_address), CHRONOS_VAULT_OPTIMIZED_ABI, method, list(args)
        )

    def _send(self, vault_address: Optional[str], method: str, *args) -> str:
        tx = self._transact(
            self._address(vault_address), CHRONOS_VAULT_OPTIMIZED_ABI, method, list(args)
        )
        log.info(f"Vault {method} TX: {tx.hash}")
        return tx.hash

    def get_vault_info(self, vault_address: Optional[str] = None) -> VaultInfo:
        return VaultInfo(
            asset=self._call(vault_address, "asset"),
            total_assets=str(self._call(vault_address, "totalAssets")),
            total_supply=str(self._call(vault_address, "totalSupply")),
            consensus_required=bool(self._call(vault_address, "consensusRequired")),
            trinity_verifier=self._call(vault_address, "trinityVerifier"),
        )

    def get_balance(self, account: str, vault_address: Optional[str] = None) -> str:
        """Share balance of `account`."""
        return str(self._call(vault_address, "balanceOf", checksum_address(account, "account")))

    def convert_to_assets(self, shares: Amount, vault_address: Optional[str] = None) -> str:
        return str(self._call(vault_address, "convertToAssets", _units(shares, "shares")))

    def convert_to_shares(self, assets: Amount, vault_address: Optional[str] = None) -> str:
        return str(self._call(vault_address, "convertToShares", _units(assets, "assets")))

    def max_deposit(self, receiver: str, vault_address: Optional[str] = None) -> str:
        return str(self._call(vault_address, "maxDeposit", checksum_address(receiver, "receiver")))

    def max_withdraw(self, owner: str, vault_address: Optional[str] = None) -> str:
        return str(self._call(vault_address, "maxWithdraw", checksum_address(owner, "owner")))

    def deposit(self, assets: Amount, receiver: str, vault_address: Optional[str] = None) -> str:
        """Deposit assets (caller must have approved the vault). Returns tx hash."""
        return self._send(vault_address, "deposit", _units(assets, "assets"),
                          checksum_address(receiver, "receiver"))

    def withdraw(self, assets: Amount, receiver: str, owner: str,
                 vault_address: Optional[str] = None) -> str:
        return self._send(vault_address, "withdraw", _units(assets, "assets"),
                          checksum_address(receiver, "receiver"), checksum_address(owner, "owner"))

    def redeem(self, shares: Amount, receiver: str, owner: str,
               vault_address: Optional[str] = None) -> str:
        return self._send(vault_address, "redeem", _units(shares, "shares"),
                          checksum_address(receiver, "receiver"), checksum_address(owner, "owner"))
