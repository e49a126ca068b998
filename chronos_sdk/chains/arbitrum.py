"""
Arbitrum provider for chronos SDK.

Wraps web3.py for contract reads and eth-account for signing. All Trinity
contracts (consensus verifier, HTLC bridge, vault, relay, exit gateway)
live on Arbitrum, so every *RPC client goes through this class.
"""

import logging
from typing import Optional, Dict, Any, List
from dataclasses import dataclass, field

from web3 import Web3

from ..config import ArbitrumConfig
from ..core import checksum_address, parse_ether, format_units
from ..errors import SDKError, ProviderError, TransactionError

log = logging.getLogger(__name__)

CHAIN = "arbitrum"

# Bumped gas price so testnet txs don't sit in the mempool
GAS_PRICE_MULTIPLIER = 1.1
RECEIPT_TIMEOUT = 120  # seconds


@dataclass
class TransactionResult:
    """Outcome of a mined transaction."""
    hash: str
    block_number: int
    status: str             # "success" | "failed"
    gas_used: str
    logs: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status == "success"


def _receipt_to_result(receipt) -> TransactionResult:
    logs = []
    for entry in receipt.get("logs", []):
        logs.append({
            "address": entry["address"],
            "topics": [Web3.to_hex(t) for t in entry["topics"]],
            "data": Web3.to_hex(entry["data"]) if entry.get("data") else "0x",
        })
    return TransactionResult(
        hash=Web3.to_hex(receipt["transactionHash"]),
        block_number=int(receipt["blockNumber"]),
        status="success" if receipt["status"] == 1 else "failed",
        gas_used=str(receipt["gasUsed"]),
        logs=logs,
    )


class ArbitrumProvider:
    """
    Arbitrum JSON-RPC provider.

    Reads work without a key; sending transactions requires
    config.private_key.
    """

    def __init__(self, config: ArbitrumConfig):
        self.config = config
        self.chain_id = config.chain_id
        self._web3 = None
        self._account = None

        if config.private_key:
            from eth_account import Account
            key = config.private_key
            if not key.startswith("0x"):
                key = "0x" + key
            try:
                self._account = Account.from_key(key)
            except (ValueError, TypeError) as e:
                raise SDKError("Invalid Arbitrum private key") from e

    @property
    def web3(self) -> Web3:
        """Lazy-load web3 instance."""
        if self._web3 is None:
            self._web3 = Web3(Web3.HTTPProvider(
                self.config.rpc_url,
                request_kwargs={"timeout": self.config.timeout},
            ))
        return self._web3

    @property
    def has_signer(self) -> bool:
        return self._account is not None

    # =========================================================================
    # Basic Operations
    # =========================================================================

    def get_block_number(self) -> int:
        try:
            return self.web3.eth.block_number
        except Exception as e:
            raise ProviderError("Failed to get block number", CHAIN, e) from e

    def get_balance(self, address: str) -> str:
        """ETH balance as a decimal string (not wei)."""
        address = checksum_address(address)
        try:
            wei = self.web3.eth.get_balance(address)
        except Exception as e:
            raise ProviderError("Failed to get balance", CHAIN, e) from e
        return format_units(wei, 18)

    def get_signer_address(self) -> str:
        if self._account is None:
            raise SDKError("No signer configured - provide private_key in config")
        return self._account.address

    # =========================================================================
    # Contract Calls
    # =========================================================================

    def get_contract(self, address: str, abi: List[Dict[str, Any]]):
        return self.web3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

    def call_contract_method(self, address: str, abi: List[Dict[str, Any]],
                             method: str, args: Optional[List[Any]] = None) -> Any:
        """eth_call a view method and return the decoded output."""
        try:
            contract = self.get_contract(address, abi)
            return getattr(contract.functions, method)(*(args or [])).call()
        except Exception as e:
            raise ProviderError(f"Failed to call {method}", CHAIN, e) from e

    def estimate_gas(self, address: str, abi: List[Dict[str, Any]], method: str,
                     args: Optional[List[Any]] = None, value_wei: int = 0) -> int:
        try:
            contract = self.get_contract(address, abi)
            tx = {"value": value_wei}
            if self._account is not None:
                tx["from"] = self._account.address
            return getattr(contract.functions, method)(*(args or [])).estimate_gas(tx)
        except Exception as e:
            raise ProviderError(f"Gas estimation failed for {method}", CHAIN, e) from e

    def send_transaction(self, address: str, abi: List[Dict[str, Any]], method: str,
                         args: Optional[List[Any]] = None,
                         value_eth: Optional[str] = None,
                         value_wei: Optional[int] = None) -> TransactionResult:
        """
        Build, sign, broadcast and wait for a contract call.

        Args:
            address: Contract address
            abi: Contract ABI
            method: Function name
            args: Positional arguments
            value_eth: Native value as decimal ETH string (payable methods)
            value_wei: Native value in wei (takes precedence over value_eth)

        Returns:
            TransactionResult once mined

        Raises:
            TransactionError: mined but reverted
        """
        if self._account is None:
            raise SDKError("No signer configured - provide private_key to send transactions")

        if value_wei is None:
            value_wei = parse_ether(value_eth, "value_eth") if value_eth else 0

        try:
            w3 = self.web3
            contract = self.get_contract(address, abi)
            sender = self._account.address

            fn = getattr(contract.functions, method)(*(args or []))
            nonce = w3.eth.get_transaction_count(sender, "pending")
            gas_price = int(w3.eth.gas_price * GAS_PRICE_MULTIPLIER)
            gas = fn.estimate_gas({"from": sender, "value": value_wei})

            tx = fn.build_transaction({
                "from": sender,
                "nonce": nonce,
                "gas": int(gas * 1.2),
                "gasPrice": gas_price,
                "value": value_wei,
                "chainId": self.chain_id,
            })

            signed = self._account.sign_transaction(tx)
            tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
            log.info(f"{method} TX: {Web3.to_hex(tx_hash)}")

            receipt = w3.eth.wait_for_transaction_receipt(tx_hash, timeout=RECEIPT_TIMEOUT)
        except Exception as e:
            raise ProviderError(f"Transaction {method} failed", CHAIN, e) from e

        result = _receipt_to_result(receipt)
        if not result.success:
            log.error(f"{method} TX reverted: {result.hash}")
            raise TransactionError(f"{method} reverted", result.hash, CHAIN)
        return result

    def wait_for_transaction(self, tx_hash: str, timeout: int = RECEIPT_TIMEOUT) -> TransactionResult:
        try:
            receipt = self.web3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
        except Exception as e:
            raise ProviderError("Failed to wait for transaction", CHAIN, e) from e
        return _receipt_to_result(receipt)
