"""
Solana RPC provider for chronos SDK.

Plain JSON-RPC over httpx. Only reads and broadcast of already-signed
transactions; the Trinity validator program is driven by the backend.
"""

import logging
from typing import Optional, Dict, Any, List

import httpx

from ..config import SolanaConfig
from ..errors import ProviderError

log = logging.getLogger(__name__)

CHAIN = "solana"
LAMPORTS_PER_SOL = 1_000_000_000


class SolanaProvider:
    """Solana JSON-RPC client."""

    def __init__(self, config: SolanaConfig, transport: Optional[httpx.BaseTransport] = None):
        self.config = config
        self.rpc_url = config.rpc_url
        self.commitment = config.commitment
        self._client = httpx.Client(timeout=config.timeout, transport=transport)
        self._request_id = 0

    def _call_rpc(self, method: str, params: Optional[List] = None) -> Any:
        """Make a JSON-RPC call and return `result`."""
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params or [],
        }

        try:
            response = self._client.post(self.rpc_url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise ProviderError(f"RPC call failed: {method}", CHAIN, e) from e
        except ValueError as e:
            raise ProviderError(f"Invalid JSON response: {method}", CHAIN, e) from e

        if "error" in data:
            raise ProviderError(f"RPC error: {data['error']}", CHAIN, data["error"])

        return data.get("result")

    def _commitment(self) -> Dict[str, str]:
        return {"commitment": self.commitment}

    # =========================================================================
    # Basic Operations
    # =========================================================================

    def get_slot(self) -> int:
        return int(self._call_rpc("getSlot", [self._commitment()]))

    def get_balance(self, address: str) -> float:
        """Balance in SOL (not lamports)."""
        result = self._call_rpc("getBalance", [address, self._commitment()])
        lamports = result["value"] if isinstance(result, dict) else result
        return lamports / LAMPORTS_PER_SOL

    def get_account_info(self, address: str) -> Optional[Dict[str, Any]]:
        """Account info (base64 data) or None if the account doesn't exist."""
        result = self._call_rpc("getAccountInfo", [
            address,
            {"encoding": "base64", "commitment": self.commitment},
        ])
        return result.get("value") if result else None

    def get_latest_blockhash(self) -> str:
        result = self._call_rpc("getLatestBlockhash", [self._commitment()])
        return result["value"]["blockhash"]

    def get_signature_status(self, signature: str) -> Optional[Dict[str, Any]]:
        result = self._call_rpc("getSignatureStatuses", [
            [signature],
            {"searchTransactionHistory": True},
        ])
        statuses = result.get("value") or [None]
        return statuses[0]

    # =========================================================================
    # Transaction Operations
    # =========================================================================

    def send_raw_transaction(self, signed_tx_base64: str) -> str:
        """Broadcast a signed, base64-serialized transaction. Returns signature."""
        return self._call_rpc("sendTransaction", [
            signed_tx_base64,
            {"encoding": "base64", "preflightCommitment": self.commitment},
        ])

    def request_airdrop(self, address: str, lamports: int) -> str:
        """Devnet/testnet only."""
        signature = self._call_rpc("requestAirdrop", [address, lamports])
        log.info(f"Airdrop requested: {lamports} lamports to {address[:8]}... ({signature})")
        return signature

    def close(self):
        self._client.close()
