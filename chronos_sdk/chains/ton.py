"""
TON provider for chronos SDK.

Talks to a toncenter v2 JSON-RPC endpoint over httpx. Responses look like
{"ok": true, "result": ...} or {"ok": false, "error": "...", "code": N}.
"""

import logging
from typing import Optional, Dict, Any, List

import httpx

from ..config import TonConfig
from ..core import format_units
from ..errors import ProviderError

log = logging.getLogger(__name__)

CHAIN = "ton"
TON_DECIMALS = 9


class TonProvider:
    """toncenter JSON-RPC client."""

    def __init__(self, config: TonConfig, transport: Optional[httpx.BaseTransport] = None):
        self.config = config
        self.endpoint = config.endpoint
        self.network = config.network
        headers = {"X-API-Key": config.api_key} if config.api_key else {}
        self._client = httpx.Client(timeout=config.timeout, headers=headers, transport=transport)

    def _call_rpc(self, method: str, params: Optional[Dict[str, Any]] = None) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params or {},
        }

        try:
            response = self._client.post(self.endpoint, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise ProviderError(f"RPC call failed: {method}", CHAIN, e) from e
        except ValueError as e:
            raise ProviderError(f"Invalid JSON response: {method}", CHAIN, e) from e

        if not data.get("ok", "error" not in data):
            raise ProviderError(f"RPC error: {data.get('error')}", CHAIN, data)

        return data.get("result")

    def get_balance(self, address: str) -> str:
        """Balance in TON as a decimal string."""
        nanoton = int(self._call_rpc("getAddressBalance", {"address": address}))
        return format_units(nanoton, TON_DECIMALS)

    def run_get_method(self, address: str, method: str, stack: Optional[List] = None) -> List:
        """Run a contract get-method and return its result stack."""
        result = self._call_rpc("runGetMethod", {
            "address": address,
            "method": method,
            "stack": stack or [],
        })
        exit_code = result.get("exit_code", 0)
        if exit_code not in (0, 1):
            raise ProviderError(f"Get-method {method} exited with {exit_code}", CHAIN, result)
        return result.get("stack", [])

    def get_contract_state(self, address: str) -> Dict[str, Any]:
        return self._call_rpc("getAddressInformation", {"address": address})

    def get_transactions(self, address: str, limit: int = 10) -> List[Dict[str, Any]]:
        return self._call_rpc("getTransactions", {"address": address, "limit": limit})

    def is_contract_deployed(self, address: str) -> bool:
        state = self._call_rpc("getAddressState", {"address": address})
        return state == "active"

    def get_masterchain_info(self) -> Dict[str, Any]:
        return self._call_rpc("getMasterchainInfo")

    def send_boc(self, boc_base64: str) -> Dict[str, Any]:
        """Broadcast a signed external message (base64 BOC)."""
        result = self._call_rpc("sendBoc", {"boc": boc_base64})
        log.info("TON BOC submitted")
        return result

    def close(self):
        self._client.close()
