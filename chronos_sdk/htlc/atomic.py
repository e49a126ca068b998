"""
Client-side atomic swaps.

The secret is generated here and only its keccak256 hash is sent to the
backend. The flow is create -> wait for Trinity 2-of-3 consensus on the
locks -> claim by revealing the secret.

Unlike the /api/htlc endpoints, the atomic-swap service answers with
bare JSON objects (no success/data envelope).
"""

import time
import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any, Callable

import httpx

from ..config import SDKConfig
from ..core import _get, generate_secret, CONSENSUS_THRESHOLD
from ..errors import ApiError, ProviderError, SDKError, TimeoutError
from .secret_store import SecretStore

log = logging.getLogger(__name__)

ATOMIC_SWAP_PATH = "/api/atomic-swap"

DEFAULT_POLL_INTERVAL = 5       # seconds
DEFAULT_MONITOR_TIMEOUT = 600   # 10 minutes

CONSENSUS_ACHIEVED = "consensus_achieved"


@dataclass
class SwapParams:
    user_address: str
    from_token: str
    to_token: str
    from_amount: str
    min_amount: str
    from_network: str
    to_network: str

    def to_payload(self) -> Dict[str, str]:
        return {
            "userAddress": self.user_address,
            "fromToken": self.from_token,
            "toToken": self.to_token,
            "fromAmount": self.from_amount,
            "minAmount": self.min_amount,
            "fromNetwork": self.from_network,
            "toNetwork": self.to_network,
        }


@dataclass
class SwapOrder:
    """Result of create_swap. `secret` must be kept by the caller."""
    order_id: str
    secret: str
    secret_hash: str
    timelock: int


@dataclass
class OrderStatus:
    id: str
    status: str             # pending | locked | consensus_pending | consensus_achieved | executed | refunded
    valid_proof_count: int
    consensus_required: int
    secret_hash: str
    timelock: int
    from_token: str
    to_token: str
    from_amount: str
    min_amount: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrderStatus":
        return cls(
            id=str(_get(data, "id", default="")),
            status=_get(data, "status", default="pending"),
            valid_proof_count=int(_get(data, "validProofCount", "valid_proof_count", default=0)),
            consensus_required=int(_get(data, "consensusRequired", "consensus_required",
                                        default=CONSENSUS_THRESHOLD)),
            secret_hash=_get(data, "secretHash", "secret_hash", default=""),
            timelock=int(_get(data, "timelock", default=0)),
            from_token=_get(data, "fromToken", "from_token", default=""),
            to_token=_get(data, "toToken", "to_token", default=""),
            from_amount=str(_get(data, "fromAmount", "from_amount", default="0")),
            min_amount=str(_get(data, "minAmount", "min_amount", default="0")),
        )


ProgressCallback = Callable[[str, Optional[Dict[str, Any]]], None]


class AtomicSwapClient:
    """
    Atomic swaps with secrets held client-side.

    Args:
        config: SDK config (base URL, key, timeout)
        store: Where secrets are kept until claim (in-memory if omitted)
        base_path: Service path under config.api_base_url
    """

    def __init__(self, config: SDKConfig, store: Optional[SecretStore] = None,
                 base_path: str = ATOMIC_SWAP_PATH,
                 transport: Optional[httpx.BaseTransport] = None):
        self.config = config
        self.store = store if store is not None else SecretStore(path=None)
        self.base_url = config.api_base_url + base_path
        headers = {"Content-Type": "application/json"}
        if config.api_key:
            headers["Authorization"] = f"Bearer {config.api_key}"
        self._client = httpx.Client(headers=headers, timeout=config.timeout, transport=transport)

    def _request(self, method: str, path: str, json: Any = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self._client.request(method, url, json=json)
        except httpx.TimeoutException as e:
            raise TimeoutError(f"Request timed out: {method} {path}",
                               operation=path, timeout=self.config.timeout) from e
        except httpx.HTTPError as e:
            raise ProviderError(f"Atomic swap request failed: {e}", "api", e) from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code >= 400:
            message = (body.get("message") or body.get("error")) if isinstance(body, dict) else None
            raise ApiError(message or f"HTTP {response.status_code}", response.status_code, path)
        if not isinstance(body, dict):
            raise ApiError("Unexpected response body", response.status_code, path)
        return body

    # =========================================================================
    # Swap lifecycle
    # =========================================================================

    def generate_secret(self):
        return generate_secret()

    def create_swap(self, params: SwapParams) -> SwapOrder:
        """Create an order. Only the secret hash is sent; the secret is stored locally."""
        secret, secret_hash = generate_secret()

        payload = params.to_payload()
        payload["secretHash"] = secret_hash
        order = self._request("POST", "/create", json=payload)

        order_id = str(order.get("id", ""))
        if not order_id:
            raise ApiError("Create response missing order id", None, "/create")

        self.store.put(order_id, secret)
        log.info(f"Atomic swap created: {order_id} (hash {secret_hash[:18]}...)")

        return SwapOrder(
            order_id=order_id,
            secret=secret,
            secret_hash=order.get("secretHash", secret_hash),
            timelock=int(order.get("timelock", 0)),
        )

    def get_swap_status(self, order_id: str) -> OrderStatus:
        return OrderStatus.from_dict(self._request("GET", f"/{order_id}/status"))

    def monitor_consensus(self, order_id: str,
                          on_progress: Optional[Callable[[OrderStatus], None]] = None,
                          poll_interval: float = DEFAULT_POLL_INTERVAL,
                          timeout: float = DEFAULT_MONITOR_TIMEOUT) -> OrderStatus:
        """
        Poll until the order reaches consensus_achieved.

        Raises:
            TimeoutError: not achieved within `timeout` seconds
        """
        start = time.time()
        while True:
            status = self.get_swap_status(order_id)
            if on_progress:
                on_progress(status)

            if status.status == CONSENSUS_ACHIEVED:
                log.info(f"Consensus achieved for {order_id} "
                         f"({status.valid_proof_count}/{status.consensus_required})")
                return status

            if time.time() - start > timeout:
                raise TimeoutError("Consensus monitoring timeout",
                                   operation="monitor_consensus", timeout=timeout)
            time.sleep(poll_interval)

    def claim_htlc(self, order_id: str, secret: Optional[str] = None) -> str:
        """
        Reveal the secret and claim. Returns the claim tx hash.

        The stored secret is removed after a successful claim.
        """
        if not secret:
            secret = self.store.get(order_id)
            if not secret:
                raise SDKError(f"Secret not found for {order_id} - was it stored?")

        result = self._request("POST", f"/{order_id}/claim", json={"secret": secret})
        tx_hash = result.get("txHash", "")

        self.store.delete(order_id)
        log.info(f"Atomic swap claimed: {order_id} (tx {tx_hash})")
        return tx_hash

    def execute_swap(self, params: SwapParams,
                     on_progress: Optional[ProgressCallback] = None) -> str:
        """
        Full flow: create -> monitor -> claim.

        on_progress receives (step, data) with step one of creating, created,
        monitoring, consensus_progress, consensus_achieved, claiming,
        completed, error.
        """
        def emit(step: str, data: Optional[Dict[str, Any]] = None):
            if on_progress:
                on_progress(step, data)

        try:
            emit("creating")
            order = self.create_swap(params)
            emit("created", {"order_id": order.order_id, "secret_hash": order.secret_hash})

            emit("monitoring")
            self.monitor_consensus(order.order_id, lambda s: emit("consensus_progress", {
                "valid_proofs": s.valid_proof_count,
                "required": s.consensus_required,
            }))
            emit("consensus_achieved")

            emit("claiming")
            tx_hash = self.claim_htlc(order.order_id, order.secret)
            emit("completed", {"tx_hash": tx_hash})
            return tx_hash
        except SDKError as e:
            emit("error", {"error": str(e)})
            raise

    def close(self):
        self._client.close()
