"""
REST transport for the Chronos backend.

Every endpoint answers with an envelope:

    {"success": true, "data": ..., "error": null, "timestamp": "..."}

ApiClient unwraps it and turns transport, HTTP and envelope failures into
SDK errors so the domain clients only deal with `data`.
"""

import logging
from typing import Optional, Dict, Any

import httpx

from .config import SDKConfig
from .errors import ApiError, ProviderError, TimeoutError

log = logging.getLogger(__name__)


class ApiClient:
    """Thin synchronous wrapper over httpx.Client."""

    def __init__(self, config: SDKConfig, transport: Optional[httpx.BaseTransport] = None):
        self.config = config
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    @property
    def client(self) -> httpx.Client:
        """Lazy-load the httpx client (reused across calls)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                base_url=self.config.api_base_url,
                headers=self._headers(),
                timeout=self.config.timeout,
                transport=self._transport,
            )
        return self._client

    def update_config(self, config: SDKConfig):
        """Swap config; the next request opens a client with the new settings."""
        self.close()
        self.config = config

    def request(self, method: str, endpoint: str, json: Any = None,
                params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Call an endpoint and return the envelope's `data`.

        Raises:
            ApiError: HTTP status >= 400, undecodable body, or success=false
            TimeoutError: request exceeded config.timeout
            ProviderError: connection-level failure
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        if self.config.debug:
            log.debug(f"{method} {endpoint} params={params} body={json}")

        try:
            response = self.client.request(method, endpoint, json=json, params=params)
        except httpx.TimeoutException as e:
            raise TimeoutError(f"Request timed out: {method} {endpoint}",
                               operation=endpoint, timeout=self.config.timeout) from e
        except httpx.HTTPError as e:
            raise ProviderError(f"API request failed: {e}", "api", e) from e

        if response.status_code >= 400:
            message = response.reason_phrase or f"HTTP {response.status_code}"
            try:
                body = response.json()
                if isinstance(body, dict) and body.get("error"):
                    message = body["error"]
            except ValueError:
                pass
            raise ApiError(f"API request failed: {message}", response.status_code, endpoint)

        try:
            payload = response.json()
        except ValueError as e:
            raise ApiError(f"Invalid JSON response: {e}", response.status_code, endpoint) from e

        if not isinstance(payload, dict) or "success" not in payload:
            raise ApiError("Malformed API envelope", response.status_code, endpoint)
        if not payload["success"]:
            raise ApiError(payload.get("error") or "Unknown error", response.status_code, endpoint)

        return payload.get("data")

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", endpoint, params=params)

    def post(self, endpoint: str, json: Any = None) -> Any:
        return self.request("POST", endpoint, json=json)

    def close(self):
        if self._client is not None and not self._client.is_closed:
            self._client.close()
        self._client = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
