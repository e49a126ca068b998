"""
Error types for chronos SDK.

Every error raised by the SDK derives from SDKError and carries a stable
`code` string so callers can branch without isinstance chains.
"""

from typing import Any, Dict, Optional


class SDKError(Exception):
    """Base class for all SDK errors."""

    def __init__(self, message: str, code: str = "SDK_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ProviderError(SDKError):
    """A chain provider (or the REST transport) failed."""

    def __init__(self, message: str, chain: str, original_error: Any = None):
        super().__init__(message, "PROVIDER_ERROR", {"chain": chain, "original_error": original_error})
        self.chain = chain
        self.original_error = original_error


class ValidationError(SDKError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR", {"field": field})
        self.field = field


class ConsensusError(SDKError):
    def __init__(self, message: str, operation_id: Optional[str] = None,
                 confirmations: Optional[int] = None):
        super().__init__(message, "CONSENSUS_ERROR", {
            "operation_id": operation_id,
            "confirmations": confirmations,
        })
        self.operation_id = operation_id
        self.confirmations = confirmations


class TransactionError(SDKError):
    def __init__(self, message: str, tx_hash: Optional[str] = None, chain: Optional[str] = None):
        super().__init__(message, "TRANSACTION_ERROR", {"tx_hash": tx_hash, "chain": chain})
        self.tx_hash = tx_hash
        self.chain = chain


class TimeoutError(SDKError):
    """Shadows the builtin inside this module; import it qualified."""

    def __init__(self, message: str, operation: Optional[str] = None, timeout: Optional[float] = None):
        super().__init__(message, "TIMEOUT_ERROR", {"operation": operation, "timeout": timeout})
        self.operation = operation
        self.timeout = timeout


class ApiError(SDKError):
    """REST backend answered with an HTTP error or success=false."""

    def __init__(self, message: str, status_code: Optional[int] = None, endpoint: Optional[str] = None):
        super().__init__(message, "API_ERROR", {"status_code": status_code, "endpoint": endpoint})
        self.status_code = status_code
        self.endpoint = endpoint


def is_sdk_error(error: Any) -> bool:
    return isinstance(error, SDKError)


def normalize_error(error: Any) -> SDKError:
    """Coerce anything raised into an SDKError."""
    if isinstance(error, SDKError):
        return error
    if isinstance(error, BaseException):
        return SDKError(str(error), "UNKNOWN_ERROR", {"original_name": type(error).__name__})
    return SDKError(str(error), "UNKNOWN_ERROR")
