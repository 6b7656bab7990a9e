"""Error types raised by the aggregation engine and protocol adapters."""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Categories of SDK errors."""

    FAILED_HTTP_REQUEST = "FAILED_HTTP_REQUEST"
    MISSING_RPC_URL = "MISSING_RPC_URL"
    INVALID_PARAMS = "INVALID_PARAMS"
    PRICE_NOT_FOUND = "PRICE_NOT_FOUND"
    QUOTE_NOT_FOUND = "QUOTE_NOT_FOUND"
    MISSING_TRANSACTION_DATA = "MISSING_TRANSACTION_DATA"
    MISSING_INITIALIZATION = "MISSING_INITIALIZATION_PARAMS"
    TIMEOUT = "TIMEOUT"


class IntentsError(Exception):
    """Base exception for price/quote aggregation.

    The message is always ``"<KIND>: <concise message>"``; structured context
    lives in ``payload``.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str = "An error occurred",
        payload: Optional[dict[str, Any]] = None,
    ):
        super().__init__(f"{kind.value}: {message}")
        self.kind = kind
        self.detail = message
        self.payload = payload or {}

    def to_dict(self) -> dict:
        """JSON-friendly representation."""
        return {
            "type": self.kind.value,
            "message": str(self),
            "payload": self.payload,
        }


class NoCompatibleProtocolsError(IntentsError):
    """Raised when no registered protocol can serve the requested route."""

    def __init__(self, network_in: int, network_out: int, operation: str = "price"):
        super().__init__(
            ErrorKind.INVALID_PARAMS,
            f"No compatible protocols found for {operation} from chain "
            f"{network_in} to chain {network_out}",
            payload={"network_in": network_in, "network_out": network_out},
        )
        self.network_in = network_in
        self.network_out = network_out


class RequestTimeoutError(IntentsError):
    """Raised when a protocol call exceeds the configured timeout."""

    def __init__(self, protocol: str, timeout_ms: int):
        super().__init__(
            ErrorKind.TIMEOUT,
            f"Request timeout after {timeout_ms}ms",
            payload={"protocol": protocol, "timeout_ms": timeout_ms},
        )
        self.protocol = protocol
        self.timeout_ms = timeout_ms


class RpcError(IntentsError):
    """Raised when a read-only JSON-RPC call fails."""

    def __init__(self, message: str, payload: Optional[dict[str, Any]] = None):
        super().__init__(ErrorKind.FAILED_HTTP_REQUEST, message, payload)
