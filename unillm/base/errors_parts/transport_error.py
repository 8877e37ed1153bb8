"""Transport-level (network) error type."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .client_error import ClientError
from .error_code import ErrorCode


@dataclass
class TransportError(ClientError):
    """Raised when the network exchange itself fails.

    HTTP error statuses are *not* transport errors; they reach the adapter as
    a response and become `ProviderError`. This type covers connection
    failures, timeouts and broken streams.

    Attributes:
        message: Human-readable message (never contains credentials).
        retryable: Whether re-sending the same request might succeed.
        code: Normalized classification (``timeout``, ``transient``, ...).
        endpoint: Target URL without query string, for diagnostics.
        raw: Original exception for diagnostics.
    """

    message: str
    retryable: bool = False
    code: ErrorCode = ErrorCode.TRANSIENT
    endpoint: Optional[str] = None
    raw: Optional[Exception] = None

    def __str__(self) -> str:
        return f"transport {self.code.value}: {self.message}"


__all__ = ["TransportError"]
