"""
Structured provider error exception type.

Wraps provider error payloads and HTTP error statuses with a normalized
`ErrorCode` for consistent handling, retry logic, and structured logging.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .client_error import ClientError
from .error_code import ErrorCode


@dataclass
class ProviderError(ClientError):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"openai"``).
        model: Optional model name associated with the failure.
        retryable: Whether the facade may re-send the request.
        status: HTTP status code when the error came from an HTTP response.
        provider_code: Provider's own error type/code string, when present.
        raw: Optional decoded error payload for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    status: Optional[int] = None
    provider_code: Optional[str] = None
    raw: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
