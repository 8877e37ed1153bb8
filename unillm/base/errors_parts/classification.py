"""
Error classification helpers mapping HTTP statuses and provider error types
to normalized ErrorCode values.

Adapters call :func:`provider_error_from_status` once they have decoded an
error body; the transport calls :func:`classify_exception` for network
exceptions raised by ``httpx``.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from .error_code import ErrorCode, RETRYABLE_CODES
from .provider_error import ProviderError


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    413: ErrorCode.VALIDATION,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
    529: ErrorCode.UNAVAILABLE,  # Anthropic "overloaded"
}

# Provider-supplied error type strings that refine the status-based code.
_PROVIDER_CODE_MAP: Dict[str, ErrorCode] = {
    # OpenAI-style
    "rate_limit_exceeded": ErrorCode.RATE_LIMIT,
    "insufficient_quota": ErrorCode.RATE_LIMIT,
    "invalid_api_key": ErrorCode.AUTH,
    "model_not_found": ErrorCode.NOT_FOUND,
    "context_length_exceeded": ErrorCode.VALIDATION,
    "server_error": ErrorCode.SERVER_ERROR,
    # Anthropic
    "overloaded_error": ErrorCode.UNAVAILABLE,
    "rate_limit_error": ErrorCode.RATE_LIMIT,
    "authentication_error": ErrorCode.AUTH,
    "permission_error": ErrorCode.AUTH,
    "not_found_error": ErrorCode.NOT_FOUND,
    "invalid_request_error": ErrorCode.VALIDATION,
    "request_too_large": ErrorCode.VALIDATION,
    "api_error": ErrorCode.SERVER_ERROR,
    # Gemini (google.rpc status names)
    "RESOURCE_EXHAUSTED": ErrorCode.RATE_LIMIT,
    "UNAUTHENTICATED": ErrorCode.AUTH,
    "PERMISSION_DENIED": ErrorCode.AUTH,
    "INVALID_ARGUMENT": ErrorCode.VALIDATION,
    "FAILED_PRECONDITION": ErrorCode.VALIDATION,
    "NOT_FOUND": ErrorCode.NOT_FOUND,
    "UNAVAILABLE": ErrorCode.UNAVAILABLE,
    "DEADLINE_EXCEEDED": ErrorCode.TIMEOUT,
    "INTERNAL": ErrorCode.SERVER_ERROR,
}


def code_from_status(status: Optional[int]) -> ErrorCode:
    """Map an HTTP status to an :class:`ErrorCode` (``UNKNOWN`` if unmapped).

    Unmapped 5xx statuses are treated as ``SERVER_ERROR`` and unmapped 4xx
    statuses as ``VALIDATION``.
    """
    if status is None:
        return ErrorCode.UNKNOWN
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if 500 <= status < 600:
        return ErrorCode.SERVER_ERROR
    if 400 <= status < 500:
        return ErrorCode.VALIDATION
    return ErrorCode.UNKNOWN


def is_retryable(code: ErrorCode) -> bool:
    """Return True when another attempt may succeed for ``code``."""
    return code in RETRYABLE_CODES


def provider_error_from_status(
    *,
    provider: str,
    status: Optional[int],
    message: str,
    provider_code: Optional[str] = None,
    model: Optional[str] = None,
    raw: Any = None,
) -> ProviderError:
    """Build a :class:`ProviderError` from an HTTP status and decoded payload.

    Precedence:
        1. Provider error type string, when recognized.
        2. HTTP status mapping.
    """
    code = _PROVIDER_CODE_MAP.get(provider_code or "") or code_from_status(status)
    return ProviderError(
        code=code,
        message=message,
        provider=provider,
        model=model,
        retryable=is_retryable(code),
        status=status,
        provider_code=provider_code,
        raw=raw,
    )


def classify_exception(exc: Exception) -> ErrorCode:
    """Classify a network exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Timeout exceptions (httpx and builtin).
        3. Connection/read/write failures (transient).
        4. Other ``httpx`` request errors (invalid URL, protocol misuse).
        5. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, (httpx.NetworkError, httpx.RemoteProtocolError, ConnectionError)):
        return ErrorCode.TRANSIENT
    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol, httpx.LocalProtocolError)):
        return ErrorCode.VALIDATION
    return ErrorCode.UNKNOWN


__all__ = [
    "classify_exception",
    "code_from_status",
    "is_retryable",
    "provider_error_from_status",
    "_HTTP_STATUS_MAP",
]
