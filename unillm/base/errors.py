"""Unified client error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``unillm.base.errors_parts`` to maintain a stable import path while
enforcing the one-class-per-file governance rule.
"""

from .errors_parts import (
    ClientError,
    ConfigError,
    ErrorCode,
    InvalidRequest,
    MalformedResponse,
    ProviderError,
    RETRYABLE_CODES,
    TransportError,
    UnsupportedParameter,
    classify_exception,
    code_from_status,
    is_retryable,
    provider_error_from_status,
)

__all__ = [
    "ClientError",
    "ConfigError",
    "ErrorCode",
    "InvalidRequest",
    "MalformedResponse",
    "ProviderError",
    "RETRYABLE_CODES",
    "TransportError",
    "UnsupportedParameter",
    "classify_exception",
    "code_from_status",
    "is_retryable",
    "provider_error_from_status",
]
