"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `unillm.base.errors` for the stable surface.
"""

from .error_code import ErrorCode, RETRYABLE_CODES
from .client_error import ClientError
from .config_error import ConfigError
from .invalid_request import InvalidRequest
from .unsupported_parameter import UnsupportedParameter
from .transport_error import TransportError
from .provider_error import ProviderError
from .malformed_response import MalformedResponse
from .classification import (
    classify_exception,
    code_from_status,
    is_retryable,
    provider_error_from_status,
)

__all__ = [
    "ErrorCode",
    "RETRYABLE_CODES",
    "ClientError",
    "ConfigError",
    "InvalidRequest",
    "UnsupportedParameter",
    "TransportError",
    "ProviderError",
    "MalformedResponse",
    "classify_exception",
    "code_from_status",
    "is_retryable",
    "provider_error_from_status",
]
