"""
unillm base package.

Provider-agnostic building blocks shared by every adapter:

- Models (DTOs): immutable request/response objects and wire envelopes
- Errors: the ``ClientError`` hierarchy and ``ErrorCode`` taxonomy
- HTTP: pooled clients and the ``Transport`` seam
- Resilience, timeouts, cancellation and structured logging

The adapter base class and factory live in ``unillm.base.adapter`` and
``unillm.base.factory``; they depend on ``unillm.config`` and are not
imported here.
"""

from .cancellation import CancellationToken, CancelledError
from .errors import (
    ClientError,
    ConfigError,
    ErrorCode,
    InvalidRequest,
    MalformedResponse,
    ProviderError,
    TransportError,
    UnsupportedParameter,
)
from .models import (
    FinishReason,
    GenerationParams,
    Message,
    ModelInfo,
    RawResponse,
    StreamChunk,
    TokenUsage,
    UnifiedRequest,
    UnifiedResponse,
    WireRequest,
)
from .resilience import RetryPolicy
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    "CancellationToken",
    "CancelledError",
    "ClientError",
    "ConfigError",
    "ErrorCode",
    "InvalidRequest",
    "MalformedResponse",
    "ProviderError",
    "TransportError",
    "UnsupportedParameter",
    "FinishReason",
    "GenerationParams",
    "Message",
    "ModelInfo",
    "RawResponse",
    "StreamChunk",
    "TokenUsage",
    "UnifiedRequest",
    "UnifiedResponse",
    "WireRequest",
    "RetryPolicy",
    "TimeoutConfig",
    "get_timeout_config",
]
