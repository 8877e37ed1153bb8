"""unillm: one client for many chat/completion APIs.

Typical use::

    from unillm import UnifiedClient, UnifiedRequest, load_provider_config

    config = load_provider_config("anthropic")
    request = UnifiedRequest.from_prompt("claude-3-5-haiku-latest", "Hello", max_tokens=64)
    response = UnifiedClient().complete(config, request)
    print(response.text)
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import (
    ClientError,
    ConfigError,
    ErrorCode,
    InvalidRequest,
    MalformedResponse,
    ProviderError,
    TransportError,
    UnsupportedParameter,
)
from .base.http import HttpxTransport, RawStream, Transport
from .base.logging import configure_logger
from .base.models import (
    FinishReason,
    GenerationParams,
    Message,
    ModelInfo,
    StreamChunk,
    TokenUsage,
    UnifiedRequest,
    UnifiedResponse,
)
from .base.resilience import RetryPolicy
from .client import UnifiedClient, check_model, complete, list_models, stream
from .config import ProviderConfig, ProviderKind, load_provider_config
from .conversation import Conversation

__version__ = "0.1.0"

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
    "HttpxTransport",
    "RawStream",
    "Transport",
    "configure_logger",
    "FinishReason",
    "GenerationParams",
    "Message",
    "ModelInfo",
    "StreamChunk",
    "TokenUsage",
    "UnifiedRequest",
    "UnifiedResponse",
    "RetryPolicy",
    "UnifiedClient",
    "check_model",
    "complete",
    "list_models",
    "stream",
    "ProviderConfig",
    "ProviderKind",
    "load_provider_config",
    "Conversation",
    "__version__",
]
