"""Models parts package public surface.

Re-exports individual DTOs so callers can import from
`unillm.base.models_parts` if needed, while `unillm.base.models` remains
the primary stable import path.
"""

from .message import Message, Role, ROLES
from .generation_params import GenerationParams
from .unified_request import UnifiedRequest
from .token_usage import TokenUsage
from .finish_reason import FinishReason
from .unified_response import UnifiedResponse
from .stream_chunk import StreamChunk
from .wire import WireRequest, RawResponse
from .model_info import ModelInfo

__all__ = [
    "Message",
    "Role",
    "ROLES",
    "GenerationParams",
    "UnifiedRequest",
    "TokenUsage",
    "FinishReason",
    "UnifiedResponse",
    "StreamChunk",
    "WireRequest",
    "RawResponse",
    "ModelInfo",
]
