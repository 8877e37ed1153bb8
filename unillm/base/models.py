"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``unillm.base.models_parts`` to keep a single stable import path.
"""

from .models_parts import (
    FinishReason,
    GenerationParams,
    Message,
    ModelInfo,
    RawResponse,
    Role,
    ROLES,
    StreamChunk,
    TokenUsage,
    UnifiedRequest,
    UnifiedResponse,
    WireRequest,
)

__all__ = [
    "FinishReason",
    "GenerationParams",
    "Message",
    "ModelInfo",
    "RawResponse",
    "Role",
    "ROLES",
    "StreamChunk",
    "TokenUsage",
    "UnifiedRequest",
    "UnifiedResponse",
    "WireRequest",
]
