"""
StreamChunk DTO: one incremental delta of a streamed response.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .finish_reason import FinishReason
from .token_usage import TokenUsage


@dataclass(frozen=True)
class StreamChunk:
    """Partial text delta plus an is-final flag.

    Fields:
      delta: textual delta (may be empty for the terminal chunk)
      is_final: True only on the last chunk of a stream
      index: position of the chunk within its stream (0-based)
      finish_reason: set on the final chunk when the provider reported one
      usage: set on the final chunk when the provider reported counters
    """

    delta: str
    is_final: bool = False
    index: int = 0
    finish_reason: Optional[FinishReason] = None
    usage: Optional[TokenUsage] = None

    def with_index(self, index: int) -> "StreamChunk":
        return replace(self, index=index)


__all__ = ["StreamChunk"]
