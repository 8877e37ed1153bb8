"""
UnifiedResponse DTO representing normalized provider responses.

``metadata`` is an opaque bag owned by the adapter (response id, raw finish
reason, latency, ...). The facade never interprets it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .finish_reason import FinishReason
from .token_usage import TokenUsage


@dataclass(frozen=True)
class UnifiedResponse:
    """Provider-agnostic result of a chat/completion call.

    Attributes:
        segments: Generated text segments in order (one per content block or
            candidate, or one per delta when accumulated from a stream).
        usage: Token usage counters.
        finish_reason: Normalized finish reason.
        provider: Provider kind that produced the response.
        model: Model identifier reported by the provider (or requested).
        metadata: Opaque provider metadata.

    Methods:
        text: All segments joined.
        to_dict: JSON-serializable representation.
    """

    segments: Tuple[str, ...]
    usage: TokenUsage
    finish_reason: FinishReason
    provider: str
    model: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "".join(self.segments)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary of the response."""
        return {
            "text": self.text,
            "segments": list(self.segments),
            "usage": self.usage.to_dict(),
            "finish_reason": self.finish_reason.value,
            "provider": self.provider,
            "model": self.model,
            "metadata": dict(self.metadata),
        }


__all__ = ["UnifiedResponse"]
