"""Fold a chunk stream back into a single response."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from ..errors import MalformedResponse
from ..models import FinishReason, StreamChunk, TokenUsage, UnifiedResponse


def accumulate_chunks(
    chunks: Iterable[StreamChunk],
    *,
    provider: str,
    model: str,
    metadata: Optional[Dict[str, Any]] = None,
) -> UnifiedResponse:
    """Accumulate ``chunks`` into a :class:`UnifiedResponse`.

    - Non-empty deltas become the response segments, in order.
    - Finish reason and usage come from the final chunk.
    - A sequence without a final chunk raises ``MalformedResponse``.
    """
    segments: List[str] = []
    final: Optional[StreamChunk] = None
    count = 0
    for chunk in chunks:
        count += 1
        if chunk.delta:
            segments.append(chunk.delta)
        if chunk.is_final:
            final = chunk
            break
    if final is None:
        raise MalformedResponse("stream ended without a final chunk", provider=provider)
    meta: Dict[str, Any] = {"streamed": True, "chunks": count}
    if metadata:
        meta.update(metadata)
    return UnifiedResponse(
        segments=tuple(segments),
        usage=final.usage or TokenUsage(),
        finish_reason=final.finish_reason or FinishReason.COMPLETED,
        provider=provider,
        model=model,
        metadata=meta,
    )


__all__ = ["accumulate_chunks"]
