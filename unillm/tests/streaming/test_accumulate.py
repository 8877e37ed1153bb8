from __future__ import annotations

import pytest

from unillm.base.errors import MalformedResponse
from unillm.base.models import FinishReason, StreamChunk, TokenUsage
from unillm.base.streaming import accumulate_chunks


def test_accumulate_joins_deltas_and_takes_final_fields():
    chunks = [
        StreamChunk(delta="Hel", index=0),
        StreamChunk(delta="", index=1),
        StreamChunk(delta="lo", index=2),
        StreamChunk(delta="!", index=3, is_final=True, finish_reason=FinishReason.LENGTH, usage=TokenUsage(2, 3)),
    ]
    resp = accumulate_chunks(chunks, provider="openai", model="gpt")
    assert resp.text == "Hello!"  # nosec B101 - asserts are appropriate in unit tests
    assert resp.segments == ("Hel", "lo", "!")  # nosec B101 - asserts are appropriate in unit tests
    assert resp.finish_reason is FinishReason.LENGTH  # nosec B101 - asserts are appropriate in unit tests
    assert resp.usage.total_tokens == 5  # nosec B101 - asserts are appropriate in unit tests
    assert resp.metadata == {"streamed": True, "chunks": 4}  # nosec B101


def test_accumulate_defaults_when_final_carries_nothing():
    resp = accumulate_chunks([StreamChunk(delta="x", is_final=True)], provider="ollama", model="llama3")
    assert resp.finish_reason is FinishReason.COMPLETED  # nosec B101
    assert resp.usage.is_empty  # nosec B101 - asserts are appropriate in unit tests


def test_accumulate_without_final_is_malformed():
    with pytest.raises(MalformedResponse):
        accumulate_chunks([StreamChunk(delta="x")], provider="openai", model="gpt")
