"""Anthropic adapter: Messages API payloads, responses and named SSE events."""

from __future__ import annotations

import json

import pytest

from unillm.anthropic import AnthropicAdapter
from unillm.base.errors import ErrorCode, ProviderError, UnsupportedParameter
from unillm.base.models import FinishReason, Message, RawResponse, UnifiedRequest


def _raw(payload, status=200) -> RawResponse:
    return RawResponse(status_code=status, body=json.dumps(payload).encode("utf-8"))


def _event(obj) -> bytes:
    return b"data: " + json.dumps(obj).encode("utf-8")


@pytest.fixture()
def adapter(make_config) -> AnthropicAdapter:
    return AnthropicAdapter(make_config("anthropic"))


def test_serialize_moves_system_and_defaults_max_tokens(adapter):
    req = UnifiedRequest(
        model="claude-3-5-haiku-latest",
        messages=(Message.system("be brief"), Message.user("hi"), Message.system("no emoji")),
    )
    wire = adapter.serialize(req)
    assert wire.path == "messages"  # nosec B101 - asserts are appropriate in unit tests
    assert wire.payload == {  # nosec B101 - asserts are appropriate in unit tests
        "model": "claude-3-5-haiku-latest",
        "messages": [{"role": "user", "content": "hi"}],
        "system": "be brief\n\nno emoji",
        "max_tokens": 1024,
    }
    assert wire.headers["x-api-key"] == "test-key"  # nosec B101 - asserts are appropriate in unit tests
    assert wire.headers["anthropic-version"] == "2023-06-01"  # nosec B101
    assert "Authorization" not in wire.headers  # nosec B101 - asserts are appropriate in unit tests


def test_serialize_maps_stop_and_sampling(adapter):
    wire = adapter.serialize(
        UnifiedRequest.from_prompt("claude", "hi", stream=True, max_tokens=10, stop="END", top_k=5, temperature=0.5)
    )
    assert wire.payload["stop_sequences"] == ["END"]  # nosec B101
    assert wire.payload["max_tokens"] == 10 and wire.payload["top_k"] == 5  # nosec B101
    assert wire.payload["stream"] is True  # nosec B101 - asserts are appropriate in unit tests


@pytest.mark.parametrize(
    ("params", "parameter"),
    [
        ({"temperature": 1.5}, "temperature"),
        ({"seed": 3}, "seed"),
        ({"presence_penalty": 0.1}, "presence_penalty"),
        ({"frequency_penalty": 0.1}, "frequency_penalty"),
    ],
)
def test_serialize_rejects_unsupported(adapter, params, parameter):
    with pytest.raises(UnsupportedParameter) as ei:
        adapter.serialize(UnifiedRequest.from_prompt("claude", "hi", **params))
    assert ei.value.parameter == parameter  # nosec B101 - asserts are appropriate in unit tests


def test_serialize_rejects_system_only_conversation(adapter):
    with pytest.raises(UnsupportedParameter) as ei:
        adapter.serialize(UnifiedRequest(model="claude", messages=(Message.system("only"),)))
    assert ei.value.parameter == "messages"  # nosec B101 - asserts are appropriate in unit tests


def test_deserialize_text_blocks(adapter):
    adapter.serialize(UnifiedRequest.from_prompt("claude", "hi"))
    resp = adapter.deserialize(
        _raw(
            {
                "id": "msg_1",
                "type": "message",
                "model": "claude-3-5-haiku-20241022",
                "content": [
                    {"type": "text", "text": "Hello"},
                    {"type": "tool_use", "id": "t", "name": "x", "input": {}},
                    {"type": "text", "text": " world"},
                ],
                "stop_reason": "max_tokens",
                "usage": {"input_tokens": 12, "output_tokens": 4},
            }
        )
    )
    assert resp.segments == ("Hello", " world")  # nosec B101 - asserts are appropriate in unit tests
    assert resp.text == "Hello world"  # nosec B101 - asserts are appropriate in unit tests
    assert resp.finish_reason is FinishReason.LENGTH  # nosec B101
    assert resp.usage.to_dict() == {"prompt": 12, "completion": 4, "total": 16}  # nosec B101
    assert resp.metadata["id"] == "msg_1"  # nosec B101 - asserts are appropriate in unit tests


def test_deserialize_stop_sequence(adapter):
    resp = adapter.deserialize(
        _raw({"content": [{"type": "text", "text": "a"}], "stop_reason": "stop_sequence", "stop_sequence": "END"})
    )
    assert resp.finish_reason is FinishReason.STOP_SEQUENCE  # nosec B101
    assert resp.metadata["stop_sequence"] == "END"  # nosec B101 - asserts are appropriate in unit tests


@pytest.mark.parametrize(
    ("status", "etype", "code", "retryable"),
    [
        (529, "overloaded_error", ErrorCode.UNAVAILABLE, True),
        (429, "rate_limit_error", ErrorCode.RATE_LIMIT, True),
        (401, "authentication_error", ErrorCode.AUTH, False),
        (400, "invalid_request_error", ErrorCode.VALIDATION, False),
    ],
)
def test_error_payloads(adapter, status, etype, code, retryable):
    payload = {"type": "error", "error": {"type": etype, "message": "nope"}}
    with pytest.raises(ProviderError) as ei:
        adapter.deserialize(_raw(payload, status=status))
    assert ei.value.code is code and ei.value.retryable is retryable  # nosec B101
    assert ei.value.provider_code == etype and ei.value.message == "nope"  # nosec B101


def test_stream_events(adapter):
    adapter.begin_stream(UnifiedRequest.from_prompt("claude", "hi", stream=True))
    records = [
        b"event: message_start",
        _event({"type": "message_start", "message": {"id": "m", "usage": {"input_tokens": 9, "output_tokens": 1}}}),
        b"",
        _event({"type": "content_block_start", "index": 0, "content_block": {"type": "text", "text": ""}}),
        _event({"type": "ping"}),
        _event({"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": "Hel"}}),
        _event({"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": "lo"}}),
        _event({"type": "content_block_stop", "index": 0}),
        _event({"type": "message_delta", "delta": {"stop_reason": "end_turn"}, "usage": {"output_tokens": 2}}),
        _event({"type": "message_stop"}),
    ]
    chunks = [c for c in (adapter.deserialize_chunk(r) for r in records) if c is not None]
    assert [c.delta for c in chunks] == ["Hel", "lo", ""]  # nosec B101
    final = chunks[-1]
    assert final.is_final and not any(c.is_final for c in chunks[:-1])  # nosec B101
    assert final.finish_reason is FinishReason.COMPLETED  # nosec B101
    assert final.usage.to_dict() == {"prompt": 9, "completion": 2, "total": 11}  # nosec B101


def test_stream_error_event(adapter):
    adapter.begin_stream(UnifiedRequest.from_prompt("claude", "hi", stream=True))
    with pytest.raises(ProviderError) as ei:
        adapter.deserialize_chunk(_event({"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}}))
    assert ei.value.code is ErrorCode.UNAVAILABLE and ei.value.retryable  # nosec B101
    assert ei.value.model == "claude"  # nosec B101 - asserts are appropriate in unit tests


def test_models_listing(adapter):
    wire = adapter.serialize_list_models()
    assert wire.method == "GET" and wire.path == "models?limit=1000"  # nosec B101
    assert wire.headers["x-api-key"] == "test-key"  # nosec B101 - asserts are appropriate in unit tests
    models = adapter.deserialize_models(
        _raw({"data": [{"id": "claude-3-5-haiku", "display_name": "Claude Haiku", "type": "model"}], "has_more": False})
    )
    assert models[0].id == "claude-3-5-haiku" and models[0].owned_by == "anthropic"  # nosec B101
    assert models[0].metadata == {"display_name": "Claude Haiku"}  # nosec B101
