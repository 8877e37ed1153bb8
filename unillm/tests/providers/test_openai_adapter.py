"""OpenAI adapter: Chat Completions payloads, responses and SSE records."""

from __future__ import annotations

import json

import pytest

from unillm.base.errors import ConfigError, ErrorCode, MalformedResponse, ProviderError, UnsupportedParameter
from unillm.base.models import FinishReason, Message, RawResponse, UnifiedRequest
from unillm.openai import OpenAIAdapter


def _raw(payload, status=200) -> RawResponse:
    return RawResponse(status_code=status, body=json.dumps(payload).encode("utf-8"))


def _sse(obj) -> bytes:
    return b"data: " + json.dumps(obj).encode("utf-8")


@pytest.fixture()
def adapter(make_config) -> OpenAIAdapter:
    return OpenAIAdapter(make_config("openai"))


def test_serialize_maps_messages_and_params(adapter):
    req = UnifiedRequest.from_prompt("gpt-4o-mini", "hi", system="sys", temperature=0.7, max_tokens=50, stop=["x"], seed=7)
    wire = adapter.serialize(req)
    assert wire.method == "POST" and wire.path == "chat/completions"  # nosec B101
    assert wire.headers["Authorization"] == "Bearer test-key"  # nosec B101
    assert wire.payload == {  # nosec B101 - asserts are appropriate in unit tests
        "model": "gpt-4o-mini",
        "messages": [{"role": "system", "content": "sys"}, {"role": "user", "content": "hi"}],
        "temperature": 0.7,
        "max_tokens": 50,
        "stop": ["x"],
        "seed": 7,
    }


def test_serialize_stream_requests_usage(adapter):
    wire = adapter.serialize(UnifiedRequest.from_prompt("gpt", "hi", stream=True))
    assert wire.payload["stream"] is True  # nosec B101 - asserts are appropriate in unit tests
    assert wire.payload["stream_options"] == {"include_usage": True}  # nosec B101
    assert wire.headers["Accept"] == "text/event-stream"  # nosec B101


@pytest.mark.parametrize(
    ("params", "parameter"),
    [
        ({"top_k": 5}, "top_k"),
        ({"temperature": 2.5}, "temperature"),
        ({"stop": ["a", "b", "c", "d", "e"]}, "stop"),
    ],
)
def test_serialize_rejects_unsupported(adapter, params, parameter):
    with pytest.raises(UnsupportedParameter) as ei:
        adapter.serialize(UnifiedRequest.from_prompt("gpt", "hi", **params))
    assert ei.value.parameter == parameter and ei.value.provider == "openai"  # nosec B101


def test_serialize_without_credential_raises_config_error(make_config, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    adapter = OpenAIAdapter(make_config("openai", api_key=None, api_key_env="OPENAI_API_KEY"))
    with pytest.raises(ConfigError):
        adapter.serialize(UnifiedRequest.from_prompt("gpt", "hi"))


def test_deserialize_success(adapter):
    adapter.serialize(UnifiedRequest.from_prompt("gpt-4o-mini", "hi"))
    resp = adapter.deserialize(
        _raw(
            {
                "id": "chatcmpl-1",
                "model": "gpt-4o-mini-2024",
                "choices": [{"index": 0, "message": {"role": "assistant", "content": "Hello!"}, "finish_reason": "stop"}],
                "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
            }
        )
    )
    assert resp.text == "Hello!"  # nosec B101 - asserts are appropriate in unit tests
    assert resp.finish_reason is FinishReason.COMPLETED  # nosec B101
    assert resp.usage.total_tokens == 7  # nosec B101 - asserts are appropriate in unit tests
    assert resp.model == "gpt-4o-mini-2024" and resp.provider == "openai"  # nosec B101
    assert resp.metadata["id"] == "chatcmpl-1"  # nosec B101 - asserts are appropriate in unit tests


def test_deserialize_unknown_finish_reason_is_kept(adapter):
    resp = adapter.deserialize(
        _raw({"choices": [{"message": {"content": "x"}, "finish_reason": "mystery"}]})
    )
    assert resp.finish_reason is FinishReason.COMPLETED  # nosec B101
    assert resp.metadata["raw_finish_reason"] == "mystery"  # nosec B101


@pytest.mark.parametrize(
    "raw",
    [
        RawResponse(status_code=200, body=b"<html>oops</html>"),
        RawResponse(status_code=200, body=b'{"choices": []}'),
        RawResponse(status_code=200, body=b'{"id": "x"}'),
        RawResponse(
            status_code=200,
            body=b'{"choices": [{"message": {"content": "x"}}], "usage": {"prompt_tokens": 1, "completion_tokens": 1, "total_tokens": 5}}',
        ),
    ],
)
def test_deserialize_malformed(adapter, raw):
    with pytest.raises(MalformedResponse):
        adapter.deserialize(raw)


@pytest.mark.parametrize(
    ("status", "error", "code", "retryable"),
    [
        (429, {"message": "Rate limit reached", "type": "requests", "code": "rate_limit_exceeded"}, ErrorCode.RATE_LIMIT, True),
        (401, {"message": "Incorrect API key", "type": "invalid_request_error", "code": "invalid_api_key"}, ErrorCode.AUTH, False),
        (500, {"message": "server had an error", "type": "server_error", "code": None}, ErrorCode.SERVER_ERROR, True),
        (404, {"message": "no such model", "type": "invalid_request_error", "code": "model_not_found"}, ErrorCode.NOT_FOUND, False),
    ],
)
def test_error_payloads_map_to_provider_error(adapter, status, error, code, retryable):
    with pytest.raises(ProviderError) as ei:
        adapter.deserialize(_raw({"error": error}, status=status))
    err = ei.value
    assert err.code is code and err.retryable is retryable  # nosec B101
    assert err.status == status and err.message == error["message"]  # nosec B101


def test_error_status_with_non_json_body(adapter):
    err = adapter.parse_error(RawResponse(status_code=503, body=b"upstream unavailable"))
    assert err.code is ErrorCode.UNAVAILABLE and err.retryable  # nosec B101
    assert "upstream unavailable" in err.message  # nosec B101


def test_stream_records(adapter):
    req = UnifiedRequest.from_prompt("gpt", "hi", stream=True)
    adapter.begin_stream(req)
    assert adapter.deserialize_chunk(b": keep-alive") is None  # nosec B101
    assert adapter.deserialize_chunk(b"") is None  # nosec B101
    assert adapter.deserialize_chunk(_sse({"choices": [{"index": 0, "delta": {"role": "assistant"}}]})) is None  # nosec B101
    chunk = adapter.deserialize_chunk(_sse({"choices": [{"index": 0, "delta": {"content": "Hi"}}]}))
    assert chunk.delta == "Hi" and not chunk.is_final  # nosec B101
    assert adapter.deserialize_chunk(_sse({"choices": [{"index": 0, "delta": {}, "finish_reason": "length"}]})) is None  # nosec B101
    assert adapter.deserialize_chunk(
        _sse({"choices": [], "usage": {"prompt_tokens": 3, "completion_tokens": 1, "total_tokens": 4}})
    ) is None  # nosec B101
    final = adapter.deserialize_chunk(b"data: [DONE]")
    assert final.is_final and final.delta == ""  # nosec B101
    assert final.finish_reason is FinishReason.LENGTH  # nosec B101
    assert final.usage.total_tokens == 4  # nosec B101 - asserts are appropriate in unit tests


def test_stream_error_record_raises(adapter):
    adapter.begin_stream(UnifiedRequest.from_prompt("gpt", "hi", stream=True))
    with pytest.raises(ProviderError) as ei:
        adapter.deserialize_chunk(_sse({"error": {"message": "overloaded", "type": "server_error"}}))
    assert ei.value.retryable  # nosec B101 - asserts are appropriate in unit tests
    with pytest.raises(MalformedResponse):
        adapter.deserialize_chunk(b"data: {not json")


def test_models_listing(adapter):
    wire = adapter.serialize_list_models()
    assert wire.method == "GET" and wire.path == "models" and wire.payload is None  # nosec B101
    models = adapter.deserialize_models(
        _raw({"object": "list", "data": [{"id": "gpt-4o", "object": "model", "owned_by": "openai", "created": 1}]})
    )
    assert [m.id for m in models] == ["gpt-4o"]  # nosec B101 - asserts are appropriate in unit tests
    assert models[0].owned_by == "openai" and models[0].metadata == {"created": 1}  # nosec B101
