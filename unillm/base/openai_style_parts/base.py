"""OpenAIStyleAdapter: shared adapter for OpenAI-compatible Chat Completions.

Purpose:
- Serialize to ``POST {endpoint}/chat/completions``.
- Parse the JSON response and the SSE stream (``data: {...}`` lines closed by
  ``data: [DONE]``).
- List models via ``GET {endpoint}/models``.

Concrete providers subclass this and only set ``kind`` and the parameter
matrix class attributes.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..adapter import BaseAdapter
from ..models import FinishReason, ModelInfo, StreamChunk, TokenUsage, UnifiedRequest, UnifiedResponse, WireRequest
from ..streaming import sse_data
from .style_helpers import build_chat_payload

DONE_SENTINEL = "[DONE]"

OPENAI_FINISH_REASONS = {
    "stop": FinishReason.COMPLETED,
    "length": FinishReason.LENGTH,
    "content_filter": FinishReason.CONTENT_FILTER,
    "tool_calls": FinishReason.COMPLETED,
    "function_call": FinishReason.COMPLETED,
}


class OpenAIStyleAdapter(BaseAdapter):
    """Reusable base class for OpenAI-compatible providers.

    Defaults: temperature in [0, 2], up to four stop sequences, ``top_k``
    rejected.
    """

    unsupported_params = frozenset({"top_k"})
    temperature_range = (0.0, 2.0)
    max_stop_sequences: Optional[int] = 4
    finish_reasons = OPENAI_FINISH_REASONS
    # Ask for a trailing usage chunk when streaming.
    stream_include_usage = True

    def serialize(self, request: UnifiedRequest) -> WireRequest:
        self.prepare(request)
        return WireRequest(
            path="chat/completions",
            payload=build_chat_payload(request, include_usage=self.stream_include_usage),
            headers=self.headers(stream=request.stream),
        )

    def _parse_response(self, payload: Any) -> UnifiedResponse:
        if not isinstance(payload, dict):
            raise self.malformed("response is not a JSON object", payload)
        if "error" in payload and "choices" not in payload:
            raise self.stream_error(payload)
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            raise self.malformed("response has no choices", payload)
        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        if not isinstance(message, dict):
            raise self.malformed("choice has no message", payload)
        content = message.get("content") or ""
        if not isinstance(content, str):
            raise self.malformed("message content is not text", payload)

        metadata: Dict[str, Any] = {}
        for key in ("id", "created", "system_fingerprint"):
            if payload.get(key) is not None:
                metadata[key] = payload[key]
        finish = self.finish(first.get("finish_reason"), metadata)
        return self.response(
            [content] if content else [],
            self._usage(payload.get("usage")),
            finish,
            payload.get("model"),
            metadata,
        )

    def _usage(self, usage: Any) -> TokenUsage:
        if not isinstance(usage, dict):
            return self.usage()
        prompt = usage.get("prompt_tokens")
        completion = usage.get("completion_tokens")
        total = usage.get("total_tokens")
        # Reasoning models (xAI grok) count reasoning tokens in the total only.
        details = usage.get("completion_tokens_details")
        reasoning = details.get("reasoning_tokens") if isinstance(details, dict) else None
        if all(isinstance(n, int) and not isinstance(n, bool) for n in (prompt, completion, total, reasoning)):
            if prompt + completion != total and prompt + completion + reasoning == total:
                completion += reasoning
        return self.usage(prompt, completion, total)

    def deserialize_chunk(self, record: bytes) -> Optional[StreamChunk]:
        data = sse_data(record)
        if data is None or not data.strip():
            return None
        state = self._stream_state
        if data.strip() == DONE_SENTINEL:
            return StreamChunk(
                delta="",
                is_final=True,
                finish_reason=self.finish(state.get("finish_reason"), {}),
                usage=state.get("usage"),
            )
        obj = self.decode_record(data)
        if not isinstance(obj, dict):
            raise self.malformed("stream record is not a JSON object", obj)
        if "error" in obj:
            raise self.stream_error(obj)
        if obj.get("usage"):
            state["usage"] = self._usage(obj["usage"])
        delta_text = ""
        for choice in obj.get("choices") or []:
            if not isinstance(choice, dict) or choice.get("index", 0) != 0:
                continue
            delta = choice.get("delta") or {}
            delta_text = delta.get("content") or ""
            if choice.get("finish_reason"):
                state["finish_reason"] = choice["finish_reason"]
        return StreamChunk(delta=delta_text) if delta_text else None

    # ----- Models -----
    def serialize_list_models(self) -> WireRequest:
        return WireRequest(path="models", headers=self.headers(), method="GET")

    def _parse_models(self, payload: Any) -> List[ModelInfo]:
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise self.malformed("model listing has no data array", payload)
        out: List[ModelInfo] = []
        for item in data:
            if not isinstance(item, dict) or not item.get("id"):
                continue
            extra = {k: v for k, v in item.items() if k not in ("id", "owned_by", "context_length", "object")}
            out.append(
                ModelInfo(
                    id=str(item["id"]),
                    provider=self.provider_name,
                    owned_by=item.get("owned_by"),
                    context_length=item.get("context_length"),
                    metadata=extra,
                )
            )
        return out


__all__ = ["OpenAIStyleAdapter", "OPENAI_FINISH_REASONS", "DONE_SENTINEL"]
