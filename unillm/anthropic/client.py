"""
Anthropic adapter (Messages API).

Wire format:
- ``POST {endpoint}/messages`` with ``x-api-key`` and ``anthropic-version``
  headers; system messages go to the top-level ``system`` field.
- ``max_tokens`` is mandatory on the wire and defaults to 1024.
- Streams are SSE with named events; ``message_stop`` is terminal.

Temperature is limited to [0, 1]; penalties and ``seed`` are rejected.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.adapter import BaseAdapter
from ..base.models import FinishReason, ModelInfo, StreamChunk, TokenUsage, UnifiedRequest, UnifiedResponse, WireRequest
from ..base.streaming import sse_data
from ..config.defaults import ANTHROPIC_API_VERSION
from ..config.provider_config import ProviderKind
from .helpers import build_messages_payload

ANTHROPIC_FINISH_REASONS = {
    "end_turn": FinishReason.COMPLETED,
    "max_tokens": FinishReason.LENGTH,
    "stop_sequence": FinishReason.STOP_SEQUENCE,
    "refusal": FinishReason.CONTENT_FILTER,
    "tool_use": FinishReason.COMPLETED,
}


class AnthropicAdapter(BaseAdapter):
    kind = ProviderKind.ANTHROPIC
    unsupported_params = frozenset({"presence_penalty", "frequency_penalty", "seed"})
    temperature_range = (0.0, 1.0)
    max_stop_sequences = None
    finish_reasons = ANTHROPIC_FINISH_REASONS

    def auth_headers(self, api_key: Optional[str]) -> Dict[str, str]:
        out = {"anthropic-version": ANTHROPIC_API_VERSION}
        if api_key:
            out["x-api-key"] = api_key
        return out

    def serialize(self, request: UnifiedRequest) -> WireRequest:
        self.prepare(request)
        return WireRequest(
            path="messages",
            payload=build_messages_payload(request),
            headers=self.headers(stream=request.stream),
        )

    def _usage(self, usage: Any) -> TokenUsage:
        if not isinstance(usage, dict):
            return self.usage()
        return self.usage(usage.get("input_tokens"), usage.get("output_tokens"))

    def _parse_response(self, payload: Any) -> UnifiedResponse:
        if not isinstance(payload, dict):
            raise self.malformed("response is not a JSON object", payload)
        if payload.get("type") == "error":
            raise self.stream_error(payload)
        content = payload.get("content")
        if not isinstance(content, list):
            raise self.malformed("response has no content array", payload)
        segments = [
            block["text"]
            for block in content
            if isinstance(block, dict) and block.get("type") == "text" and block.get("text")
        ]
        metadata: Dict[str, Any] = {}
        if payload.get("id"):
            metadata["id"] = payload["id"]
        if payload.get("stop_sequence"):
            metadata["stop_sequence"] = payload["stop_sequence"]
        finish = self.finish(payload.get("stop_reason"), metadata)
        return self.response(segments, self._usage(payload.get("usage")), finish, payload.get("model"), metadata)

    def deserialize_chunk(self, record: bytes) -> Optional[StreamChunk]:
        data = sse_data(record)
        if data is None or not data.strip():
            return None
        obj = self.decode_record(data)
        if not isinstance(obj, dict):
            raise self.malformed("stream record is not a JSON object", obj)
        state = self._stream_state
        kind = obj.get("type")
        if kind == "error":
            raise self.stream_error(obj)
        if kind == "message_start":
            message = obj.get("message") or {}
            state["input_tokens"] = (message.get("usage") or {}).get("input_tokens")
            return None
        if kind == "content_block_delta":
            delta = obj.get("delta") or {}
            if delta.get("type") == "text_delta" and delta.get("text"):
                return StreamChunk(delta=delta["text"])
            return None
        if kind == "message_delta":
            delta = obj.get("delta") or {}
            if delta.get("stop_reason"):
                state["stop_reason"] = delta["stop_reason"]
            usage = obj.get("usage") or {}
            if usage.get("output_tokens") is not None:
                state["output_tokens"] = usage["output_tokens"]
            if usage.get("input_tokens") is not None:
                state["input_tokens"] = usage["input_tokens"]
            return None
        if kind == "message_stop":
            usage = None
            if state.get("input_tokens") is not None or state.get("output_tokens") is not None:
                usage = self.usage(state.get("input_tokens"), state.get("output_tokens"))
            return StreamChunk(
                delta="",
                is_final=True,
                finish_reason=self.finish(state.get("stop_reason"), {}),
                usage=usage,
            )
        # ping, content_block_start, content_block_stop
        return None

    # ----- Models -----
    def serialize_list_models(self) -> WireRequest:
        return WireRequest(path="models?limit=1000", headers=self.headers(), method="GET")

    def _parse_models(self, payload: Any) -> List[ModelInfo]:
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise self.malformed("model listing has no data array", payload)
        return [
            ModelInfo(
                id=str(item["id"]),
                provider=self.provider_name,
                owned_by="anthropic",
                metadata={k: v for k, v in item.items() if k in ("display_name", "created_at")},
            )
            for item in data
            if isinstance(item, dict) and item.get("id")
        ]


__all__ = ["AnthropicAdapter", "ANTHROPIC_FINISH_REASONS"]
