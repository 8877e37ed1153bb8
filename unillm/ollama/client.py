"""
Ollama adapter (local daemon, ``/api/chat``).

Streams are newline-delimited JSON; the record with ``"done": true`` is
terminal and carries the token counts. No credential is required; when one
is configured (e.g. behind an authenticating proxy) it is sent as a bearer
token.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.adapter import BaseAdapter
from ..base.models import FinishReason, ModelInfo, StreamChunk, TokenUsage, UnifiedRequest, UnifiedResponse, WireRequest
from ..base.streaming import NDJSON
from ..config.provider_config import ProviderKind
from .helpers import build_chat_payload

OLLAMA_FINISH_REASONS = {
    "stop": FinishReason.COMPLETED,
    "length": FinishReason.LENGTH,
}


class OllamaAdapter(BaseAdapter):
    kind = ProviderKind.OLLAMA
    stream_format = NDJSON
    unsupported_params = frozenset()
    temperature_range = (0.0, None)
    max_stop_sequences = None
    finish_reasons = OLLAMA_FINISH_REASONS

    def serialize(self, request: UnifiedRequest) -> WireRequest:
        self.prepare(request)
        return WireRequest(
            path="api/chat",
            payload=build_chat_payload(request),
            headers=self.headers(stream=request.stream),
        )

    def _usage(self, payload: Dict[str, Any]) -> TokenUsage:
        return self.usage(payload.get("prompt_eval_count"), payload.get("eval_count"))

    def _content(self, payload: Dict[str, Any]) -> str:
        message = payload.get("message")
        if not isinstance(message, dict):
            raise self.malformed("record has no message", payload)
        content = message.get("content") or ""
        if not isinstance(content, str):
            raise self.malformed("message content is not text", payload)
        return content

    def _parse_response(self, payload: Any) -> UnifiedResponse:
        if not isinstance(payload, dict):
            raise self.malformed("response is not a JSON object", payload)
        if "error" in payload:
            raise self.stream_error(payload)
        content = self._content(payload)
        metadata: Dict[str, Any] = {}
        for key in ("created_at", "total_duration", "load_duration", "eval_duration"):
            if payload.get(key) is not None:
                metadata[key] = payload[key]
        finish = self.finish(payload.get("done_reason"), metadata)
        return self.response(
            [content] if content else [],
            self._usage(payload),
            finish,
            payload.get("model"),
            metadata,
        )

    def deserialize_chunk(self, record: bytes) -> Optional[StreamChunk]:
        if not record.strip():
            return None
        obj = self.decode_record(record.decode("utf-8", errors="replace"))
        if not isinstance(obj, dict):
            raise self.malformed("stream record is not a JSON object", obj)
        if "error" in obj:
            raise self.stream_error(obj)
        delta = self._content(obj) if "message" in obj else ""
        if obj.get("done"):
            usage = self._usage(obj)
            return StreamChunk(
                delta=delta,
                is_final=True,
                finish_reason=self.finish(obj.get("done_reason"), {}),
                usage=None if usage.is_empty else usage,
            )
        return StreamChunk(delta=delta) if delta else None

    # ----- Models -----
    def serialize_list_models(self) -> WireRequest:
        return WireRequest(path="api/tags", headers=self.headers(), method="GET")

    def _parse_models(self, payload: Any) -> List[ModelInfo]:
        models = payload.get("models") if isinstance(payload, dict) else None
        if not isinstance(models, list):
            raise self.malformed("model listing has no models array", payload)
        return [
            ModelInfo(
                id=str(item["name"]),
                provider=self.provider_name,
                metadata={k: item[k] for k in ("modified_at", "size", "digest", "details") if k in item},
            )
            for item in models
            if isinstance(item, dict) and item.get("name")
        ]


__all__ = ["OllamaAdapter", "OLLAMA_FINISH_REASONS"]
