"""
Gemini adapter (Generative Language API).

Wire format:
- ``POST {endpoint}/models/{model}:generateContent`` for single-shot calls and
  ``:streamGenerateContent?alt=sse`` for streams; credential in
  ``x-goog-api-key``.
- System messages become ``systemInstruction``; the assistant role is
  ``model``.
- Each stream record is a complete response fragment. There is no sentinel:
  the fragment carrying a ``finishReason`` (or a prompt block) is terminal.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..base.adapter import BaseAdapter
from ..base.models import FinishReason, ModelInfo, StreamChunk, TokenUsage, UnifiedRequest, UnifiedResponse, WireRequest
from ..base.streaming import sse_data
from ..config.provider_config import ProviderKind
from .helpers import MODEL_PREFIX, build_generate_payload, model_path

GEMINI_FINISH_REASONS = {
    "STOP": FinishReason.COMPLETED,
    "MAX_TOKENS": FinishReason.LENGTH,
    "SAFETY": FinishReason.CONTENT_FILTER,
    "RECITATION": FinishReason.CONTENT_FILTER,
    "BLOCKLIST": FinishReason.CONTENT_FILTER,
    "PROHIBITED_CONTENT": FinishReason.CONTENT_FILTER,
    "SPII": FinishReason.CONTENT_FILTER,
}


class GeminiAdapter(BaseAdapter):
    kind = ProviderKind.GEMINI
    unsupported_params = frozenset()
    temperature_range = (0.0, 2.0)
    max_stop_sequences = 5
    finish_reasons = GEMINI_FINISH_REASONS

    def auth_headers(self, api_key: Optional[str]) -> Dict[str, str]:
        return {"x-goog-api-key": api_key} if api_key else {}

    def serialize(self, request: UnifiedRequest) -> WireRequest:
        self.prepare(request)
        action = "streamGenerateContent?alt=sse" if request.stream else "generateContent"
        return WireRequest(
            path=f"{model_path(request.model)}:{action}",
            payload=build_generate_payload(request),
            headers=self.headers(stream=request.stream),
        )

    def _error_fields(self, payload: Any) -> Tuple[Optional[str], Optional[str]]:
        err = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(err, dict):
            return err.get("message"), err.get("status")
        return super()._error_fields(payload)

    def _usage(self, meta: Any) -> TokenUsage:
        if not isinstance(meta, dict):
            return self.usage()
        prompt = meta.get("promptTokenCount")
        if prompt is not None and meta.get("toolUsePromptTokenCount"):
            prompt += meta["toolUsePromptTokenCount"]
        completion = meta.get("candidatesTokenCount")
        if meta.get("thoughtsTokenCount"):
            completion = (completion or 0) + meta["thoughtsTokenCount"]
        return self.usage(prompt, completion, meta.get("totalTokenCount"))

    def _candidate(self, payload: Dict[str, Any]) -> Tuple[List[str], Optional[str], Dict[str, Any]]:
        """Return ``(texts, finish value, metadata)`` for the first candidate."""
        metadata: Dict[str, Any] = {}
        if payload.get("responseId"):
            metadata["id"] = payload["responseId"]
        feedback = payload.get("promptFeedback") or {}
        candidates = payload.get("candidates")
        if not candidates:
            if feedback.get("blockReason"):
                metadata["block_reason"] = feedback["blockReason"]
                return [], "PROMPT_BLOCKED", metadata
            return [], None, metadata
        first = candidates[0]
        if not isinstance(first, dict):
            raise self.malformed("candidate is not an object", payload)
        parts = (first.get("content") or {}).get("parts") or []
        texts = [p["text"] for p in parts if isinstance(p, dict) and p.get("text") and not p.get("thought")]
        return texts, first.get("finishReason"), metadata

    def _map_finish(self, value: Optional[str], metadata: Dict[str, Any]) -> FinishReason:
        if value == "PROMPT_BLOCKED":
            return FinishReason.CONTENT_FILTER
        return self.finish(value, metadata)

    def _parse_response(self, payload: Any) -> UnifiedResponse:
        if not isinstance(payload, dict):
            raise self.malformed("response is not a JSON object", payload)
        if "candidates" not in payload and "promptFeedback" not in payload:
            raise self.malformed("response has no candidates", payload)
        texts, finish_value, metadata = self._candidate(payload)
        finish = self._map_finish(finish_value, metadata)
        return self.response(
            texts,
            self._usage(payload.get("usageMetadata")),
            finish,
            payload.get("modelVersion"),
            metadata,
        )

    def deserialize_chunk(self, record: bytes) -> Optional[StreamChunk]:
        data = sse_data(record)
        if data is None or not data.strip():
            return None
        obj = self.decode_record(data)
        if not isinstance(obj, dict):
            raise self.malformed("stream record is not a JSON object", obj)
        if "error" in obj:
            raise self.stream_error(obj)
        texts, finish_value, _ = self._candidate(obj)
        delta = "".join(texts)
        if finish_value is not None:
            usage_meta = obj.get("usageMetadata")
            return StreamChunk(
                delta=delta,
                is_final=True,
                finish_reason=self._map_finish(finish_value, {}),
                usage=self._usage(usage_meta) if usage_meta else None,
            )
        return StreamChunk(delta=delta) if delta else None

    # ----- Models -----
    def serialize_list_models(self) -> WireRequest:
        return WireRequest(path="models?pageSize=1000", headers=self.headers(), method="GET")

    def _parse_models(self, payload: Any) -> List[ModelInfo]:
        models = payload.get("models") if isinstance(payload, dict) else None
        if not isinstance(models, list):
            raise self.malformed("model listing has no models array", payload)
        out: List[ModelInfo] = []
        for item in models:
            if not isinstance(item, dict) or not item.get("name"):
                continue
            name = str(item["name"])
            out.append(
                ModelInfo(
                    id=name[len(MODEL_PREFIX):] if name.startswith(MODEL_PREFIX) else name,
                    provider=self.provider_name,
                    owned_by="google",
                    context_length=item.get("inputTokenLimit"),
                    metadata={
                        k: item[k]
                        for k in ("displayName", "outputTokenLimit", "supportedGenerationMethods")
                        if k in item
                    },
                )
            )
        return out


__all__ = ["GeminiAdapter", "GEMINI_FINISH_REASONS"]
