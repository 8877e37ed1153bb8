"""BaseAdapter: shared plumbing for provider adapters.

Purpose:
- Hold the immutable ``ProviderConfig`` and build request headers from it.
- Enforce the per-provider parameter support matrix declared as class
  attributes, so ``serialize`` fails with ``UnsupportedParameter`` before any
  network call.
- Decode JSON bodies, usage counters and error payloads uniformly, raising
  ``MalformedResponse`` / ``ProviderError`` at the adapter seam.

Concrete adapters implement the wire-specific hooks:
``serialize``, ``_parse_response``, ``deserialize_chunk`` and, where the
provider supports it, ``serialize_list_models`` / ``_parse_models``.

Adapters never perform I/O. The factory creates one adapter per call, so
per-stream decoding state kept on the instance is never shared between
concurrent streams.
"""

from __future__ import annotations

import json
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

from ..config.provider_config import ProviderConfig, ProviderKind
from .errors import MalformedResponse, ProviderError, UnsupportedParameter, provider_error_from_status
from .models import (
    FinishReason,
    GenerationParams,
    ModelInfo,
    RawResponse,
    StreamChunk,
    TokenUsage,
    UnifiedRequest,
    UnifiedResponse,
    WireRequest,
)
from .streaming import SSE


class BaseAdapter:
    """Reusable base class for provider adapters.

    Class attributes declare what the provider accepts:

    - ``unsupported_params``: unified parameter names the provider rejects.
    - ``temperature_range``: inclusive ``(low, high)``; ``high`` may be None.
    - ``max_stop_sequences``: maximum stop sequence count, None for no limit.
    - ``finish_reasons``: provider finish value -> ``FinishReason``.
    """

    kind: ProviderKind
    stream_format: str = SSE
    unsupported_params: FrozenSet[str] = frozenset()
    temperature_range: Tuple[float, Optional[float]] = (0.0, 2.0)
    max_stop_sequences: Optional[int] = None
    finish_reasons: Mapping[str, FinishReason] = {}

    def __init__(self, config: ProviderConfig) -> None:
        self._config = config
        self._model: Optional[str] = None
        self._stream_state: Dict[str, Any] = {}

    @property
    def provider_name(self) -> str:
        return self.kind.value

    @property
    def config(self) -> ProviderConfig:
        return self._config

    # ----- Request side -----
    def prepare(self, request: UnifiedRequest) -> None:
        """Remember the requested model and validate parameters."""
        self._model = request.model
        self.check_params(request.params)

    def check_params(self, params: GenerationParams) -> None:
        """Raise ``UnsupportedParameter`` for anything the provider cannot express."""
        for name, value in params.specified().items():
            if name in self.unsupported_params:
                raise UnsupportedParameter(provider=self.provider_name, parameter=name, value=value)
        low, high = self.temperature_range
        t = params.temperature
        if t is not None and (t < low or (high is not None and t > high)):
            bound = f"within [{low:g}, {high:g}]" if high is not None else f">= {low:g}"
            raise UnsupportedParameter(
                provider=self.provider_name,
                parameter="temperature",
                reason=f"must be {bound}",
                value=t,
            )
        if params.stop and self.max_stop_sequences is not None and len(params.stop) > self.max_stop_sequences:
            raise UnsupportedParameter(
                provider=self.provider_name,
                parameter="stop",
                reason=f"at most {self.max_stop_sequences} sequences",
                value=len(params.stop),
            )

    def auth_headers(self, api_key: Optional[str]) -> Dict[str, str]:
        """Return the credential header(s); bearer token by default."""
        return {"Authorization": f"Bearer {api_key}"} if api_key else {}

    def headers(self, *, stream: bool = False) -> Dict[str, str]:
        """Build request headers: static config headers, content type, auth.

        Raises:
            ConfigError: The provider needs a credential and none resolves.
        """
        api_key = self._config.require_api_key()
        out: Dict[str, str] = dict(self._config.headers)
        out["Content-Type"] = "application/json"
        out["Accept"] = "text/event-stream" if stream and self.stream_format == SSE else "application/json"
        out.update(self.auth_headers(api_key))
        return out

    def begin_stream(self, request: UnifiedRequest) -> None:
        self._model = request.model
        self._stream_state = {}

    # ----- Response side -----
    def deserialize(self, raw: RawResponse) -> UnifiedResponse:
        if not raw.ok:
            raise self.parse_error(raw)
        return self._parse_response(self.decode_json(raw))

    def _parse_response(self, payload: Any) -> UnifiedResponse:  # pragma: no cover - abstract
        raise NotImplementedError

    def deserialize_chunk(self, record: bytes) -> Optional[StreamChunk]:  # pragma: no cover - abstract
        raise NotImplementedError

    def serialize(self, request: UnifiedRequest) -> WireRequest:  # pragma: no cover - abstract
        raise NotImplementedError

    def serialize_list_models(self) -> WireRequest:  # pragma: no cover - abstract
        raise NotImplementedError

    def deserialize_models(self, raw: RawResponse) -> List[ModelInfo]:
        if not raw.ok:
            raise self.parse_error(raw)
        return self._parse_models(self.decode_json(raw))

    def _parse_models(self, payload: Any) -> List[ModelInfo]:  # pragma: no cover - abstract
        raise NotImplementedError

    def parse_error(self, raw: RawResponse) -> ProviderError:
        """Map an error status and its payload to a ``ProviderError``."""
        message = f"HTTP {raw.status_code}"
        provider_code: Optional[str] = None
        payload: Any = None
        try:
            payload = raw.json()
        except ValueError:
            excerpt = raw.excerpt().strip()
            if excerpt:
                message = f"{message}: {excerpt}"
        else:
            found_message, provider_code = self._error_fields(payload)
            if found_message:
                message = found_message
        return provider_error_from_status(
            provider=self.provider_name,
            status=raw.status_code,
            message=message,
            provider_code=provider_code,
            model=self._model,
            raw=payload,
        )

    def _error_fields(self, payload: Any) -> Tuple[Optional[str], Optional[str]]:
        """Extract ``(message, provider_code)`` from ``{"error": {...}}`` payloads."""
        if not isinstance(payload, dict):
            return None, None
        err = payload.get("error")
        if isinstance(err, str):
            return err, None
        if not isinstance(err, dict):
            return None, None
        code = err.get("code") or err.get("type") or err.get("status")
        return err.get("message"), (str(code) if code is not None else None)

    def stream_error(self, payload: Any) -> ProviderError:
        """Build a ``ProviderError`` for an error delivered inside a stream."""
        message, provider_code = self._error_fields(payload)
        return provider_error_from_status(
            provider=self.provider_name,
            status=None,
            message=message or "stream error",
            provider_code=provider_code,
            model=self._model,
            raw=payload,
        )

    # ----- Decoding helpers -----
    def decode_json(self, raw: RawResponse) -> Any:
        try:
            return raw.json()
        except ValueError as exc:
            raise MalformedResponse(
                "response body is not valid JSON",
                provider=self.provider_name,
                body_excerpt=raw.excerpt(),
            ) from exc

    def decode_record(self, data: str) -> Any:
        """Decode one stream record payload as JSON."""
        try:
            return json.loads(data)
        except ValueError as exc:
            raise MalformedResponse(
                "stream record is not valid JSON",
                provider=self.provider_name,
                body_excerpt=data[:200],
            ) from exc

    def malformed(self, message: str, payload: Any = None) -> MalformedResponse:
        excerpt = json.dumps(payload, default=str)[:200] if payload is not None else None
        return MalformedResponse(message, provider=self.provider_name, body_excerpt=excerpt)

    def usage(
        self,
        prompt: Any = None,
        completion: Any = None,
        total: Any = None,
    ) -> TokenUsage:
        """Build ``TokenUsage``; inconsistent counters raise ``MalformedResponse``."""
        try:
            return TokenUsage(prompt_tokens=prompt, completion_tokens=completion, total_tokens=total)
        except ValueError as exc:
            raise MalformedResponse(f"invalid token usage: {exc}", provider=self.provider_name) from exc

    def finish(self, value: Optional[str], metadata: Dict[str, Any]) -> FinishReason:
        """Map a provider finish value; unknown values map to ``COMPLETED``.

        The raw value is recorded in ``metadata["raw_finish_reason"]`` when it
        is not one of the known values.
        """
        if value is None:
            return FinishReason.COMPLETED
        mapped = self.finish_reasons.get(value)
        if mapped is None:
            metadata["raw_finish_reason"] = value
            return FinishReason.COMPLETED
        return mapped

    def response(
        self,
        segments: List[str],
        usage: TokenUsage,
        finish_reason: FinishReason,
        model: Optional[str],
        metadata: Dict[str, Any],
    ) -> UnifiedResponse:
        return UnifiedResponse(
            segments=tuple(segments),
            usage=usage,
            finish_reason=finish_reason,
            provider=self.provider_name,
            model=model or self._model or "",
            metadata=metadata,
        )


__all__ = ["BaseAdapter"]
