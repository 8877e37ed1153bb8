"""UnifiedClient: the single entry point over every provider.

Flow per call:
    resolve adapter by ``config.kind`` -> serialize -> transport -> deserialize

- Serialization happens before any network activity, so
  ``UnsupportedParameter`` and credential ``ConfigError`` never cost a request.
- Retryable ``TransportError``/``ProviderError`` are re-sent under
  ``config.retry``; the last error is re-raised unchanged once attempts are
  exhausted. Everything else surfaces immediately.
- Streams retry only while opening (connect + status check). Once chunks
  flow, errors go to the consumer. Exactly the last chunk is final; a byte
  stream ending before the provider's terminal record raises
  ``MalformedResponse``. Closing the iterator or cancelling the token closes
  the connection.

The client holds no mutable state beyond its transport, so one instance can
serve concurrent calls from several threads.
"""
from __future__ import annotations

import logging
import time
import uuid
from contextlib import closing
from typing import Iterator, List, Optional

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import ClientError, ErrorCode, MalformedResponse, ProviderError
from .base.factory import AdapterFactory
from .base.interfaces import ProviderAdapter
from .base.http import HttpxTransport, RawStream, Transport
from .base.logging import LogContext, get_logger, normalized_log_event
from .base.models import ModelInfo, StreamChunk, UnifiedRequest, UnifiedResponse, WireRequest
from .base.resilience.retry import retry
from .base.streaming import accumulate_chunks, iter_records
from .config.provider_config import ProviderConfig


def _error_code(error: BaseException) -> str:
    code = getattr(error, "code", None)
    if isinstance(code, ErrorCode):
        return code.value
    return type(error).__name__


class UnifiedClient:
    """Provider-agnostic chat/completion client.

    Parameters:
        transport: Network seam; defaults to :class:`HttpxTransport` over the
            shared connection pool.
    """

    def __init__(self, transport: Optional[Transport] = None) -> None:
        self._transport: Transport = transport if transport is not None else HttpxTransport()
        self._logger = get_logger("unillm.client")

    @property
    def transport(self) -> Transport:
        return self._transport

    # ----- helpers -----
    def _context(self, adapter: ProviderAdapter, model: Optional[str]) -> LogContext:
        return LogContext(provider=adapter.provider_name, model=model, request_id=uuid.uuid4().hex[:12])

    def _attempt_logger(self, ctx: LogContext, phase: str):
        def _log(*, attempt: int, max_attempts: int, delay, error: Optional[ClientError]) -> None:
            normalized_log_event(
                self._logger,
                "retry.attempt",
                ctx,
                phase=phase,
                attempt=attempt + 1,
                max_attempts=max_attempts,
                delay=delay,
                error_code=_error_code(error) if error else None,
                will_retry=bool(error and delay is not None),
                emitted=None,
                tokens=None,
                level=logging.WARNING if error else logging.DEBUG,
            )

        return _log

    def _log_error(self, event: str, ctx: LogContext, phase: str, error: BaseException, start: float) -> None:
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase=phase,
            attempt=None,
            error_code=_error_code(error),
            emitted=False,
            tokens=None,
            error=str(error),
            latency_ms=round((time.monotonic() - start) * 1000, 2),
            level=logging.ERROR,
        )

    # ----- complete -----
    def complete(
        self,
        config: ProviderConfig,
        request: UnifiedRequest,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> UnifiedResponse:
        """Run one chat/completion call and return the normalized response.

        When ``request.stream`` is true the call is streamed and the chunks
        are accumulated into a single response.

        Raises:
            UnsupportedParameter: Before any network call.
            ConfigError: Missing credential, before any network call.
            TransportError / ProviderError: After retries are exhausted, or
                immediately when not retryable.
            MalformedResponse: The provider answered with an unparseable body.
        """
        if request.stream:
            with closing(self.stream(config, request, cancel=cancel)) as chunks:
                return accumulate_chunks(chunks, provider=config.kind.value, model=request.model)

        adapter = AdapterFactory.create(config)
        wire = adapter.serialize(request)
        ctx = self._context(adapter, request.model)
        url = wire.url(config.endpoint)
        body = wire.body()
        normalized_log_event(
            self._logger, "chat.start", ctx, phase="start", attempt=None, emitted=False, tokens=None
        )

        @retry(config.retry, attempt_logger=self._attempt_logger(ctx, "chat"))
        def _send() -> UnifiedResponse:
            raw = self._transport.send(url, wire.headers, body, config.timeout_seconds, method=wire.method)
            return adapter.deserialize(raw)

        start = time.monotonic()
        try:
            response = _send()
        except ClientError as e:
            self._log_error("chat.error", ctx, "finalize", e, start)
            raise
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            attempt=None,
            emitted=bool(response.text),
            tokens=response.usage,
            finish_reason=response.finish_reason.value,
            latency_ms=round((time.monotonic() - start) * 1000, 2),
        )
        return response

    # ----- stream -----
    def stream(
        self,
        config: ProviderConfig,
        request: UnifiedRequest,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> Iterator[StreamChunk]:
        """Return an iterator of ordered ``StreamChunk`` values.

        Serialization runs now, so parameter and credential errors raise from
        this call. The connection is opened on the first ``next()``.
        """
        request = request.with_stream(True)
        adapter = AdapterFactory.create(config)
        wire = adapter.serialize(request)
        return self._iterate(config, request, adapter, wire, cancel)

    def _open(self, config: ProviderConfig, adapter: ProviderAdapter, wire: WireRequest, ctx: LogContext) -> RawStream:
        url = wire.url(config.endpoint)
        body = wire.body()

        @retry(config.retry, attempt_logger=self._attempt_logger(ctx, "stream"))
        def _open_once() -> RawStream:
            raw_stream = self._transport.open_stream(
                url, wire.headers, body, config.timeout_seconds, method=wire.method
            )
            if not raw_stream.ok:
                raise adapter.parse_error(raw_stream.to_response())
            return raw_stream

        return _open_once()

    def _iterate(
        self,
        config: ProviderConfig,
        request: UnifiedRequest,
        adapter: ProviderAdapter,
        wire: WireRequest,
        cancel: Optional[CancellationToken],
    ) -> Iterator[StreamChunk]:
        ctx = self._context(adapter, request.model)
        start = time.monotonic()
        normalized_log_event(
            self._logger, "stream.start", ctx, phase="start", attempt=None, emitted=False, tokens=None
        )
        if cancel is not None:
            cancel.raise_if_cancelled()
        try:
            raw_stream = self._open(config, adapter, wire, ctx)
        except ClientError as e:
            self._log_error("stream.error", ctx, "start", e, start)
            raise

        if cancel is not None:
            cancel.add_callback(raw_stream.close)
        adapter.begin_stream(request)
        index = 0
        try:
            for record in iter_records(raw_stream, adapter.stream_format):
                if cancel is not None:
                    cancel.raise_if_cancelled()
                chunk = adapter.deserialize_chunk(record)
                if chunk is None:
                    continue
                chunk = chunk.with_index(index)
                index += 1
                if chunk.is_final:
                    raw_stream.close()
                    normalized_log_event(
                        self._logger,
                        "stream.finalize",
                        ctx,
                        phase="finalize",
                        attempt=None,
                        emitted=index > 1 or bool(chunk.delta),
                        tokens=chunk.usage,
                        chunks=index,
                        finish_reason=chunk.finish_reason.value if chunk.finish_reason else None,
                        latency_ms=round((time.monotonic() - start) * 1000, 2),
                    )
                    yield chunk
                    return
                yield chunk
            if cancel is not None:
                cancel.raise_if_cancelled()
            raise MalformedResponse(
                "stream ended before its terminal record",
                provider=adapter.provider_name,
            )
        except Exception as e:
            if cancel is not None and cancel.cancelled and not isinstance(e, CancelledError):
                error: Exception = CancelledError(reason=cancel.reason or "stream cancelled")
                self._log_error("stream.error", ctx, "stream", error, start)
                raise error from e
            self._log_error("stream.error", ctx, "stream", e, start)
            raise
        finally:
            raw_stream.close()
            if cancel is not None:
                cancel.remove_callback(raw_stream.close)

    # ----- models -----
    def list_models(self, config: ProviderConfig) -> List[ModelInfo]:
        """Return the models advertised by the provider."""
        adapter = AdapterFactory.create(config)
        wire = adapter.serialize_list_models()
        ctx = self._context(adapter, None)
        url = wire.url(config.endpoint)

        @retry(config.retry, attempt_logger=self._attempt_logger(ctx, "models"))
        def _fetch() -> List[ModelInfo]:
            raw = self._transport.send(url, wire.headers, wire.body(), config.timeout_seconds, method=wire.method)
            return adapter.deserialize_models(raw)

        start = time.monotonic()
        try:
            models = _fetch()
        except ClientError as e:
            self._log_error("models.error", ctx, "finalize", e, start)
            raise
        normalized_log_event(
            self._logger,
            "models.list",
            ctx,
            phase="finalize",
            attempt=None,
            emitted=bool(models),
            tokens=None,
            count=len(models),
        )
        return models

    def check_model(self, config: ProviderConfig, model_id: str) -> ModelInfo:
        """Return the listing entry for ``model_id``.

        Raises:
            ProviderError: With code ``not_found`` when the provider does not
                list the model.
        """
        for info in self.list_models(config):
            if info.id == model_id:
                return info
        raise ProviderError(
            code=ErrorCode.NOT_FOUND,
            message=f"model '{model_id}' is not listed by the provider",
            provider=config.kind.value,
            model=model_id,
        )


_DEFAULT_CLIENT: Optional[UnifiedClient] = None


def _default_client() -> UnifiedClient:
    global _DEFAULT_CLIENT  # noqa: PLW0603 - module-level convenience client
    if _DEFAULT_CLIENT is None:
        _DEFAULT_CLIENT = UnifiedClient()
    return _DEFAULT_CLIENT


def complete(config: ProviderConfig, request: UnifiedRequest, **kwargs) -> UnifiedResponse:
    """Module-level shortcut for :meth:`UnifiedClient.complete`."""
    return _default_client().complete(config, request, **kwargs)


def stream(config: ProviderConfig, request: UnifiedRequest, **kwargs) -> Iterator[StreamChunk]:
    """Module-level shortcut for :meth:`UnifiedClient.stream`."""
    return _default_client().stream(config, request, **kwargs)


def list_models(config: ProviderConfig) -> List[ModelInfo]:
    return _default_client().list_models(config)


def check_model(config: ProviderConfig, model_id: str) -> ModelInfo:
    return _default_client().check_model(config, model_id)


__all__ = [
    "UnifiedClient",
    "complete",
    "stream",
    "list_models",
    "check_model",
]
