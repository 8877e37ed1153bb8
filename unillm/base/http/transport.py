"""
HTTP transport: one outbound network call per invocation, no retries.

``HttpxTransport`` is the default implementation of the :class:`Transport`
protocol. HTTP error statuses are returned to the caller untouched (the
adapter interprets them); only failures of the exchange itself raise, as
:class:`TransportError`.
"""
from __future__ import annotations

from typing import Callable, Dict, Iterable, Iterator, Mapping, Optional, Protocol, runtime_checkable

import httpx

from ..errors import ErrorCode, TransportError, classify_exception
from ..models import RawResponse
from ..timeouts import build_httpx_timeout
from .client import get_httpx_client

_RETRYABLE_NETWORK_CODES = frozenset({ErrorCode.TIMEOUT, ErrorCode.TRANSIENT})


class RawStream:
    """Lazy, single-consumption sequence of byte chunks from an open response.

    Attributes:
        status_code: HTTP status of the response.
        headers: Response headers.

    Iterating twice raises ``RuntimeError``. ``close()`` releases the
    connection immediately without draining the remaining body and is safe to
    call more than once.
    """

    def __init__(
        self,
        status_code: int,
        headers: Mapping[str, str],
        chunks: Iterable[bytes],
        on_close: Optional[Callable[[], None]] = None,
    ) -> None:
        self.status_code = status_code
        self.headers: Dict[str, str] = dict(headers)
        self._chunks = chunks
        self._on_close = on_close
        self._consumed = False
        self._closed = False

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> Iterator[bytes]:
        if self._consumed:
            raise RuntimeError("stream already consumed")
        if self._closed:
            raise RuntimeError("stream is closed")
        self._consumed = True
        return self._iterate()

    def _iterate(self) -> Iterator[bytes]:
        try:
            for chunk in self._chunks:
                if self._closed:
                    return
                if chunk:
                    yield chunk
        finally:
            self.close()

    def read(self) -> bytes:
        """Drain the remaining body into memory (used for error statuses)."""
        return b"".join(self)

    def to_response(self) -> RawResponse:
        """Drain the stream into a :class:`RawResponse`."""
        return RawResponse(status_code=self.status_code, body=self.read(), headers=self.headers)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._on_close is not None:
            self._on_close()
        close_chunks = getattr(self._chunks, "close", None)
        if callable(close_chunks):
            close_chunks()

    def __enter__(self) -> "RawStream":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


@runtime_checkable
class Transport(Protocol):
    """Network seam used by the facade.

    Implementations perform exactly one outbound call per invocation and
    never retry.
    """

    def send(
        self,
        endpoint: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
        timeout: Optional[float],
        *,
        method: str = "POST",
    ) -> RawResponse: ...

    def open_stream(
        self,
        endpoint: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
        timeout: Optional[float],
        *,
        method: str = "POST",
    ) -> RawStream: ...


def _redact(endpoint: str) -> str:
    return endpoint.split("?", 1)[0]


def _transport_error(exc: Exception, endpoint: str) -> TransportError:
    code = classify_exception(exc)
    return TransportError(
        message=f"{type(exc).__name__}: {exc}",
        retryable=code in _RETRYABLE_NETWORK_CODES,
        code=code,
        endpoint=_redact(endpoint),
        raw=exc,
    )


class HttpxTransport:
    """Default :class:`Transport` backed by pooled ``httpx.Client`` instances.

    Parameters:
        client: Optional explicit client (tests pass one wrapping
            ``httpx.MockTransport``). When omitted, clients come from the
            shared pool.
    """

    def __init__(self, client: Optional[httpx.Client] = None) -> None:
        self._client = client

    def _get_client(self, purpose: str) -> httpx.Client:
        if self._client is not None:
            return self._client
        return get_httpx_client(None, purpose)

    def _build(
        self,
        client: httpx.Client,
        method: str,
        endpoint: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
        timeout: Optional[float],
        streaming: bool,
    ) -> httpx.Request:
        return client.build_request(
            method,
            endpoint,
            headers=dict(headers),
            content=body,
            timeout=build_httpx_timeout(timeout, streaming=streaming),
        )

    def send(
        self,
        endpoint: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
        timeout: Optional[float],
        *,
        method: str = "POST",
    ) -> RawResponse:
        client = self._get_client("send")
        try:
            request = self._build(client, method, endpoint, headers, body, timeout, False)
            response = client.send(request)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise _transport_error(exc, endpoint) from exc
        return RawResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    def open_stream(
        self,
        endpoint: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
        timeout: Optional[float],
        *,
        method: str = "POST",
    ) -> RawStream:
        client = self._get_client("stream")
        try:
            request = self._build(client, method, endpoint, headers, body, timeout, True)
            response = client.send(request, stream=True)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise _transport_error(exc, endpoint) from exc

        def chunks() -> Iterator[bytes]:
            try:
                yield from response.iter_bytes()
            except httpx.HTTPError as exc:
                raise _transport_error(exc, endpoint) from exc

        return RawStream(
            status_code=response.status_code,
            headers=dict(response.headers),
            chunks=chunks(),
            on_close=response.close,
        )


__all__ = ["RawStream", "Transport", "HttpxTransport"]
