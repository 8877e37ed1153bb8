"""Transport tests against ``httpx.MockTransport`` (no network)."""

from __future__ import annotations

import httpx
import pytest

from unillm.base.errors import ErrorCode, TransportError
from unillm.base.http import HttpxTransport, RawStream


def _transport(handler) -> HttpxTransport:
    return HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_send_passes_request_through_and_returns_error_statuses():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = request.content
        return httpx.Response(500, content=b'{"error": "boom"}', headers={"x-request-id": "abc"})

    raw = _transport(handler).send(
        "https://api.example.com/v1/chat", {"Authorization": "Bearer k"}, b'{"a": 1}', 5.0
    )
    assert raw.status_code == 500  # nosec B101 - asserts are appropriate in unit tests
    assert raw.body == b'{"error": "boom"}'  # nosec B101 - asserts are appropriate in unit tests
    assert raw.headers["x-request-id"] == "abc"  # nosec B101 - asserts are appropriate in unit tests
    assert seen == {  # nosec B101 - asserts are appropriate in unit tests
        "method": "POST",
        "url": "https://api.example.com/v1/chat",
        "auth": "Bearer k",
        "body": b'{"a": 1}',
    }


def test_send_supports_get_without_body():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"  # nosec B101 - asserts are appropriate in unit tests
        return httpx.Response(200, json={"data": []})

    raw = _transport(handler).send("https://api.example.com/v1/models", {}, None, None, method="GET")
    assert raw.ok and raw.json() == {"data": []}  # nosec B101 - asserts are appropriate in unit tests


@pytest.mark.parametrize(
    ("exc", "code", "retryable"),
    [
        (httpx.ConnectError("refused"), ErrorCode.TRANSIENT, True),
        (httpx.ReadError("reset"), ErrorCode.TRANSIENT, True),
        (httpx.ReadTimeout("slow"), ErrorCode.TIMEOUT, True),
        (httpx.ConnectTimeout("slow"), ErrorCode.TIMEOUT, True),
        (httpx.UnsupportedProtocol("ftp"), ErrorCode.VALIDATION, False),
    ],
)
def test_network_failures_raise_transport_error(exc, code, retryable):
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc

    with pytest.raises(TransportError) as ei:
        _transport(handler).send("https://api.example.com/v1/chat?key=secret", {}, b"{}", 1.0)
    err = ei.value
    assert err.code is code  # nosec B101 - asserts are appropriate in unit tests
    assert err.retryable is retryable  # nosec B101 - asserts are appropriate in unit tests
    assert err.endpoint == "https://api.example.com/v1/chat"  # nosec B101 - query stripped
    assert err.raw is exc  # nosec B101 - asserts are appropriate in unit tests


def test_open_stream_yields_chunks_once():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=iter([b"data: a\n", b"data: b\n"]))

    stream = _transport(handler).open_stream("https://api.example.com/v1/chat", {}, b"{}", 1.0)
    assert stream.ok  # nosec B101 - asserts are appropriate in unit tests
    assert b"".join(stream) == b"data: a\ndata: b\n"  # nosec B101 - asserts are appropriate in unit tests
    assert stream.closed  # nosec B101 - exhausted streams close themselves
    with pytest.raises(RuntimeError):
        iter(stream)


def test_open_stream_returns_error_status_for_adapter():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, content=b'{"error": {"message": "slow down"}}')

    stream = _transport(handler).open_stream("https://api.example.com/v1/chat", {}, b"{}", 1.0)
    assert stream.status_code == 429  # nosec B101 - asserts are appropriate in unit tests
    raw = stream.to_response()
    assert raw.json()["error"]["message"] == "slow down"  # nosec B101


def test_raw_stream_close_stops_iteration_and_calls_hook():
    closed = []
    stream = RawStream(200, {}, iter([b"a", b"b", b"c"]), on_close=lambda: closed.append(True))
    it = iter(stream)
    assert next(it) == b"a"  # nosec B101 - asserts are appropriate in unit tests
    stream.close()
    assert list(it) == []  # nosec B101 - asserts are appropriate in unit tests
    stream.close()
    assert closed == [True]  # nosec B101 - close is idempotent


def test_raw_stream_abandoned_iterator_closes_stream():
    closed = []
    stream = RawStream(200, {}, iter([b"a", b"b"]), on_close=lambda: closed.append(True))
    it = iter(stream)
    next(it)
    it.close()
    assert stream.closed and closed == [True]  # nosec B101 - asserts are appropriate in unit tests
