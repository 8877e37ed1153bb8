"""Pytest fixtures shared by the unillm test suite.

Provides a recording fake transport, provider config construction, a
no-op ``time.sleep`` and structured log capture. No test touches the network.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import pytest

from unillm.base.http import RawStream
from unillm.base.logging import get_logger
from unillm.base.models import RawResponse
from unillm.base.resilience.retry import RetryPolicy
from unillm.config import ProviderConfig, clear_config_cache
from unillm.config.defaults import DEFAULT_BASE_URLS


@dataclass
class Call:
    kind: str
    endpoint: str
    headers: Dict[str, str]
    body: Optional[bytes]
    timeout: Optional[float]
    method: str

    def json(self) -> Any:
        return json.loads(self.body) if self.body else None


class FakeTransport:
    """Scripted transport that records every invocation.

    Queue single-shot results with ``queue_json``/``queue_raw``/``queue_error``
    and stream results with ``queue_stream``/``queue_stream_error``. Items are
    consumed in order.
    """

    def __init__(self) -> None:
        self.calls: List[Call] = []
        self.opened: List[RawStream] = []
        self._responses: List[Union[RawResponse, Exception]] = []
        self._streams: List[Union[RawStream, Exception]] = []

    # ----- scripting -----
    def queue_raw(self, status: int, body: bytes = b"", headers: Optional[Mapping[str, str]] = None) -> None:
        self._responses.append(RawResponse(status_code=status, body=body, headers=dict(headers or {})))

    def queue_json(self, payload: Any, status: int = 200) -> None:
        self.queue_raw(status, json.dumps(payload).encode("utf-8"))

    def queue_error(self, exc: Exception) -> None:
        self._responses.append(exc)

    def queue_stream(
        self,
        records: Iterable[Union[str, bytes]],
        status: int = 200,
        chunk_size: Optional[int] = None,
    ) -> None:
        """Queue a stream whose body is ``records`` joined by newlines.

        ``chunk_size`` splits the body into fixed-size network chunks so
        records straddle chunk boundaries.
        """
        body = b"".join((r.encode("utf-8") if isinstance(r, str) else r) + b"\n" for r in records)
        if chunk_size:
            chunks = [body[i : i + chunk_size] for i in range(0, len(body), chunk_size)]
        else:
            chunks = [body]
        self._streams.append(RawStream(status_code=status, headers={}, chunks=iter(chunks)))

    def queue_stream_error(self, exc: Exception) -> None:
        self._streams.append(exc)

    # ----- Transport protocol -----
    def send(self, endpoint, headers, body, timeout, *, method="POST") -> RawResponse:
        self.calls.append(Call("send", endpoint, dict(headers), body, timeout, method))
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def open_stream(self, endpoint, headers, body, timeout, *, method="POST") -> RawStream:
        self.calls.append(Call("stream", endpoint, dict(headers), body, timeout, method))
        item = self._streams.pop(0)
        if isinstance(item, Exception):
            raise item
        self.opened.append(item)
        return item


@pytest.fixture()
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def make_config():
    """Return a builder for ``ProviderConfig`` with a test credential."""

    def _make(kind: str = "openai", **overrides: Any) -> ProviderConfig:
        values: Dict[str, Any] = {
            "kind": kind,
            "endpoint": DEFAULT_BASE_URLS[kind],
            "api_key": "test-key",
            "timeout_seconds": 5.0,
            "retry": RetryPolicy(max_attempts=3, delay_base=2.0),
        }
        values.update(overrides)
        return ProviderConfig(**values)

    return _make


@pytest.fixture()
def no_sleep(monkeypatch) -> List[float]:
    """Replace ``time.sleep`` with a recorder; returns the recorded delays."""
    delays: List[float] = []
    monkeypatch.setattr(time, "sleep", lambda seconds: delays.append(seconds))
    return delays


@pytest.fixture()
def log_capture():
    """Capture records emitted under the ``unillm`` logger."""
    records: List[logging.LogRecord] = []
    handler = logging.Handler()
    handler.emit = lambda record: records.append(record)  # type: ignore
    handler.setLevel(logging.DEBUG)
    logger = get_logger()
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield records
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    for name in ("UNILLM_CONFIG_FILE", "UNILLM_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()
