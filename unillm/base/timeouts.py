"""Unified timeout defaults for the transport.

This module centralizes the timeout values used when a ``ProviderConfig``
does not set one explicitly, and the idle timeout applied between stream
chunks.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use (and again whenever the relevant variables change). Supported
    environment variables (all optional):
        UNILLM_TIMEOUT_HTTP_SECONDS
        UNILLM_TIMEOUT_CONNECT_SECONDS
        UNILLM_TIMEOUT_STREAM_SECONDS

Design Constraints
------------------
1. No hard-coded ad-hoc timeouts outside this module.
2. Avoid per-call env parsing (cache after first read).
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import httpx

DEFAULT_HTTP_TIMEOUT_SECONDS = 60.0
DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0
DEFAULT_STREAM_IDLE_TIMEOUT_SECONDS = 120.0


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Baseline request timeout for single-shot calls.
        connect_timeout_seconds: Upper bound for establishing a connection.
        stream_timeout_seconds: Idle timeout while waiting for the next
            stream chunk.
    """

    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT_SECONDS
    stream_timeout_seconds: float = DEFAULT_STREAM_IDLE_TIMEOUT_SECONDS


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None

_ENV_NAMES = (
    "UNILLM_TIMEOUT_HTTP_SECONDS",
    "UNILLM_TIMEOUT_CONNECT_SECONDS",
    "UNILLM_TIMEOUT_STREAM_SECONDS",
)


def _parse_env_float(name: str, default: float) -> float:
    """Parse a positive float from ``name``; fall back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        http_timeout_seconds=_parse_env_float("UNILLM_TIMEOUT_HTTP_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS),
        connect_timeout_seconds=_parse_env_float("UNILLM_TIMEOUT_CONNECT_SECONDS", DEFAULT_CONNECT_TIMEOUT_SECONDS),
        stream_timeout_seconds=_parse_env_float("UNILLM_TIMEOUT_STREAM_SECONDS", DEFAULT_STREAM_IDLE_TIMEOUT_SECONDS),
    )
    _ENV_GUARD = guard
    return _CACHED


def build_httpx_timeout(total_seconds: Optional[float], *, streaming: bool = False) -> httpx.Timeout:
    """Translate a per-call timeout into an ``httpx.Timeout``.

    Single-shot calls use ``total_seconds`` for every phase. Streams keep the
    same connect/write bounds but use the idle stream timeout for reads, since
    a long generation legitimately outlives any whole-request budget.
    """
    cfg = get_timeout_config()
    total = total_seconds if total_seconds is not None else cfg.http_timeout_seconds
    connect = min(total, cfg.connect_timeout_seconds)
    read = cfg.stream_timeout_seconds if streaming else total
    return httpx.Timeout(total, connect=connect, read=read)


__all__ = [
    "DEFAULT_HTTP_TIMEOUT_SECONDS",
    "TimeoutConfig",
    "get_timeout_config",
    "build_httpx_timeout",
]
