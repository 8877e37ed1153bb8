"""Record framing for streamed responses.

Providers stream either Server-Sent Events (one ``field: value`` per line,
events separated by blank lines) or newline-delimited JSON. Both are
line-oriented, so a single splitter serves both; records split across network
chunks are reassembled here before reaching an adapter.
"""
from __future__ import annotations

from typing import Iterable, Iterator, Optional

SSE = "sse"
NDJSON = "ndjson"
STREAM_FORMATS = (SSE, NDJSON)


def iter_lines(chunks: Iterable[bytes]) -> Iterator[bytes]:
    """Yield complete lines (without terminators) from arbitrary byte chunks.

    Handles ``\\n``, ``\\r\\n`` and a trailing line without a terminator.
    Blank lines are yielded as ``b""``; SSE uses them as event separators.
    """
    buffer = b""
    for chunk in chunks:
        if not chunk:
            continue
        buffer += chunk
        while True:
            nl = buffer.find(b"\n")
            if nl < 0:
                break
            line, buffer = buffer[:nl], buffer[nl + 1 :]
            yield line.rstrip(b"\r")
    if buffer:
        yield buffer.rstrip(b"\r")


def iter_records(chunks: Iterable[bytes], stream_format: str) -> Iterator[bytes]:
    """Frame ``chunks`` into records for an adapter's ``deserialize_chunk``.

    For NDJSON, blank lines carry nothing and are dropped. For SSE, every
    line is passed through so adapters can see ``event:`` lines as well as
    ``data:`` lines.
    """
    if stream_format not in STREAM_FORMATS:
        raise ValueError(f"unknown stream format: {stream_format!r}")
    for line in iter_lines(chunks):
        if stream_format == NDJSON and not line.strip():
            continue
        yield line


def sse_data(record: bytes) -> Optional[str]:
    """Return the payload of an SSE ``data:`` line, else ``None``.

    Comments (``:`` prefix), ``event:``/``id:``/``retry:`` fields and blank
    separators all return ``None``.
    """
    line = record.decode("utf-8", errors="replace")
    if not line.startswith("data:"):
        return None
    value = line[len("data:") :]
    if value.startswith(" "):
        value = value[1:]
    return value


__all__ = ["SSE", "NDJSON", "STREAM_FORMATS", "iter_lines", "iter_records", "sse_data"]
