"""Streaming helpers: record framing and chunk accumulation."""

from .framing import NDJSON, SSE, STREAM_FORMATS, iter_lines, iter_records, sse_data
from .accumulate import accumulate_chunks

__all__ = [
    "NDJSON",
    "SSE",
    "STREAM_FORMATS",
    "iter_lines",
    "iter_records",
    "sse_data",
    "accumulate_chunks",
]
