"""Record framing: lines split across network chunks are reassembled."""

from __future__ import annotations

import pytest

from unillm.base.streaming import NDJSON, SSE, iter_lines, iter_records, sse_data


def test_iter_lines_reassembles_across_chunks():
    chunks = [b"data: {\"a\"", b": 1}\n\nda", b"ta: [DONE]\n"]
    assert list(iter_lines(chunks)) == [b'data: {"a": 1}', b"", b"data: [DONE]"]  # nosec B101


def test_iter_lines_handles_crlf_and_unterminated_tail():
    assert list(iter_lines([b"one\r\ntwo\r", b"\nthree"])) == [b"one", b"two", b"three"]  # nosec B101
    assert list(iter_lines([])) == []  # nosec B101 - asserts are appropriate in unit tests


def test_iter_records_ndjson_drops_blank_lines():
    body = [b'{"a": 1}\n\n{"b"', b": 2}\n"]
    assert list(iter_records(body, NDJSON)) == [b'{"a": 1}', b'{"b": 2}']  # nosec B101


def test_iter_records_sse_keeps_every_line():
    body = [b"event: ping\ndata: {}\n\n"]
    assert list(iter_records(body, SSE)) == [b"event: ping", b"data: {}", b""]  # nosec B101


def test_iter_records_rejects_unknown_format():
    with pytest.raises(ValueError):
        list(iter_records([b"x"], "xml"))


@pytest.mark.parametrize(
    ("record", "expected"),
    [
        (b"data: hello", "hello"),
        (b"data:hello", "hello"),
        (b"data:  two spaces", " two spaces"),
        (b"data: [DONE]", "[DONE]"),
        (b": keep-alive", None),
        (b"event: message_start", None),
        (b"", None),
    ],
)
def test_sse_data(record, expected):
    assert sse_data(record) == expected  # nosec B101 - asserts are appropriate in unit tests
