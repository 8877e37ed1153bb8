"""Unit tests for error classification helpers."""

from __future__ import annotations

import httpx
import pytest

from unillm.base.errors import (
    ClientError,
    ConfigError,
    ErrorCode,
    MalformedResponse,
    ProviderError,
    TransportError,
    UnsupportedParameter,
    classify_exception,
    code_from_status,
    is_retryable,
    provider_error_from_status,
)


@pytest.mark.parametrize(
    ("status", "code"),
    [
        (400, ErrorCode.VALIDATION),
        (401, ErrorCode.AUTH),
        (403, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (408, ErrorCode.TIMEOUT),
        (409, ErrorCode.CONFLICT),
        (422, ErrorCode.VALIDATION),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (502, ErrorCode.TRANSIENT),
        (503, ErrorCode.UNAVAILABLE),
        (504, ErrorCode.TIMEOUT),
        (529, ErrorCode.UNAVAILABLE),
        (418, ErrorCode.VALIDATION),
        (599, ErrorCode.SERVER_ERROR),
        (302, ErrorCode.UNKNOWN),
        (None, ErrorCode.UNKNOWN),
    ],
)
def test_code_from_status(status, code):
    assert code_from_status(status) is code  # nosec B101 - asserts are appropriate in unit tests


def test_retryable_set():
    retryable = {c for c in ErrorCode if is_retryable(c)}
    assert retryable == {  # nosec B101 - asserts are appropriate in unit tests
        ErrorCode.RATE_LIMIT,
        ErrorCode.TIMEOUT,
        ErrorCode.TRANSIENT,
        ErrorCode.SERVER_ERROR,
        ErrorCode.UNAVAILABLE,
    }


def test_provider_code_refines_status():
    err = provider_error_from_status(provider="anthropic", status=500, message="busy", provider_code="overloaded_error")
    assert err.code is ErrorCode.UNAVAILABLE  # nosec B101 - asserts are appropriate in unit tests
    assert err.retryable  # nosec B101 - asserts are appropriate in unit tests

    err = provider_error_from_status(provider="openai", status=400, message="x", provider_code="something_new")
    assert err.code is ErrorCode.VALIDATION and not err.retryable  # nosec B101


def test_classify_exception():
    assert classify_exception(httpx.ReadTimeout("slow")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ConnectError("refused")) is ErrorCode.TRANSIENT  # nosec B101
    assert classify_exception(httpx.RemoteProtocolError("eof")) is ErrorCode.TRANSIENT  # nosec B101
    assert classify_exception(httpx.UnsupportedProtocol("ftp")) is ErrorCode.VALIDATION  # nosec B101
    assert classify_exception(ValueError("x")) is ErrorCode.UNKNOWN  # nosec B101
    perr = ProviderError(code=ErrorCode.AUTH, message="no", provider="openai")
    assert classify_exception(perr) is ErrorCode.AUTH  # nosec B101


def test_hierarchy_and_retryable_defaults():
    for err in (
        ConfigError("bad"),
        UnsupportedParameter(provider="openai", parameter="top_k"),
        MalformedResponse("bad json", provider="openai"),
        TransportError("down"),
    ):
        assert isinstance(err, ClientError)  # nosec B101 - asserts are appropriate in unit tests
        assert err.retryable is False  # nosec B101 - asserts are appropriate in unit tests
    assert TransportError("down", retryable=True).retryable  # nosec B101
    assert "top_k" in str(UnsupportedParameter(provider="openai", parameter="top_k"))  # nosec B101
