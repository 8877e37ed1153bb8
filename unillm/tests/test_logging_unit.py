from __future__ import annotations

import json
import logging

from unillm.base.log_support import JsonFormatter, LogContext
from unillm.base.logging import (
    BASE_LOGGER_NAME,
    REQUIRED_NORMALIZED_KEYS,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from unillm.base.models import TokenUsage


def _record(msg: str, name: str = "unillm.test") -> logging.LogRecord:
    return logging.LogRecord(name, logging.INFO, __file__, 1, msg, None, None)


def test_json_formatter_hoists_structured_message():
    line = JsonFormatter().format(_record(json.dumps({"event": "chat.end", "provider": "openai"})))
    data = json.loads(line)
    assert data["event"] == "chat.end" and data["provider"] == "openai"  # nosec B101
    assert data["level"] == "INFO" and data["logger"] == "unillm.test"  # nosec B101
    assert "msg" not in data  # nosec B101 - asserts are appropriate in unit tests


def test_json_formatter_keeps_plain_message():
    data = json.loads(JsonFormatter().format(_record("plain text")))
    assert data["msg"] == "plain text"  # nosec B101 - asserts are appropriate in unit tests


def test_normalized_event_has_required_keys(log_capture):
    logger = get_logger("unillm.test")
    ctx = LogContext(provider="gemini", model="g", extra={"dropped": None})
    normalized_log_event(
        logger,
        "stream.finalize",
        ctx,
        phase="finalize",
        emitted=True,
        tokens=TokenUsage(1, 2),
        chunks=3,
        attempt_note=None,
    )
    payload = json.loads(log_capture[-1].getMessage())
    for key in REQUIRED_NORMALIZED_KEYS:
        if key != "error_code":
            assert key in payload  # nosec B101 - asserts are appropriate in unit tests
    assert "error_code" not in payload  # nosec B101 - asserts are appropriate in unit tests
    assert payload["tokens"] == {"prompt": 1, "completion": 2, "total": 3}  # nosec B101
    assert payload["chunks"] == 3 and "attempt_note" not in payload  # nosec B101
    assert payload["provider"] == "gemini" and "dropped" not in payload  # nosec B101


def test_extra_fields_never_overwrite_normalized_values(log_capture):
    logger = get_logger("unillm.test")
    normalized_log_event(logger, "x", phase="start", emitted=False, tokens=None, **{"phase_extra": 1})
    log_event(logger, "y", keep_none=False, value=None, other=2)
    first = json.loads(log_capture[-2].getMessage())
    second = json.loads(log_capture[-1].getMessage())
    assert first["phase"] == "start" and first["phase_extra"] == 1  # nosec B101
    assert second == {"event": "y", "other": 2}  # nosec B101 - asserts are appropriate in unit tests


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv("UNILLM_LOG_LEVEL", "warning")
    assert get_logger().level == logging.WARNING  # nosec B101 - asserts are appropriate in unit tests
    monkeypatch.setenv("UNILLM_LOG_LEVEL", "bogus")
    assert get_logger().level == logging.INFO  # nosec B101 - asserts are appropriate in unit tests


def test_child_loggers_propagate_to_base():
    child = get_logger("unillm.client")
    base = logging.getLogger(BASE_LOGGER_NAME)
    assert child.propagate and child.handlers == []  # nosec B101
    assert base.propagate is False  # nosec B101 - asserts are appropriate in unit tests


def test_configure_logger_file_handler(tmp_path):
    target = tmp_path / "logs" / "unillm.log"
    logger = configure_logger(level="DEBUG", file_path=str(target))
    try:
        logging.getLogger("unillm.test").debug(json.dumps({"event": "file.check"}))
        for handler in logger.handlers:
            handler.flush()
        line = target.read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["event"] == "file.check"  # nosec B101
    finally:
        configure_logger(level="INFO", file_path=None)
