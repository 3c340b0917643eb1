"""Unit tests for the JSON log formatter."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from error_solutions_bot.logging import JsonFormatter, configure_logging


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="error_solutions_bot.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Issue %s created",
        args=("#3",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_core_fields_and_extra() -> None:
    payload = json.loads(JsonFormatter().format(_record(issue_number=3)))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "error_solutions_bot.test"
    assert payload["message"] == "Issue #3 created"
    assert payload["extra"] == {"issue_number": 3}
    assert "timestamp" in payload


def test_formatter_omits_extra_when_absent() -> None:
    payload = json.loads(JsonFormatter().format(_record()))

    assert "extra" not in payload
    assert "exception" not in payload


def test_formatter_includes_exception() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(JsonFormatter().format(record))
    assert "RuntimeError: boom" in payload["exception"]


def test_configure_logging_replaces_handlers(capsys: pytest.CaptureFixture[str]) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        configure_logging("debug")
        configure_logging("debug")

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert logging.getLogger("urllib3").level == logging.INFO

        logging.getLogger("error_solutions_bot").debug("hello", extra={"k": "v"})
        line = capsys.readouterr().out.strip().splitlines()[-1]
        assert json.loads(line)["extra"] == {"k": "v"}
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
