"""Tests for the structured JSON log formatter and logger setup."""

from __future__ import annotations

import io
import json
import logging
import sys
import threading
from datetime import date
from decimal import Decimal

from csvbind.core.logging_config import StructuredFormatter, configure_logging, get_logger


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("csvbind.test", logging.WARNING, __file__, 1, "row %d bad", (7,), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_single_json_line():
    line = StructuredFormatter().format(_record())
    payload = json.loads(line)
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "csvbind.test"
    assert payload["message"] == "row 7 bad"
    assert "\n" not in line


def test_formatter_includes_extra_fields():
    payload = json.loads(StructuredFormatter().format(
        _record(line_number=7, amount=Decimal("1.50"), dob=date(1990, 3, 15))
    ))
    assert payload["line_number"] == 7
    assert payload["amount"] == "1.50"
    assert payload["dob"] == "1990-03-15"


def test_formatter_includes_exception_details():
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord("csvbind.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
    payload = json.loads(StructuredFormatter().format(record))
    assert payload["exc_type"] == "ValueError"
    assert payload["exc_message"] == "boom"
    assert "Traceback" in payload["traceback"]


def test_get_logger_uses_package_namespace():
    assert get_logger("collector").name == "csvbind.collector"


def test_configure_logging_is_idempotent():
    stream = io.StringIO()
    configure_logging(level=logging.INFO, stream=stream)
    configure_logging(level=logging.INFO, stream=stream)
    root = logging.getLogger("csvbind")
    assert len(root.handlers) == 1

    get_logger("test").info("hello", extra={"rows": 3})
    payload = json.loads(stream.getvalue().strip())
    assert payload["message"] == "hello"
    assert payload["rows"] == 3


def test_concurrent_configure_installs_one_handler_before_returning():
    stream = io.StringIO()
    handler_counts = []
    start = threading.Barrier(8)

    def configure():
        start.wait()
        configure_logging(level=logging.INFO, stream=stream)
        handler_counts.append(len(logging.getLogger("csvbind").handlers))

    threads = [threading.Thread(target=configure) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert handler_counts == [1] * 8
