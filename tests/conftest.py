"""Shared fixtures: temp CSV files and a clean logging/env state per test."""

from __future__ import annotations

import pytest

from csvbind.core.logging_config import reset_logging


@pytest.fixture(autouse=True)
def _clean_state(monkeypatch):
    for name in ("DELIMITER", "ENCODING", "NUMBER_LOCALE", "STRICT_GROUPING", "WORKERS",
                 "BATCH_SIZE", "CONVERTER_MODE", "MAX_REJECTIONS_KEPT", "LOG_LEVEL"):
        monkeypatch.delenv(f"CSVBIND_{name}", raising=False)
    yield
    reset_logging()


@pytest.fixture
def write_csv(tmp_path):
    """Write ``text`` to a file under tmp_path and return its path."""

    def _write(text: str, name: str = "input.csv", encoding: str = "utf-8"):
        path = tmp_path / name
        path.write_bytes(text.encode(encoding))
        return path

    return _write
