"""Tests for the file-backed and in-memory line sources."""

from __future__ import annotations

import pytest

from csvbind.core.exceptions import FatalInputError
from csvbind.core.protocols import ILineSource
from csvbind.sources.file_source import FileLineSource
from csvbind.sources.memory_source import MemoryLineSource


class TestFileLineSource:
    def test_yields_lines_without_terminators(self, write_csv):
        path = write_csv("a,b\r\n1,2\n3,\n")
        with FileLineSource(path).open() as lines:
            assert list(lines) == ["a,b", "1,2", "3,"]

    def test_reads_lazily(self, write_csv):
        path = write_csv("h\n1\n2\n")
        with FileLineSource(path).open() as lines:
            assert next(lines) == "h"
            assert next(lines) == "1"

    def test_name_is_path(self, write_csv):
        path = write_csv("h\n")
        assert FileLineSource(path).name == str(path)

    def test_missing_file_is_fatal(self, tmp_path):
        source = FileLineSource(tmp_path / "missing.csv")
        with pytest.raises(FatalInputError) as exc_info:
            with source.open():
                pass
        assert exc_info.value.source == str(tmp_path / "missing.csv")

    def test_directory_is_fatal(self, tmp_path):
        with pytest.raises(FatalInputError):
            with FileLineSource(tmp_path).open():
                pass

    def test_undecodable_bytes_are_fatal(self, tmp_path):
        path = tmp_path / "latin.csv"
        path.write_bytes(b"name\ncaf\xe9\n")
        with pytest.raises(FatalInputError, match="not valid utf-8"):
            with FileLineSource(path, encoding="utf-8").open() as lines:
                list(lines)

    def test_satisfies_protocol(self, write_csv):
        assert isinstance(FileLineSource(write_csv("h\n")), ILineSource)


class TestMemoryLineSource:
    def test_from_text(self):
        source = MemoryLineSource.from_text("a,b\n1,2\n")
        with source.open() as lines:
            assert source.is_open is True
            assert list(lines) == ["a,b", "1,2"]
        assert source.is_open is False

    def test_released_on_error(self):
        source = MemoryLineSource(["a"])
        with pytest.raises(RuntimeError):
            with source.open():
                raise RuntimeError("boom")
        assert source.is_open is False

    def test_satisfies_protocol(self):
        assert isinstance(MemoryLineSource([]), ILineSource)
