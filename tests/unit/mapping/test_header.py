"""Tests for the header resolver."""

from __future__ import annotations

import pytest

from csvbind.core.exceptions import FatalInputError
from csvbind.mapping.header import resolve_header


class TestResolveHeader:
    def test_names_are_trimmed_and_ordered(self):
        header = resolve_header(" id , name,dob ,percentage")
        assert header.names == ("id", "name", "dob", "percentage")
        assert header.positions == {"id": 0, "name": 1, "dob": 2, "percentage": 3}
        assert len(header) == 4

    def test_trailing_empty_columns_preserved(self):
        header = resolve_header("a,b,")
        assert header.names == ("a", "b", "")

    def test_line_terminator_removed(self):
        assert resolve_header("id,name\r\n").names == ("id", "name")

    def test_custom_delimiter(self):
        assert resolve_header("id;name", ";").names == ("id", "name")

    def test_no_quote_awareness(self):
        assert resolve_header('"last, first",id').names == ('"last', 'first"', "id")

    def test_repeated_name_maps_to_last_position(self):
        assert resolve_header("id,name,id").positions["id"] == 2


class TestMissingHeader:
    def test_absent_header_is_fatal(self):
        with pytest.raises(FatalInputError, match="no header line"):
            resolve_header(None, source="empty.csv")

    def test_blank_header_is_fatal(self):
        with pytest.raises(FatalInputError) as exc_info:
            resolve_header("   ", source="blank.csv")
        assert exc_info.value.source == "blank.csv"
