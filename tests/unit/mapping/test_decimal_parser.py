"""Tests for the locale-aware decimal parser."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from csvbind.core.protocols import IDecimalParser
from csvbind.mapping.decimal_parser import LocaleDecimalParser, LockedDecimalParser


@pytest.fixture
def en():
    return LocaleDecimalParser("en_US")


class TestParse:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("92.5", Decimal("92.5")),
            ("1,234.56", Decimal("1234.56")),
            ("-7", Decimal("-7")),
            (" 42 ", Decimal("42")),
            ("99999999999", Decimal("99999999999")),
        ],
    )
    def test_en_us(self, en, text, expected):
        assert en.parse(text) == expected

    def test_german_grouping_and_decimal_comma(self):
        de = LocaleDecimalParser("de_DE")
        assert de.decimal_symbol == ","
        assert de.group_symbol == "."
        assert de.parse("1.234,5") == Decimal("1234.5")

    @pytest.mark.parametrize("text", ["abc", "1.2.3", "NaN", "Infinity", "1e5", "1_000", ""])
    def test_invalid_input_raises_value_error(self, en, text):
        with pytest.raises(ValueError):
            en.parse(text)

    def test_lenient_grouping_by_default(self, en):
        assert en.parse("1,23") == Decimal("123")

    def test_strict_grouping(self):
        with pytest.raises(ValueError):
            LocaleDecimalParser("en_US", strict_grouping=True).parse("1,23")


class TestCache:
    def test_repeated_values_hit_cache(self, en):
        first = en.parse("10.5")
        assert en.parse("10.5") is first

    def test_cache_is_bounded(self):
        parser = LocaleDecimalParser("en_US", cache_size=2)
        for text in ("1", "2", "3"):
            parser.parse(text)
        assert list(parser._cache) == ["2", "3"]


class TestLockedParser:
    def test_satisfies_protocol(self, en):
        assert isinstance(en, IDecimalParser)
        assert isinstance(LockedDecimalParser(en), IDecimalParser)

    def test_concurrent_use_of_shared_parser(self, en):
        shared = LockedDecimalParser(LocaleDecimalParser("en_US", cache_size=8))
        texts = [f"{i:,}.25" for i in range(2000)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(shared.parse, texts))
        assert results == [Decimal(f"{i}.25") for i in range(2000)]
        assert shared.locale == "en_US"
