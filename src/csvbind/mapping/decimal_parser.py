"""Locale-aware decimal parser backed by Babel's CLDR number symbols.

A parser keeps a small most-recently-used cache of parsed values, so an
instance must not be used by two threads at once. Share one behind
``LockedDecimalParser`` or give every worker its own.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from decimal import Decimal

from babel import Locale
from babel.numbers import NumberFormatError, get_decimal_symbol, get_group_symbol, parse_decimal

CACHE_SIZE = 512


class LocaleDecimalParser:
    """Parses grouped, locale-formatted numbers ("1,234.5", "1.234,5") into Decimal."""

    def __init__(self, locale: str = "en_US", *, strict_grouping: bool = False,
                 cache_size: int = CACHE_SIZE) -> None:
        self._locale = Locale.parse(locale)
        self._locale_name = locale
        self._strict = strict_grouping
        self._cache_size = cache_size
        self._cache: OrderedDict[str, Decimal] = OrderedDict()
        self.decimal_symbol = get_decimal_symbol(self._locale)
        self.group_symbol = get_group_symbol(self._locale)

    @property
    def locale(self) -> str:
        return self._locale_name

    def parse(self, text: str) -> Decimal:
        """Parse ``text``; raises ValueError if it is not a finite decimal."""
        text = text.strip()
        cached = self._cache.get(text)
        if cached is not None:
            self._cache.move_to_end(text)
            return cached

        # Decimal() would also take exponents, underscores, NaN and Infinity.
        if not text or any(c.isalpha() or c == "_" for c in text):
            raise NumberFormatError(f"{text!r} is not a valid decimal number")
        value = parse_decimal(text, locale=self._locale, strict=self._strict)
        if not value.is_finite():
            raise NumberFormatError(f"{text!r} is not a finite number")

        self._cache[text] = value
        if len(self._cache) > self._cache_size:
            self._cache.popitem(last=False)
        return value


class LockedDecimalParser:
    """Serializes access to one shared parser."""

    def __init__(self, parser: LocaleDecimalParser) -> None:
        self._parser = parser
        self._lock = threading.Lock()

    @property
    def locale(self) -> str:
        return self._parser.locale

    def parse(self, text: str) -> Decimal:
        with self._lock:
            return self._parser.parse(text)
