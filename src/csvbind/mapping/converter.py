"""Value Converter — (declared kind, raw text) → typed value, ABSENT, or ConversionError."""

from __future__ import annotations

import math
import re
import struct
import threading
from datetime import date
from decimal import Decimal
from typing import Literal

from csvbind.core.protocols import IDecimalParser
from csvbind.mapping.decimal_parser import LocaleDecimalParser, LockedDecimalParser
from csvbind.models.fields import INTEGER_BOUNDS, FieldKind
from csvbind.models.outcomes import ABSENT, ConversionError, ConvertResult

# dd/mm/yyyy, exactly two/two/four digits.
DATE_PATTERN = re.compile(r"(\d{2})/(\d{2})/(\d{4})", re.ASCII)


class ValueConverter:
    """Converts one cell at a time. Stateless apart from its decimal parser."""

    def __init__(self, parser: IDecimalParser) -> None:
        self._parser = parser

    @property
    def parser(self) -> IDecimalParser:
        return self._parser

    def convert(self, kind: FieldKind, raw: str, type_name: str | None = None) -> ConvertResult:
        if not raw or raw.isspace():
            return ABSENT
        type_name = type_name or kind.value

        if kind is FieldKind.TEXT:
            return raw
        if kind is FieldKind.DATE:
            return _to_date(raw, type_name)
        if kind.is_numeric:
            try:
                number = self._parser.parse(raw)
            except ValueError as exc:
                return ConversionError(raw, type_name, str(exc))
            return _narrow(number, kind, raw, type_name)
        return ConversionError(raw, type_name, "unsupported field type")


def _to_date(raw: str, type_name: str) -> date | ConversionError:
    match = DATE_PATTERN.fullmatch(raw.strip())
    if match is None:
        return ConversionError(raw, type_name, "expected dd/mm/yyyy")
    day, month, year = (int(g) for g in match.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        return ConversionError(raw, type_name, str(exc))


def _narrow(number: Decimal, kind: FieldKind, raw: str, type_name: str):
    if kind is FieldKind.DECIMAL:
        return number
    if kind is FieldKind.BIG_INTEGER:
        return int(number)  # exact at any size, truncates toward zero
    if kind is FieldKind.FLOAT64:
        value = float(number)
        if math.isinf(value):
            return ConversionError(raw, type_name, "out of range for 64-bit float")
        return value
    if kind is FieldKind.FLOAT32:
        try:
            value = struct.unpack("<f", struct.pack("<f", float(number)))[0]
        except OverflowError:
            value = math.inf
        if math.isinf(value):
            return ConversionError(raw, type_name, "out of range for 32-bit float")
        return value

    low, high = INTEGER_BOUNDS[kind]
    value = int(number)  # truncates toward zero
    if not low <= value <= high:
        return ConversionError(raw, type_name, f"out of range [{low}, {high}]")
    return value


ConverterMode = Literal["shared", "per_worker"]


class ConverterPool:
    """Hands out converters according to the configured sharing discipline.

    ``shared``: every caller gets the same converter, whose parser is behind
    a lock. ``per_worker``: each thread lazily gets its own converter and
    parser, nothing mutable is shared.
    """

    def __init__(self, mode: ConverterMode = "per_worker", *, locale: str = "en_US",
                 strict_grouping: bool = False) -> None:
        if mode not in ("shared", "per_worker"):
            raise ValueError(f"unknown converter mode {mode!r}")
        self.mode = mode
        self._locale = locale
        self._strict = strict_grouping
        self._shared: ValueConverter | None = None
        self._local = threading.local()
        if mode == "shared":
            self._shared = ValueConverter(LockedDecimalParser(self._new_parser()))

    def _new_parser(self) -> LocaleDecimalParser:
        return LocaleDecimalParser(self._locale, strict_grouping=self._strict)

    def get(self) -> ValueConverter:
        if self._shared is not None:
            return self._shared
        converter = getattr(self._local, "converter", None)
        if converter is None:
            converter = ValueConverter(self._new_parser())
            self._local.converter = converter
        return converter
