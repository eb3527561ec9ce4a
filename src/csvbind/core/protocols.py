"""Protocol interfaces for csvbind's pluggable seams.

Structural typing, no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from decimal import Decimal
from typing import Iterator, Protocol, runtime_checkable


# ---------------------------------------------------------------------------
# Line Source
# ---------------------------------------------------------------------------

@runtime_checkable
class ILineSource(Protocol):
    """Scoped, sequential text source.

    ``open()`` yields an iterator of lines with their terminators removed.
    The underlying resource is released when the context exits, on every
    exit path.
    """

    @property
    def name(self) -> str: ...

    def open(self) -> AbstractContextManager[Iterator[str]]: ...


# ---------------------------------------------------------------------------
# Decimal Parser
# ---------------------------------------------------------------------------

@runtime_checkable
class IDecimalParser(Protocol):
    """Locale-aware text → Decimal parser. Not safe for concurrent calls."""

    @property
    def locale(self) -> str: ...

    def parse(self, text: str) -> Decimal: ...
