"""Type aliases used across csvbind."""

from __future__ import annotations

from typing import TypeVar

RecordT = TypeVar("RecordT")

# (line number in the source file, line text)
NumberedLine = tuple[int, str]
