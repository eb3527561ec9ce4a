"""Per-cell and per-row outcome values, and the parse summary report.

Expected per-row failures travel as values, never as exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Union

from pydantic import BaseModel, Field

from csvbind.core.types import RecordT


class Absent(Enum):
    """Marker for a blank cell: leave the destination field untouched."""

    ABSENT = "ABSENT"

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = Absent.ABSENT


@dataclass(frozen=True, slots=True)
class ConversionError:
    """A cell's text could not be converted to its field's declared type."""

    raw: str
    type_name: str
    reason: str

    def __str__(self) -> str:
        return f"cannot convert {self.raw!r} to {self.type_name}: {self.reason}"


@dataclass(frozen=True, slots=True)
class BindError:
    """Why a whole row was rejected."""

    column_index: int
    column: str
    field: str
    cause: ConversionError

    def __str__(self) -> str:
        return f"column {self.column_index} ({self.column!r}) -> field {self.field!r}: {self.cause}"


ConvertResult = Union[Any, Absent, ConversionError]


@dataclass(frozen=True, slots=True)
class BoundRow(Generic[RecordT]):
    record: RecordT
    mismatched: bool = False  # cell count differed from the header


@dataclass(frozen=True, slots=True)
class RejectedRow:
    error: BindError


RowResult = Union[BoundRow[Any], RejectedRow]


class RejectedLine(BaseModel):
    """A data line that failed to bind."""

    line_number: int
    line: str
    column: str
    field: str
    raw: str
    reason: str


class ParseReport(BaseModel):
    """Outcome of one parse: the records plus what happened on the way."""

    model_config = {"arbitrary_types_allowed": True}

    source: str
    target_type: str
    records: Any = None  # RecordSet
    columns: list[str] = Field(default_factory=list)
    unmapped_columns: list[str] = Field(default_factory=list)
    lines_read: int = 0
    blank_lines: int = 0
    rows_bound: int = 0
    rows_rejected: int = 0
    duplicates_dropped: int = 0
    structural_mismatches: int = 0
    rejections: list[RejectedLine] = Field(default_factory=list)
    stopped: bool = False

    @property
    def record_count(self) -> int:
        return len(self.records) if self.records is not None else 0
