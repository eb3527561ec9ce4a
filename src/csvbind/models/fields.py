"""Field kinds, kind markers and the immutable Field Descriptor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel


class FieldKind(StrEnum):
    TEXT = "TEXT"
    DATE = "DATE"
    INT8 = "INT8"
    INT16 = "INT16"
    INT32 = "INT32"
    INT64 = "INT64"
    FLOAT32 = "FLOAT32"
    FLOAT64 = "FLOAT64"
    BIG_INTEGER = "BIG_INTEGER"
    DECIMAL = "DECIMAL"
    UNSUPPORTED = "UNSUPPORTED"

    @property
    def is_numeric(self) -> bool:
        return self in NUMERIC_KINDS


# Signed range for each fixed-width integer kind (inclusive).
INTEGER_BOUNDS: dict[FieldKind, tuple[int, int]] = {
    FieldKind.INT8: (-(2**7), 2**7 - 1),
    FieldKind.INT16: (-(2**15), 2**15 - 1),
    FieldKind.INT32: (-(2**31), 2**31 - 1),
    FieldKind.INT64: (-(2**63), 2**63 - 1),
}

NUMERIC_KINDS: frozenset[FieldKind] = frozenset(INTEGER_BOUNDS) | {
    FieldKind.FLOAT32,
    FieldKind.FLOAT64,
    FieldKind.BIG_INTEGER,
    FieldKind.DECIMAL,
}


@dataclass(frozen=True, slots=True)
class Kind:
    """``Annotated`` marker pinning a field to a specific FieldKind."""

    kind: FieldKind


Int8 = Annotated[int, Kind(FieldKind.INT8)]
Int16 = Annotated[int, Kind(FieldKind.INT16)]
Int32 = Annotated[int, Kind(FieldKind.INT32)]
Int64 = Annotated[int, Kind(FieldKind.INT64)]
Float32 = Annotated[float, Kind(FieldKind.FLOAT32)]
Float64 = Annotated[float, Kind(FieldKind.FLOAT64)]


class FieldDescriptor(BaseModel):
    """Name and declared kind of one target field."""

    model_config = {"frozen": True}

    name: str
    kind: FieldKind
    type_name: str = ""  # declared Python type, for error messages
