"""Record Binder — one row of raw cells → one populated record, or a BindError."""

from __future__ import annotations

from typing import Generic, Sequence

from csvbind.core.types import RecordT
from csvbind.mapping.converter import ValueConverter
from csvbind.mapping.field_index import FieldIndex
from csvbind.mapping.header import ColumnHeader
from csvbind.models.outcomes import Absent, BindError, BoundRow, ConversionError, RejectedRow, RowResult


class RecordBinder(Generic[RecordT]):
    """Binds cells to fields by header position.

    Header and field index are read-only and may be shared across threads;
    the converter is whatever the caller's ConverterPool hands out.
    """

    def __init__(self, header: ColumnHeader, fields: FieldIndex[RecordT]) -> None:
        self._header = header
        self._fields = fields
        # Resolve each column to its descriptor once, not per row.
        self._plan = tuple(fields.get(name.strip()) for name in header.names)

    def bind(self, cells: Sequence[str], converter: ValueConverter) -> RowResult:
        record = self._fields.target_type()
        for i, descriptor in enumerate(self._plan[: len(cells)]):
            if descriptor is None:
                continue
            result = converter.convert(descriptor.kind, cells[i], descriptor.type_name)
            if isinstance(result, Absent):
                continue
            if isinstance(result, ConversionError):
                return RejectedRow(BindError(i, self._header.names[i], descriptor.name, result))
            try:
                setattr(record, descriptor.name, result)
            except (ValueError, TypeError, AttributeError) as exc:
                # Assignment validation on the target type, or a field it does not have.
                cause = ConversionError(cells[i], descriptor.type_name or descriptor.kind.value, str(exc))
                return RejectedRow(BindError(i, self._header.names[i], descriptor.name, cause))
        return BoundRow(record, mismatched=len(cells) != len(self._plan))
