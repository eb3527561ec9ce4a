"""Result collection of parsed records, deduplicated by full-value equality.

Records need not be hashable: each record is keyed by the tuple of its field
values, taken when it is added. Mutating a record after adding it does not
re-key it. Not safe for concurrent writers; the collector merges partial
results from a single thread.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator, Sequence, Set
from typing import Any, Generic

from pydantic import BaseModel

from csvbind.core.types import RecordT


def _field_names(record: Any) -> tuple[str, ...]:
    if isinstance(record, BaseModel):
        return tuple(type(record).model_fields)
    if dataclasses.is_dataclass(record):
        return tuple(f.name for f in dataclasses.fields(record))
    return tuple(vars(record))


def _freeze(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, dict):
        return frozenset((k, _freeze(v)) for k, v in value.items())
    if isinstance(value, set):
        return frozenset(_freeze(v) for v in value)
    return value


class RecordSet(Set, Generic[RecordT]):
    """Set of records; two records are the same element if every field is equal."""

    def __init__(self, records: Iterable[RecordT] = (), *, field_names: Sequence[str] | None = None) -> None:
        self._names: tuple[str, ...] | None = tuple(field_names) if field_names is not None else None
        self._items: dict[Any, RecordT] = {}
        for record in records:
            self.add(record)

    def key(self, record: RecordT) -> tuple[Any, ...]:
        if self._names is None:
            self._names = _field_names(record)
        values = tuple(getattr(record, name, None) for name in self._names)
        try:
            hash(values)
        except TypeError:
            values = _freeze(values)
        return (type(record), values)

    def add(self, record: RecordT) -> bool:
        """Add ``record``; returns False if an equal record is already present."""
        k = self.key(record)
        if k in self._items:
            return False
        self._items[k] = record
        return True

    def update(self, records: Iterable[RecordT]) -> int:
        """Add many records; returns how many were duplicates."""
        return sum(1 for record in records if not self.add(record))

    def __contains__(self, record: object) -> bool:
        if not self._items:
            return False
        return self.key(record) in self._items  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[RecordT]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"RecordSet({list(self._items.values())!r})"
