"""Name → FieldDescriptor table for one target type.

The table comes from, in order of precedence:

1. an explicit registration via ``register_fields``;
2. pydantic ``model_fields``;
3. ``dataclasses.fields``;
4. class-level annotations.

Inherited fields are included in every case. The table is built once per
parse and never re-derived per row.
"""

from __future__ import annotations

import dataclasses
import threading
import typing
from collections.abc import Iterator, Mapping
from datetime import date
from decimal import Decimal
from types import UnionType
from typing import Annotated, Any, ClassVar, Generic, Union, get_args, get_origin

from pydantic import BaseModel

from csvbind.core.exceptions import MappingDefinitionError
from csvbind.core.logging_config import get_logger
from csvbind.core.types import RecordT
from csvbind.models.fields import FieldDescriptor, FieldKind, Kind

logger = get_logger("field_index")

# Exact-type lookup: bool and datetime are deliberately not matched by int/date.
_BASE_KINDS: dict[Any, FieldKind] = {
    str: FieldKind.TEXT,
    date: FieldKind.DATE,
    int: FieldKind.BIG_INTEGER,
    float: FieldKind.FLOAT64,
    Decimal: FieldKind.DECIMAL,
}

_registry: dict[type, dict[str, FieldKind]] = {}
_registry_lock = threading.Lock()


def register_fields(target_type: type, fields: Mapping[str, FieldKind | str]) -> None:
    """Declare the descriptor table for ``target_type`` explicitly.

    Registered tables of base classes are merged into subclasses.
    """
    if not isinstance(target_type, type):
        raise TypeError(f"expected a class, got {target_type!r}")
    table: dict[str, FieldKind] = {}
    for name, kind in fields.items():
        try:
            table[name] = FieldKind(kind)
        except ValueError as exc:
            raise MappingDefinitionError(target_type, f"unknown kind {kind!r} for field {name!r}") from exc
    with _registry_lock:
        _registry[target_type] = table


def unregister_fields(target_type: type) -> None:
    with _registry_lock:
        _registry.pop(target_type, None)


def kind_of(annotation: Any, metadata: typing.Sequence[Any] = ()) -> FieldKind:
    """Map a field annotation (plus pydantic metadata) to a FieldKind."""
    for item in metadata:
        if isinstance(item, Kind):
            return item.kind
    origin = get_origin(annotation)
    if origin is Annotated:
        return kind_of(get_args(annotation)[0], annotation.__metadata__)
    if origin is Union or origin is UnionType:
        members = [a for a in get_args(annotation) if a is not type(None)]
        if len(members) == 1:
            return kind_of(members[0])
        return FieldKind.UNSUPPORTED
    return _BASE_KINDS.get(annotation, FieldKind.UNSUPPORTED)


def _type_name(annotation: Any, kind: FieldKind) -> str:
    if kind is not FieldKind.UNSUPPORTED:
        return kind.value
    return getattr(annotation, "__name__", None) or repr(annotation)


def _descriptor(name: str, annotation: Any, metadata: typing.Sequence[Any] = ()) -> FieldDescriptor:
    kind = kind_of(annotation, metadata)
    return FieldDescriptor(name=name, kind=kind, type_name=_type_name(annotation, kind))


def _registered(target_type: type) -> list[FieldDescriptor] | None:
    with _registry_lock:
        tables = [_registry[klass] for klass in reversed(target_type.__mro__) if klass in _registry]
    if not tables:
        return None
    merged: dict[str, FieldKind] = {}
    for table in tables:
        merged.update(table)
    return [FieldDescriptor(name=n, kind=k, type_name=k.value) for n, k in merged.items()]


def _type_hints(target_type: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(target_type, include_extras=True)
    except (NameError, TypeError) as exc:
        raise MappingDefinitionError(target_type, f"cannot resolve field annotations: {exc}") from exc


def _derive(target_type: type) -> list[FieldDescriptor]:
    if issubclass(target_type, BaseModel):
        return [
            _descriptor(name, info.annotation, info.metadata)
            for name, info in target_type.model_fields.items()
        ]
    if dataclasses.is_dataclass(target_type):
        hints = _type_hints(target_type)
        return [_descriptor(f.name, hints.get(f.name, f.type)) for f in dataclasses.fields(target_type)]
    hints = _type_hints(target_type)
    return [
        _descriptor(name, annotation)
        for name, annotation in hints.items()
        if get_origin(annotation) is not ClassVar and annotation is not ClassVar
    ]


class FieldIndex(Mapping[str, FieldDescriptor], Generic[RecordT]):
    """Read-only name → FieldDescriptor table for one target type."""

    def __init__(self, target_type: type[RecordT], descriptors: typing.Iterable[FieldDescriptor]) -> None:
        self.target_type = target_type
        self._fields: dict[str, FieldDescriptor] = {d.name: d for d in descriptors}

    @classmethod
    def for_type(cls, target_type: type[RecordT]) -> FieldIndex[RecordT]:
        """Build the index once and check the type can be instantiated empty."""
        if not isinstance(target_type, type):
            raise TypeError(f"target type must be a class, got {target_type!r}")
        descriptors = _registered(target_type)
        if descriptors is None:
            descriptors = _derive(target_type)
        if not descriptors:
            raise MappingDefinitionError(target_type, "no declared fields")

        index = cls(target_type, descriptors)
        index.new_record()
        unsupported = [d.name for d in index.values() if d.kind is FieldKind.UNSUPPORTED]
        if unsupported:
            logger.debug(
                "Fields with unsupported types on %s",
                target_type.__qualname__,
                extra={"fields": unsupported},
            )
        return index

    def new_record(self) -> RecordT:
        """Create one empty record of the target type."""
        try:
            return self.target_type()
        except Exception as exc:
            raise MappingDefinitionError(
                self.target_type, f"cannot be constructed without arguments: {exc}"
            ) from exc

    def unmapped(self, columns: typing.Iterable[str]) -> list[str]:
        """Columns that have no matching field."""
        return [c for c in columns if c not in self._fields]

    def __getitem__(self, name: str) -> FieldDescriptor:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)
