"""Generic CSV → typed-record mapper with header-driven field binding."""

from __future__ import annotations

from csvbind.core.config import CsvBindSettings
from csvbind.core.exceptions import CsvBindError, FatalInputError, MappingDefinitionError
from csvbind.engine.collector import CsvMapper, parse
from csvbind.engine.record_set import RecordSet
from csvbind.mapping.field_index import register_fields
from csvbind.models.fields import FieldKind, Float32, Float64, Int8, Int16, Int32, Int64
from csvbind.models.outcomes import ParseReport

__all__ = [
    "CsvBindError",
    "CsvBindSettings",
    "CsvMapper",
    "FatalInputError",
    "FieldKind",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "MappingDefinitionError",
    "ParseReport",
    "RecordSet",
    "parse",
    "register_fields",
]
