"""csvbind exception hierarchy.

Only file-, header- and type-level failures are raised. Row-level conversion
failures are returned as values (see ``csvbind.models.outcomes``).
"""

from __future__ import annotations


class CsvBindError(Exception):
    """Base exception for all csvbind errors."""


class FatalInputError(CsvBindError):
    """Input file is missing, unreadable, or has no header line."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"{source}: {message}")


class MappingDefinitionError(CsvBindError):
    """Target record type cannot be indexed or instantiated."""

    def __init__(self, target_type: type, message: str) -> None:
        self.target_type = target_type
        super().__init__(f"{target_type.__qualname__}: {message}")
