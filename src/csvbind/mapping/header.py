"""Header line parsing."""

from __future__ import annotations

from dataclasses import dataclass

from csvbind.core.exceptions import FatalInputError


@dataclass(frozen=True)
class ColumnHeader:
    """Trimmed column names in source order."""

    names: tuple[str, ...]
    positions: dict[str, int]

    def __len__(self) -> int:
        return len(self.names)


def resolve_header(header_line: str | None, delimiter: str = ",", *, source: str = "<input>") -> ColumnHeader:
    """Split the header line naively on ``delimiter`` and trim each name.

    A delimiter inside a name is treated as a separator; there is no quoting.
    A repeated name maps to its last position.
    """
    if header_line is None:
        raise FatalInputError(source, "empty file, no header line")
    header_line = header_line.rstrip("\r\n")
    if not header_line.strip():
        raise FatalInputError(source, "header line is blank")

    names = tuple(name.strip() for name in header_line.split(delimiter))
    positions = {name: i for i, name in enumerate(names)}
    return ColumnHeader(names=names, positions=positions)
