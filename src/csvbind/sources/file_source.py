"""File-backed line source implementing ILineSource."""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

from csvbind.core.exceptions import FatalInputError


class FileLineSource:
    """Reads a text file lazily, one line at a time."""

    def __init__(self, path: str | os.PathLike[str], encoding: str = "utf-8-sig") -> None:
        self._path = Path(path)
        self._encoding = encoding

    @property
    def name(self) -> str:
        return str(self._path)

    @contextmanager
    def open(self) -> Iterator[Iterator[str]]:
        try:
            handle = self._path.open("r", encoding=self._encoding, newline="")
        except OSError as exc:
            raise FatalInputError(self.name, f"cannot open: {exc.strerror or exc}") from exc
        with handle:
            yield self._lines(handle)

    def _lines(self, handle: IO[str]) -> Iterator[str]:
        try:
            for line in handle:
                yield line.rstrip("\r\n")
        except UnicodeDecodeError as exc:
            raise FatalInputError(self.name, f"not valid {self._encoding} text: {exc}") from exc
