"""List-backed ILineSource for tests and callers that already hold the text."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator


class MemoryLineSource:
    """Serves lines from a list; tracks whether it is currently open."""

    def __init__(self, lines: Iterable[str], name: str = "<memory>") -> None:
        self._lines = [line.rstrip("\r\n") for line in lines]
        self._name = name
        self.is_open = False
        self.open_count = 0

    @classmethod
    def from_text(cls, text: str, name: str = "<memory>") -> MemoryLineSource:
        return cls(text.splitlines(), name=name)

    @property
    def name(self) -> str:
        return self._name

    @contextmanager
    def open(self) -> Iterator[Iterator[str]]:
        self.is_open = True
        self.open_count += 1
        try:
            yield iter(self._lines)
        finally:
            self.is_open = False
