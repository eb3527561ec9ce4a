"""Shared test doubles — re-export in-memory line sources and sample records."""

from __future__ import annotations

from csvbind.sources.memory_source import MemoryLineSource

__all__ = ["MemoryLineSource"]
