"""Streaming collector: drives header, field index and binder over a line source.

States: Init → HeaderRead → Streaming → Done (or Init → Failed). Header and
file failures raise; row failures are logged and the row is dropped.
"""

from __future__ import annotations

import os
import threading
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from itertools import islice
from typing import Any, Iterable, Iterator

from csvbind.core.config import CsvBindSettings
from csvbind.core.logging_config import get_logger
from csvbind.core.protocols import ILineSource
from csvbind.core.types import NumberedLine, RecordT
from csvbind.engine.record_set import RecordSet
from csvbind.mapping.binder import RecordBinder
from csvbind.mapping.converter import ConverterPool
from csvbind.mapping.field_index import FieldIndex
from csvbind.mapping.header import resolve_header
from csvbind.models.outcomes import BindError, BoundRow, ParseReport, RejectedLine
from csvbind.sources.file_source import FileLineSource

logger = get_logger("collector")

# Data lines start after the header on line 1.
FIRST_DATA_LINE = 2


@dataclass
class _BatchResult:
    records: list[Any] = field(default_factory=list)
    rejected: list[tuple[int, str, BindError]] = field(default_factory=list)
    blank: int = 0
    mismatched: int = 0
    lines: int = 0


class CsvMapper:
    """Generic CSV → typed-record mapper.

    The converter sharing discipline is fixed at construction, either from
    ``settings.converter_mode`` or by passing a ready ``ConverterPool``.
    """

    def __init__(self, settings: CsvBindSettings | None = None, *,
                 converters: ConverterPool | None = None) -> None:
        self._settings = settings or CsvBindSettings()
        self._converters = converters or ConverterPool(
            self._settings.converter_mode,
            locale=self._settings.number_locale,
            strict_grouping=self._settings.strict_grouping,
        )

    @property
    def settings(self) -> CsvBindSettings:
        return self._settings

    def parse(self, file_path: str | os.PathLike[str], target_type: type[RecordT], *,
              stop: threading.Event | None = None) -> RecordSet[RecordT]:
        """Parse ``file_path`` into a deduplicated set of ``target_type`` records."""
        return self.parse_with_report(file_path, target_type, stop=stop).records

    def parse_with_report(self, file_path: str | os.PathLike[str], target_type: type[RecordT], *,
                          stop: threading.Event | None = None) -> ParseReport:
        source = FileLineSource(file_path, encoding=self._settings.encoding)
        return self.parse_source(source, target_type, stop=stop)

    def parse_source(self, source: ILineSource, target_type: type[RecordT], *,
                     stop: threading.Event | None = None) -> ParseReport:
        """Parse any line source; the source is released on every exit path."""
        delimiter = self._settings.delimiter
        with source.open() as lines:
            header = resolve_header(next(lines, None), delimiter, source=source.name)
            fields = FieldIndex.for_type(target_type)
            binder = RecordBinder(header, fields)

            report = ParseReport(
                source=source.name,
                target_type=target_type.__qualname__,
                records=RecordSet(field_names=list(fields)),
                columns=list(header.names),
                unmapped_columns=fields.unmapped(header.names),
            )
            logger.info(
                "Parsing %s into %s",
                source.name,
                report.target_type,
                extra={"columns": report.columns, "workers": self._settings.workers},
            )
            if report.unmapped_columns:
                logger.debug("Ignoring unmapped columns", extra={"unmapped": report.unmapped_columns})

            batches = _batches(lines, self._settings.batch_size)
            if self._settings.workers == 1:
                self._stream(batches, binder, report, stop)
            else:
                self._stream_parallel(batches, binder, report, stop)

        logger.info(
            "Parsed %s: %d records, %d rejected, %d duplicates",
            source.name,
            report.record_count,
            report.rows_rejected,
            report.duplicates_dropped,
            extra={
                "lines_read": report.lines_read,
                "blank_lines": report.blank_lines,
                "structural_mismatches": report.structural_mismatches,
                "stopped": report.stopped,
            },
        )
        return report

    def _stream(self, batches: Iterable[list[NumberedLine]], binder: RecordBinder[Any],
                report: ParseReport, stop: threading.Event | None) -> None:
        for batch in batches:
            if stop is not None and stop.is_set():
                report.stopped = True
                return
            self._merge(self._process(batch, binder), report)

    def _stream_parallel(self, batches: Iterable[list[NumberedLine]], binder: RecordBinder[Any],
                         report: ParseReport, stop: threading.Event | None) -> None:
        workers = self._settings.workers
        max_in_flight = workers * 2
        pending: deque[Future[_BatchResult]] = deque()
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="csvbind") as pool:
            for batch in batches:
                if stop is not None and stop.is_set():
                    report.stopped = True
                    break
                pending.append(pool.submit(self._process, batch, binder))
                if len(pending) >= max_in_flight:
                    self._merge(pending.popleft().result(), report)
            while pending:
                self._merge(pending.popleft().result(), report)

    def _process(self, batch: list[NumberedLine], binder: RecordBinder[Any]) -> _BatchResult:
        delimiter = self._settings.delimiter
        converter = self._converters.get()
        out = _BatchResult(lines=len(batch))
        for line_number, line in batch:
            # A row of nothing but delimiters would otherwise bind an empty record.
            if not line.replace(delimiter, "").strip():
                out.blank += 1
                continue
            result = binder.bind(line.split(delimiter), converter)
            if isinstance(result, BoundRow):
                out.records.append(result.record)
                if result.mismatched:
                    out.mismatched += 1
            else:
                out.rejected.append((line_number, line, result.error))
        return out

    def _merge(self, batch: _BatchResult, report: ParseReport) -> None:
        report.lines_read += batch.lines
        report.blank_lines += batch.blank
        report.structural_mismatches += batch.mismatched
        report.rows_bound += len(batch.records)
        report.duplicates_dropped += report.records.update(batch.records)

        for line_number, line, error in batch.rejected:
            report.rows_rejected += 1
            logger.warning(
                "Failed to parse line %d: %s",
                line_number,
                error,
                extra={
                    "line_number": line_number,
                    "line": line,
                    "column": error.column,
                    "field": error.field,
                    "reason": error.cause.reason,
                },
            )
            if len(report.rejections) < self._settings.max_rejections_kept:
                report.rejections.append(RejectedLine(
                    line_number=line_number,
                    line=line,
                    column=error.column,
                    field=error.field,
                    raw=error.cause.raw,
                    reason=error.cause.reason,
                ))


def _batches(lines: Iterator[str], size: int) -> Iterator[list[NumberedLine]]:
    """Number the remaining lines and group them lazily into lists of ``size``."""
    numbered = enumerate(lines, start=FIRST_DATA_LINE)
    while batch := list(islice(numbered, size)):
        yield batch


def parse(file_path: str | os.PathLike[str], target_type: type[RecordT], *,
          settings: CsvBindSettings | None = None,
          stop: threading.Event | None = None) -> RecordSet[RecordT]:
    """Parse a CSV file into a deduplicated collection of ``target_type`` records."""
    return CsvMapper(settings).parse(file_path, target_type, stop=stop)
