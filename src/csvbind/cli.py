"""Command-line entry point: parse a CSV file into records of a chosen type.

Usage:
    csvbind employees.csv --type csvbind.models.employee:Employee
    csvbind data.csv --type mypkg.records:Order --delimiter ";" --workers 4
"""

from __future__ import annotations

import argparse
import importlib
import sys
from typing import Sequence

from pydantic import ValidationError

from csvbind.core.config import CsvBindSettings
from csvbind.core.exceptions import CsvBindError
from csvbind.core.logging_config import configure_logging
from csvbind.engine.collector import CsvMapper

DEFAULT_TYPE = "csvbind.models.employee:Employee"


def load_type(spec: str) -> type:
    """Resolve ``package.module:ClassName`` to a class."""
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"expected 'module:ClassName', got {spec!r}")
    module = importlib.import_module(module_name)
    target = module
    for part in attr.split("."):
        target = getattr(target, part)
    if not isinstance(target, type):
        raise ValueError(f"{spec!r} is not a class")
    return target


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="csvbind", description=__doc__.splitlines()[0])
    parser.add_argument("path", help="CSV file; first line is the header")
    parser.add_argument("--type", dest="type_spec", default=DEFAULT_TYPE,
                        help=f"target record class as module:ClassName (default: {DEFAULT_TYPE})")
    parser.add_argument("--delimiter", help="column delimiter (default: ',')")
    parser.add_argument("--workers", type=int, help="worker threads (default: 1)")
    parser.add_argument("--locale", dest="number_locale", help="locale for numbers, e.g. de_DE")
    parser.add_argument("--log-level", help="log level (default: INFO)")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {
        k: v
        for k, v in {
            "delimiter": args.delimiter,
            "workers": args.workers,
            "number_locale": args.number_locale,
            "log_level": args.log_level,
        }.items()
        if v is not None
    }
    try:
        settings = CsvBindSettings(**overrides)
    except ValidationError as exc:
        parser.error(str(exc))
    try:
        target_type = load_type(args.type_spec)
    except (ImportError, AttributeError, ValueError) as exc:
        parser.error(f"--type: {exc}")

    configure_logging(level=settings.log_level)

    try:
        report = CsvMapper(settings).parse_with_report(args.path, target_type)
    except CsvBindError as exc:
        print(f"csvbind: {exc}", file=sys.stderr)
        return 1

    for record in report.records:
        print(record)
    print(
        f"{report.record_count} records, {report.rows_rejected} rejected, "
        f"{report.duplicates_dropped} duplicates, {report.blank_lines} blank lines",
        file=sys.stderr,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
