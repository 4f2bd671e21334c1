"""Command-line entry point for expanding configs and writing reports."""

from __future__ import annotations

import argparse
import csv
import json
import logging
from pathlib import Path
from typing import Iterable, Sequence

from pydantic import ValidationError

from parameter_sets.errors import Err, SetsError, UnsupportedFormatError
from parameter_sets.loader import load_results, load_sets
from parameter_sets.models import ParameterSet
from parameter_sets.reporting import save_sensitivity_reports
from parameter_sets.settings import ReportSettings

SET_OUTPUT_FORMATS = ("jsonl", "csv")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="One-at-a-Time sensitivity parameter sets")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    expand = sub.add_parser("expand", help="Expand a config into parameter sets")
    expand.add_argument("config", help="Path to .yaml/.yml/.json config")
    expand.add_argument("--out", help="Optional output path (jsonl or csv)")
    expand.add_argument("--format", choices=SET_OUTPUT_FORMATS, help="Output format override")
    expand.add_argument("--limit", type=int, help="Maximum sets to print to stdout")

    report = sub.add_parser("report", help="Write sensitivity tables from results")
    report.add_argument("config", help="Path to the config the results were produced from")
    report.add_argument("results", help="Path to results file (set id -> metrics)")
    report.add_argument("--out-dir", help="Report directory (default from settings)")
    report.add_argument("--formats", help="Comma separated formats, e.g. csv,markdown,latex")
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level)

    if args.command == "expand":
        return _run_expand(args)
    return _run_report(args)


def _run_expand(args: argparse.Namespace) -> int:
    sets = load_sets(args.config)

    if args.out:
        out_path = Path(args.out)
        fmt = args.format or out_path.suffix.lstrip(".") or "jsonl"
        _write_sets(sets, out_path, fmt)
        return 0

    limit = args.limit or len(sets)
    for parameter_set in sets[:limit]:
        print(f"{parameter_set.id}\t{parameter_set.label}\t{parameter_set.value!r}")
    if limit < len(sets):
        print(f"... truncated {len(sets) - limit} sets")
    return 0


def _write_sets(sets: Sequence[ParameterSet], out: Path, fmt: str) -> None:
    if fmt == "jsonl":
        with out.open("w", encoding="utf-8") as fh:
            for parameter_set in sets:
                fh.write(json.dumps(parameter_set.as_record()) + "\n")
        return

    if fmt == "csv":
        fieldnames = ["id", "label", "value", "is_baseline", "config"]
        with out.open("w", newline="", encoding="utf-8") as fh:
            writer = csv.DictWriter(fh, fieldnames=fieldnames)
            writer.writeheader()
            for parameter_set in sets:
                record = parameter_set.as_record()
                record["value"] = json.dumps(record["value"])
                record["config"] = json.dumps(record["config"])
                writer.writerow(record)
        return

    raise UnsupportedFormatError(out, expected=SET_OUTPUT_FORMATS)


def _report_settings(args: argparse.Namespace) -> ReportSettings:
    try:
        defaults = ReportSettings.from_env()
        return ReportSettings(
            output_dir=Path(args.out_dir) if args.out_dir else defaults.output_dir,
            formats=args.formats or defaults.formats,
        )
    except ValidationError as exc:
        raise SetsError(
            Err.INVALID_CONFIG,
            ctx={"error": "invalid report settings", "formats": args.formats},
            cause=exc,
        ) from exc


def _run_report(args: argparse.Namespace) -> int:
    sets = load_sets(args.config)
    results = load_results(args.results)

    settings = _report_settings(args)

    tables = save_sensitivity_reports(sets, results, settings=settings)
    print(f"wrote {len(tables)} tables to {settings.output_dir}")
    return 0


def entrypoint() -> None:  # pragma: no cover - console entry
    try:
        raise SystemExit(main())
    except SetsError as exc:  # pragma: no cover - console behavior
        raise SystemExit(f"error: {exc}")
