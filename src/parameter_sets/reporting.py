"""Sensitivity tables built from caller-supplied simulation results.

``results`` maps a parameter set id to ``{metric_name: value}``::

    {
        1: {"NPV": 100.50, "Risk_Score": 0.05},   # baseline
        2: {"NPV": 98.20, "Risk_Score": 0.04},
    }

One table is produced per varied parameter label. Its first column is
``"Variation in <label>"``; the baseline row comes first, followed by the
variants of that parameter, then one column per baseline metric.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any, Callable

import pandas as pd

from parameter_sets.errors import Err, SetsError
from parameter_sets.models import BASELINE_LABEL, ParameterSet, TreePath
from parameter_sets.settings import ReportSettings
from parameter_sets.tree import get_value_at_path

logger = logging.getLogger(__name__)

REPORT_PREFIX = "sensitivity_"


def _baseline_set(sets: Sequence[ParameterSet]) -> ParameterSet:
    baselines = [s for s in sets if s.is_baseline]
    if len(baselines) != 1:
        raise SetsError(
            Err.INVALID_CONFIG,
            ctx={"reason": "exactly_one_baseline_required", "found": len(baselines)},
        )
    return baselines[0]


def _ordered_by_value(group: list[ParameterSet]) -> list[ParameterSet]:
    try:
        return sorted(group, key=lambda s: s.value)
    except TypeError:
        # Mixed or unorderable values keep generation order.
        return group


def variation_column(label: str) -> str:
    return f"Variation in {label}"


def generate_sensitivity_tables(
    sets: Sequence[ParameterSet],
    results: Mapping[int, Mapping[str, Any]],
) -> dict[str, pd.DataFrame]:
    """Group results by varied parameter into one DataFrame per label.

    Sets are grouped by their path. Two paths rendering to the same dotted
    label (``("a", "b")`` and a key named ``"a.b"``) get separate tables
    keyed ``"<label>@<first set id>"``. Variants without an entry in
    ``results`` are left out of their table. The baseline must have results
    since every table starts with its row.
    """

    baseline = _baseline_set(sets)
    if baseline.id not in results:
        raise SetsError(
            Err.DATA_MISSING,
            ctx={"reason": "baseline_results_missing", "id": baseline.id},
        )
    baseline_metrics = dict(results[baseline.id])
    metric_keys = sorted(baseline_metrics)

    groups: dict[TreePath, list[ParameterSet]] = {}
    for parameter_set in sets:
        if parameter_set.is_baseline:
            continue
        path = parameter_set.path or tuple(parameter_set.label.split("."))
        groups.setdefault(path, []).append(parameter_set)

    label_counts = Counter(group[0].label for group in groups.values())

    tables: dict[str, pd.DataFrame] = {}
    for path, group in groups.items():
        label = group[0].label
        column = variation_column(label)
        baseline_value = get_value_at_path(baseline.config, path)

        rows: list[dict[str, Any]] = [
            {column: f"{baseline_value} ({BASELINE_LABEL})", **baseline_metrics}
        ]
        for parameter_set in _ordered_by_value(group):
            if parameter_set.id not in results:
                logger.debug("no results for set %d (%s); skipping", parameter_set.id, label)
                continue
            rows.append({column: str(parameter_set.value), **results[parameter_set.id]})

        frame = pd.DataFrame(rows)
        desired = [column, *metric_keys]
        key = label if label_counts[label] == 1 else f"{label}@{group[0].id}"
        tables[key] = frame[[name for name in desired if name in frame.columns]]

    return tables


def _bold_baseline_row(row: pd.Series) -> list[str]:
    is_baseline = row.name == 0
    return ["font-weight: bold;" if is_baseline else "" for _ in row]


def _save_csv(frame: pd.DataFrame, base: Path) -> Path:
    path = base.with_suffix(".csv")
    frame.to_csv(path, index=False)
    return path


def _save_markdown(frame: pd.DataFrame, base: Path) -> Path:
    path = base.with_suffix(".md")
    path.write_text(frame.to_markdown(index=False) + "\n", encoding="utf-8")
    return path


def _save_latex(frame: pd.DataFrame, base: Path) -> Path:
    path = base.with_suffix(".tex")
    styler = frame.style.hide(axis="index").apply(_bold_baseline_row, axis=1)
    path.write_text(styler.to_latex(convert_css=True, hrules=True), encoding="utf-8")
    return path


TABLE_WRITERS: dict[str, Callable[[pd.DataFrame, Path], Path]] = {
    "csv": _save_csv,
    "markdown": _save_markdown,
    "latex": _save_latex,
}


def export_table(frame: pd.DataFrame, base: Path, formats: Iterable[str]) -> list[Path]:
    """Write ``frame`` next to ``base`` once per known format."""

    written: list[Path] = []
    for fmt in formats:
        writer = TABLE_WRITERS.get(fmt)
        if writer is None:
            logger.warning("skipping unknown report format %r", fmt)
            continue
        try:
            path = writer(frame, base)
        except OSError as exc:
            raise SetsError(
                Err.IO_ERROR,
                ctx={"path": str(base), "format": fmt},
                cause=exc,
            ) from exc
        logger.info("saved %s table: %s", fmt, path)
        written.append(path)
    return written


def report_basename(label: str) -> str:
    return REPORT_PREFIX + label.replace(".", "_")


def _require_distinct_basenames(tables: Mapping[str, pd.DataFrame]) -> None:
    by_name: dict[str, list[str]] = {}
    for label in tables:
        by_name.setdefault(report_basename(label), []).append(label)
    clashes = sorted(labels for labels in by_name.values() if len(labels) > 1)
    if clashes:
        raise SetsError(
            Err.INVALID_CONFIG,
            ctx={"reason": "report_filename_collision", "labels": clashes},
        )


def save_sensitivity_reports(
    sets: Sequence[ParameterSet],
    results: Mapping[int, Mapping[str, Any]],
    *,
    output_dir: Path | str | None = None,
    formats: Iterable[str] | None = None,
    settings: ReportSettings | None = None,
) -> dict[str, pd.DataFrame]:
    """Build the sensitivity tables and write them under ``output_dir``.

    Explicit ``output_dir``/``formats`` take precedence over ``settings``,
    which in turn defaults to :meth:`ReportSettings.from_env`.
    """

    settings = settings or ReportSettings.from_env()
    target_dir = Path(output_dir) if output_dir is not None else settings.output_dir
    chosen_formats = tuple(formats) if formats is not None else settings.formats

    tables = generate_sensitivity_tables(sets, results)
    _require_distinct_basenames(tables)
    target_dir.mkdir(parents=True, exist_ok=True)
    logger.info("writing %d sensitivity tables to %s", len(tables), target_dir)

    for label, frame in tables.items():
        export_table(frame, target_dir / report_basename(label), chosen_formats)

    return tables
