"""File readers feeding the set generator and the report builder."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from parameter_sets.errors import Err, SetsError, UnsupportedFormatError
from parameter_sets.generator import generate_sets
from parameter_sets.models import ParameterSet

YAML_SUFFIXES = {".yaml", ".yml"}
JSON_SUFFIXES = {".json"}


def _normalize_keys(node: Any) -> Any:
    if isinstance(node, Mapping):
        return {str(key): _normalize_keys(value) for key, value in node.items()}
    if isinstance(node, list):
        return [_normalize_keys(item) for item in node]
    return node


def _parse_file(path: Path) -> Any:
    suffix = path.suffix.lower()
    if suffix not in YAML_SUFFIXES | JSON_SUFFIXES:
        raise UnsupportedFormatError(path)
    if not path.is_file():
        raise SetsError(
            Err.DATA_MISSING,
            ctx={"path": str(path), "error": "file not found"},
        )

    raw = path.read_text(encoding="utf-8")
    try:
        if suffix in YAML_SUFFIXES:
            return yaml.safe_load(raw)
        return json.loads(raw)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise SetsError(
            Err.INVALID_CONFIG,
            ctx={"path": str(path), "error": "parse failure"},
            cause=exc,
        ) from exc


def _require_mapping(data: Any, *, path: Path) -> Mapping[str, Any]:
    if isinstance(data, Mapping):
        return data
    raise SetsError(
        Err.INVALID_CONFIG,
        ctx={"path": str(path), "error": "top-level must be mapping"},
    )


def load_config(path: Path | str) -> dict[str, Any]:
    """Read a YAML or JSON configuration file into a string-keyed tree."""

    config_path = Path(path)
    data = _parse_file(config_path)
    if data is None and config_path.suffix.lower() in YAML_SUFFIXES:
        data = {}
    return _normalize_keys(_require_mapping(data, path=config_path))


def load_sets(path: Path | str) -> list[ParameterSet]:
    """Read a configuration file and expand it into parameter sets."""

    return generate_sets(load_config(path))


def load_results(path: Path | str) -> dict[int, dict[str, Any]]:
    """Read a results file mapping set id to a mapping of metric values.

    JSON object keys are always strings, so ids are converted back to ``int``.
    """

    results_path = Path(path)
    data = _require_mapping(_parse_file(results_path) or {}, path=results_path)

    results: dict[int, dict[str, Any]] = {}
    for raw_id, metrics in data.items():
        try:
            set_id = int(raw_id)
        except (TypeError, ValueError) as exc:
            raise SetsError(
                Err.INVALID_CONFIG,
                ctx={"path": str(results_path), "id": raw_id, "error": "set id must be integer"},
                cause=exc,
            ) from exc
        if not isinstance(metrics, Mapping):
            raise SetsError(
                Err.INVALID_CONFIG,
                ctx={"path": str(results_path), "id": set_id, "error": "metrics must be mapping"},
            )
        results[set_id] = {str(name): value for name, value in metrics.items()}
    return results
