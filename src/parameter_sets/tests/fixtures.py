from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml


def mock_config() -> dict[str, Any]:
    """Two markers at different depths plus an untouched scalar."""

    return {
        "a": 1,
        "b": {"sensitivity": [10, 20, 30]},
        "c": {"deep": {"sensitivity": ["x", "y"]}},
    }


def write_config(tmp_path: Path, payload: Any, *, name: str = "config.yaml") -> Path:
    path = tmp_path / name
    if path.suffix == ".json":
        path.write_text(json.dumps(payload), encoding="utf-8")
    else:
        path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")
    return path
