"""Records produced by the set generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

SENSITIVITY_KEY = "sensitivity"
BASELINE_LABEL = "Baseline"
BASELINE_VALUE = "Base"

TreePath = tuple[str, ...]


@dataclass(frozen=True)
class ParameterSet:
    """One fully resolved configuration plus what changed relative to baseline.

    ``label`` is the dot-joined ``path`` of the varied parameter, e.g.
    ``"Parameters.Stock_S.b"``; the baseline carries ``BASELINE_LABEL`` and
    ``BASELINE_VALUE`` instead.
    """

    id: int
    config: dict[str, Any]
    label: str
    value: Any
    is_baseline: bool
    path: TreePath = field(default=())

    def as_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "value": self.value,
            "is_baseline": self.is_baseline,
            "config": self.config,
        }
