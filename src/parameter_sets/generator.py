"""Expand a configuration tree into One-at-a-Time parameter sets."""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Mapping

from parameter_sets.models import BASELINE_LABEL, BASELINE_VALUE, ParameterSet
from parameter_sets.tree import find_sensitivity_paths, set_value_at_path

logger = logging.getLogger(__name__)


def generate_sets(config: Mapping[str, Any]) -> list[ParameterSet]:
    """Build the baseline plus one set per non-baseline sensitivity candidate.

    The baseline takes the first candidate of every marker. Each variant is a
    fresh deep copy of the baseline with exactly one marker moved to another
    candidate. Ids start at 1 (the baseline) and follow discovery order.
    """

    vector_paths = find_sensitivity_paths(config)
    logger.debug("found %d sensitivity markers", len(vector_paths))

    baseline_config = deepcopy(config)
    for path, candidates in vector_paths:
        set_value_at_path(baseline_config, path, deepcopy(candidates[0]))

    sets = [
        ParameterSet(
            id=1,
            config=baseline_config,
            label=BASELINE_LABEL,
            value=BASELINE_VALUE,
            is_baseline=True,
        )
    ]

    next_id = 2
    for path, candidates in vector_paths:
        label = ".".join(path)
        for candidate in candidates[1:]:
            variant_config = deepcopy(baseline_config)
            set_value_at_path(variant_config, path, deepcopy(candidate))
            sets.append(
                ParameterSet(
                    id=next_id,
                    config=variant_config,
                    label=label,
                    value=deepcopy(candidate),
                    is_baseline=False,
                    path=path,
                )
            )
            next_id += 1

    logger.debug("generated %d parameter sets", len(sets))
    return sets
