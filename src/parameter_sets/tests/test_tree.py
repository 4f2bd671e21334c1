from __future__ import annotations

import pytest

from parameter_sets.errors import Err, InvalidPathError
from parameter_sets.tree import (
    find_sensitivity_paths,
    get_value_at_path,
    set_value_at_path,
)
from parameter_sets.tests.fixtures import mock_config


def test_find_sensitivity_paths_discovers_every_marker() -> None:
    paths = find_sensitivity_paths(mock_config())

    assert len(paths) == 2
    found = {path: list(candidates) for path, candidates in paths}
    assert found == {("b",): [10, 20, 30], ("c", "deep"): ["x", "y"]}


def test_find_sensitivity_paths_follows_document_order() -> None:
    config = {"z": {"sensitivity": [1, 2]}, "a": {"sensitivity": [3, 4]}}

    assert [path for path, _ in find_sensitivity_paths(config)] == [("z",), ("a",)]


def test_find_sensitivity_paths_inside_lists_uses_zero_based_indices() -> None:
    config = {"processes": [{"sensitivity": [1, 2]}, {"sensitivity": [3, 4]}]}

    paths = find_sensitivity_paths(config)

    assert [path for path, _ in paths] == [("processes", "0"), ("processes", "1")]


def test_marker_is_a_leaf_even_with_sibling_keys() -> None:
    config = {
        "rate": {
            "sensitivity": [0.1, 0.2],
            "unit": "pct",
            "nested": {"sensitivity": [7, 8]},
        }
    }

    assert find_sensitivity_paths(config) == [(("rate",), [0.1, 0.2])]


def test_single_candidate_marker_is_reported() -> None:
    assert find_sensitivity_paths({"k": {"sensitivity": [5]}}) == [(("k",), [5])]


@pytest.mark.parametrize("degenerate", [[], "not-a-list", 3, None, {"x": 1}])
def test_degenerate_marker_is_traversed_like_a_mapping(degenerate) -> None:
    config = {"p": {"sensitivity": degenerate, "inner": {"sensitivity": [1, 2]}}}

    paths = find_sensitivity_paths(config)

    assert [path for path, _ in paths] == [("p", "inner")]


def test_scalars_and_empty_containers_yield_nothing() -> None:
    assert find_sensitivity_paths(42) == []
    assert find_sensitivity_paths("sensitivity") == []
    assert find_sensitivity_paths({}) == []
    assert find_sensitivity_paths([]) == []


def test_non_string_keys_are_rendered_as_strings() -> None:
    paths = find_sensitivity_paths({1: {"sensitivity": ["a", "b"]}})

    assert paths[0][0] == ("1",)


def test_set_value_at_path_mixed_containers() -> None:
    root = {"procs": [{"rate": 1}, {"rate": {"sensitivity": [2, 3]}}]}

    set_value_at_path(root, ("procs", "1", "rate"), 3)

    assert root == {"procs": [{"rate": 1}, {"rate": 3}]}


def test_set_value_at_path_replaces_scalar_with_structure() -> None:
    root = {"a": [1, 2, 3]}

    set_value_at_path(root, ("a", "2"), {"b": [4]})
    set_value_at_path(root, ("a",), "flat")

    assert root == {"a": "flat"}


def test_set_value_at_path_adds_missing_final_key() -> None:
    root = {"a": {}}

    set_value_at_path(root, ("a", "new"), 1)

    assert root == {"a": {"new": 1}}


@pytest.mark.parametrize(
    "path,reason",
    [
        ((), "empty path"),
        (("missing", "x"), "missing key"),
        (("items", "x", "v"), "list index must be a non-negative integer"),
        (("items", "-1", "v"), "list index must be a non-negative integer"),
        (("items", "5", "v"), "list index out of range"),
        (("items", "9"), "list index out of range"),
        (("scalar", "x", "y"), "cannot descend into scalar"),
        (("scalar", "x"), "cannot assign into scalar"),
    ],
)
def test_set_value_at_path_rejects_unresolvable_paths(path, reason) -> None:
    root = {"items": [{"v": 1}], "scalar": 7}

    with pytest.raises(InvalidPathError) as exc:
        set_value_at_path(root, path, 0)

    assert exc.value.code is Err.INVALID_PATH
    assert exc.value.ctx["reason"] == reason
    assert exc.value.ctx["path"] == list(path)
    assert root == {"items": [{"v": 1}], "scalar": 7}


def test_get_value_at_path_reads_through_lists() -> None:
    root = {"procs": [{"rate": 1}, {"rate": 2}]}

    assert get_value_at_path(root, ("procs", "1", "rate")) == 2
    assert get_value_at_path(root, ()) is root


def test_get_value_at_path_missing_key() -> None:
    with pytest.raises(InvalidPathError):
        get_value_at_path({"a": 1}, ("b",))
