"""Path-addressed helpers for nested mapping/list configuration trees.

Paths are tuples of strings. Mapping segments are keys; list segments are
0-based element indices rendered as decimal strings.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any

from parameter_sets.errors import InvalidPathError
from parameter_sets.models import SENSITIVITY_KEY, TreePath


def _marker_candidates(node: Mapping[str, Any]) -> Sequence[Any] | None:
    candidates = node.get(SENSITIVITY_KEY)
    if isinstance(candidates, (list, tuple)) and candidates:
        return candidates
    return None


def find_sensitivity_paths(
    node: Any,
    current_path: TreePath = (),
) -> list[tuple[TreePath, Sequence[Any]]]:
    """Return ``(path, candidates)`` for every sensitivity marker under ``node``.

    A mapping holding a non-empty ``sensitivity`` list is a leaf: its other
    keys are not visited. Results follow document order.
    """

    found: list[tuple[TreePath, Sequence[Any]]] = []
    if isinstance(node, Mapping):
        candidates = _marker_candidates(node)
        if candidates is not None:
            found.append((tuple(current_path), candidates))
            return found
        for key, child in node.items():
            found.extend(find_sensitivity_paths(child, (*current_path, str(key))))
    elif isinstance(node, list):
        for index, child in enumerate(node):
            found.extend(find_sensitivity_paths(child, (*current_path, str(index))))
    return found


def _list_index(container: list[Any], segment: str, path: TreePath) -> int:
    if not segment.isdecimal():
        raise InvalidPathError(path, segment=segment, reason="list index must be a non-negative integer")
    index = int(segment)
    if index >= len(container):
        raise InvalidPathError(path, segment=segment, reason="list index out of range")
    return index


def _child(container: Any, segment: str, path: TreePath) -> Any:
    if isinstance(container, list):
        return container[_list_index(container, segment, path)]
    if isinstance(container, Mapping):
        if segment not in container:
            raise InvalidPathError(path, segment=segment, reason="missing key")
        return container[segment]
    raise InvalidPathError(path, segment=segment, reason="cannot descend into scalar")


def get_value_at_path(root: Any, path: Sequence[str]) -> Any:
    """Resolve ``path`` against ``root``; an empty path returns ``root``."""

    path = tuple(path)
    node = root
    for segment in path:
        node = _child(node, segment, path)
    return node


def set_value_at_path(root: Any, path: Sequence[str], value: Any) -> None:
    """Assign ``value`` at ``path`` inside ``root`` in place.

    The caller must own ``root`` exclusively; nothing is copied here.
    """

    path = tuple(path)
    if not path:
        raise InvalidPathError(path, reason="empty path")

    parent = root
    for segment in path[:-1]:
        parent = _child(parent, segment, path)

    last = path[-1]
    if isinstance(parent, list):
        parent[_list_index(parent, last, path)] = value
    elif isinstance(parent, MutableMapping):
        parent[last] = value
    else:
        raise InvalidPathError(path, segment=last, reason="cannot assign into scalar")
