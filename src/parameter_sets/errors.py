"""Structured errors raised while loading, expanding and reporting parameter sets.

Every failure carries an ``Err`` code plus a small context mapping so that the
CLI can print one line and tests can assert on fields instead of messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Iterable

CONFIG_SUFFIXES = (".yaml", ".yml", ".json")


class Err(Enum):
    INVALID_PATH = auto()
    UNSUPPORTED_FORMAT = auto()
    INVALID_CONFIG = auto()
    DATA_MISSING = auto()
    IO_ERROR = auto()


@dataclass(eq=False)
class SetsError(Exception):
    """Base error for the expansion engine and its loader/report collaborators."""

    code: Err
    ctx: dict[str, Any] | None = None
    cause: Exception | None = None

    def __post_init__(self) -> None:
        if self.ctx is None:
            self.ctx = {}
        if self.cause is not None:
            self.__cause__ = self.cause
        super().__init__(self.code.name)

    def __str__(self) -> str:
        if not self.ctx:
            return self.code.name
        parts = ", ".join(f"{key}={_render(key, value)}" for key, value in self.ctx.items())
        return f"{self.code.name}: {parts}"


def _render(key: str, value: Any) -> str:
    # Tree paths render in the dotted form used by set labels.
    if key == "path" and isinstance(value, list):
        return repr(".".join(str(segment) for segment in value))
    return repr(value)


class InvalidPathError(SetsError):
    """A path segment could not be resolved against the tree."""

    def __init__(self, path, *, segment: str | None = None, reason: str) -> None:
        ctx: dict[str, Any] = {"path": list(path), "reason": reason}
        if segment is not None:
            ctx["segment"] = segment
        super().__init__(Err.INVALID_PATH, ctx=ctx)


class UnsupportedFormatError(SetsError):
    def __init__(self, path, *, expected: Iterable[str] = CONFIG_SUFFIXES) -> None:
        super().__init__(
            Err.UNSUPPORTED_FORMAT,
            ctx={"path": str(path), "expected": list(expected)},
        )
