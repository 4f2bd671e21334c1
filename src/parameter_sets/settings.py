from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

REPORT_DIR_ENV = "PARAMETER_SETS_REPORT_DIR"
REPORT_FORMATS_ENV = "PARAMETER_SETS_REPORT_FORMATS"
DEFAULT_FORMATS = ("csv", "markdown", "latex")


def _default_output_dir() -> Path:
    return Path(os.environ.get(REPORT_DIR_ENV) or ".")


class ReportSettings(BaseModel):
    """Where sensitivity reports go and which table formats are written.

    Attributes:
        output_dir: Directory receiving ``sensitivity_<label>.<ext>`` files.
            Defaults to ``$PARAMETER_SETS_REPORT_DIR`` or the working directory.
        formats: Table formats to export. Known values are ``csv``,
            ``markdown`` and ``latex``; anything else is skipped with a warning
            at export time rather than rejected here.
    """

    output_dir: Path = Field(default_factory=_default_output_dir)
    formats: tuple[str, ...] = DEFAULT_FORMATS

    model_config = ConfigDict(frozen=True)

    @field_validator("formats", mode="before")
    @classmethod
    def _split_formats(cls, value):
        if isinstance(value, str):
            value = value.split(",")
        return tuple(str(item).strip().lower() for item in value if str(item).strip())

    @field_validator("formats")
    @classmethod
    def _require_formats(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("at least one report format is required")
        return value

    @classmethod
    def from_env(cls) -> "ReportSettings":
        formats = os.environ.get(REPORT_FORMATS_ENV)
        if formats:
            return cls(formats=formats)
        return cls()
