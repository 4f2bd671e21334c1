"""One-at-a-Time sensitivity expansion of nested configuration trees."""

from .errors import Err, InvalidPathError, SetsError, UnsupportedFormatError
from .generator import generate_sets
from .loader import load_config, load_results, load_sets
from .models import BASELINE_LABEL, BASELINE_VALUE, SENSITIVITY_KEY, ParameterSet
from .reporting import generate_sensitivity_tables, save_sensitivity_reports
from .settings import ReportSettings
from .tree import find_sensitivity_paths, get_value_at_path, set_value_at_path

__all__ = [
    "BASELINE_LABEL",
    "BASELINE_VALUE",
    "SENSITIVITY_KEY",
    "Err",
    "InvalidPathError",
    "ParameterSet",
    "ReportSettings",
    "SetsError",
    "UnsupportedFormatError",
    "find_sensitivity_paths",
    "generate_sensitivity_tables",
    "generate_sets",
    "get_value_at_path",
    "load_config",
    "load_results",
    "load_sets",
    "save_sensitivity_reports",
    "set_value_at_path",
]
