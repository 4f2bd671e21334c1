"""
Put `src/` on sys.path so `pytest` runs against the checkout without an install.
"""
from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).parent.resolve() / "src"
if SRC_DIR.exists() and str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))
