"""Pytest configuration.

Tests import from the `querie.*` namespace; this conftest makes that work when running `pytest`
from a checkout without installing the package.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure `import querie...` works when running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))
