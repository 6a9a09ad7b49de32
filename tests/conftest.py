"""
Pytest configuration: make sure `import licensing` works regardless of
where pytest is invoked, and provide a registry bound to a throw‑away
store file.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# /path/to/project/tests -> project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from licensing.registry import PersonRegistry  # noqa: E402

# fixed "today" so age‑dependent rules do not drift with the calendar
TODAY = date(2025, 6, 1)


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "persons.txt"


@pytest.fixture
def registry(store_path):
    return PersonRegistry(store_path, today=lambda: TODAY)
