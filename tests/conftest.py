"""Shared test configuration."""

import os
import tempfile

import pytest

# Point the app at a throwaway SQLite file before any app module is imported
_db_dir = tempfile.mkdtemp(prefix="utility_dashboard_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"

from utility_dashboard.services.months import MonthIndex  # noqa: E402


@pytest.fixture
def jan_feb_index() -> MonthIndex:
    return MonthIndex(["Jan-25", "Feb-25"])


@pytest.fixture
def quarter_index() -> MonthIndex:
    return MonthIndex(["Jan-25", "Feb-25", "Mar-25"])
