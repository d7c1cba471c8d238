"""
Shared fixtures: a temporary SQLite database built from the real schema,
file storage under tmp_path, and a fixed "today".
"""

import sys
from datetime import date
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from bizplanner.core.database import SQLiteDatabase
from bizplanner.core.schema import init_schema
from bizplanner.data.cache import CollectionCache
from bizplanner.data.client import PlannerClient
from bizplanner.data.storage import FileStorage
from bizplanner.views.notifications import Notifier

# A Wednesday
TODAY = date(2026, 10, 14)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def db(tmp_path):
    """Temporary SQLite database with every planner table."""
    database = SQLiteDatabase(tmp_path / "planner.db", create=True)
    init_schema(database)
    return database


@pytest.fixture
def storage(tmp_path):
    return FileStorage(tmp_path / "storage", "http://testserver")


@pytest.fixture
def client(db, storage):
    return PlannerClient(db, storage)


@pytest.fixture
def cache():
    return CollectionCache()


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def page_kwargs(notifier, today):
    """Keyword arguments shared by every page controller under test."""
    return {"notifier": notifier, "today": today}
