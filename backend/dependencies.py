"""
Dependency injection for FastAPI endpoints.

Provides singleton instances of Config, Database, FileStorage and the
PlannerClient to be used across all API routes. Tests replace
``get_client`` through ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends

from bizplanner.core.config import Config
from bizplanner.core.database import Database, get_database as open_database
from bizplanner.dashboard.aggregator import DashboardAggregator
from bizplanner.data.client import PlannerClient
from bizplanner.data.storage import FileStorage


@lru_cache()
def get_config() -> Config:
    """
    Get cached Config instance.

    lru_cache ensures we only create one Config instance
    for the lifetime of the application (singleton pattern).
    """
    return Config()


@lru_cache()
def get_database() -> Database:
    """
    Get cached Database instance.

    SQLite unless DATABASE_URL points at PostgreSQL. Each call on the
    instance opens and closes its own connection, so one instance is shared.
    """
    return open_database(get_config())


@lru_cache()
def get_storage() -> FileStorage:
    """Get cached FileStorage rooted at the configured storage directory."""
    return FileStorage.from_config(get_config())


def get_client() -> PlannerClient:
    """PlannerClient over the shared database and storage."""
    return PlannerClient(get_database(), get_storage())


def get_dashboard_aggregator(client: PlannerClient = Depends(get_client)) -> DashboardAggregator:
    """
    Get DashboardAggregator for dashboard data.

    A fresh aggregator (and cache) per request: the HTTP shell always
    serves current rows.
    """
    return DashboardAggregator(client)
