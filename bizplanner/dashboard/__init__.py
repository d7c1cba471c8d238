"""
Dashboard module for Business Planner.

Provides read-only aggregation for the dashboard and progress views and
Rich formatting for the terminal shell.
"""

from .aggregator import (
    DashboardAggregator,
    DashboardData,
    DashboardStats,
    ProgressReport,
)
from .formatter import DashboardFormatter

__all__ = [
    # Aggregator
    'DashboardAggregator',
    'DashboardData',
    'DashboardStats',
    'ProgressReport',
    # Formatter
    'DashboardFormatter',
]
