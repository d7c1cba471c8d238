"""
Dashboard and progress API endpoints.

Read-only views computed by the DashboardAggregator from the current rows.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.dependencies import get_dashboard_aggregator
from backend.schemas import ProgressResponse
from bizplanner.dashboard.aggregator import DashboardAggregator

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard", response_model=Dict[str, Any])
async def get_dashboard(
    aggregator: DashboardAggregator = Depends(get_dashboard_aggregator),
):
    """
    Get unified dashboard data for today.

    Aggregates:
    - Pending/completed task counts and completion rate
    - Tasks due today and today's events
    - Upcoming events for the rest of the week
    - Active goals and their average progress
    - Pending tasks per priority quadrant
    """
    data = await aggregator.aggregate()
    return data.to_dict()


@router.get("/progress", response_model=ProgressResponse)
async def get_progress(
    range_name: str = Query("week", alias="range", description="week, month or quarter"),
    aggregator: DashboardAggregator = Depends(get_dashboard_aggregator),
):
    """Progress analytics for the requested window."""
    try:
        report = await aggregator.progress(range_name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return report.to_dict()
