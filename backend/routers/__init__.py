"""
API routers for the Business Planner backend.

- entities: CRUD for tasks, goals, events, notes, contacts and settings
- uploads: public file storage for logos and avatars
- dashboard: dashboard and progress aggregates
"""

from .entities import (
    tasks_router,
    goals_router,
    events_router,
    notes_router,
    contacts_router,
    settings_router,
    settings_current_router,
)
from .uploads import router as uploads_router
from .dashboard import router as dashboard_router

__all__ = [
    'tasks_router',
    'goals_router',
    'events_router',
    'notes_router',
    'contacts_router',
    'settings_router',
    'settings_current_router',
    'uploads_router',
    'dashboard_router',
]
