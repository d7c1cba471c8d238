"""
Page controllers: the view state and user actions behind each planner page.
"""

from .base_page import ActionResult, BasePage
from .calendar import CalendarPage
from .contacts import ContactsPage
from .goals import GoalsPage
from .notes import NotesPage
from .settings import SettingsPage
from .tasks import TasksPage
from .weekly import WeeklyPlannerPage

__all__ = [
    'ActionResult',
    'BasePage',
    'CalendarPage',
    'ContactsPage',
    'GoalsPage',
    'NotesPage',
    'SettingsPage',
    'TasksPage',
    'WeeklyPlannerPage',
]
