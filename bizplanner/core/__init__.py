"""
Core module for Business Planner
Contains database, configuration, schema, error and model definitions
"""

from .config import Config
from .database import Database, SQLiteDatabase, PostgreSQLDatabase, get_database
from .errors import PlannerError, DataAccessError, NotFoundError, UploadError, ValidationError
from .models import Task, Goal, Event, Note, Contact, PlannerSettings

__all__ = [
    'Config', 'Database', 'SQLiteDatabase', 'PostgreSQLDatabase', 'get_database',
    'PlannerError', 'DataAccessError', 'NotFoundError', 'UploadError', 'ValidationError',
    'Task', 'Goal', 'Event', 'Note', 'Contact', 'PlannerSettings',
]
