"""
Data models for Business Planner
Defines the six persisted record types and their fixed vocabularies.

Field defaults double as the empty-form defaults used when a create form
is opened, so a bare ``Task()`` is exactly the record a new-task dialog
starts from.
"""

from dataclasses import dataclass, field, fields, asdict
from typing import Optional, List, Dict, Any, Tuple
import json


# =============================================================================
# Vocabularies
# =============================================================================

TASK_PRIORITIES: Dict[str, Dict[str, str]] = {
    "urgent-important": {"label": "Urgent & Important", "description": "Do first"},
    "important": {"label": "Important", "description": "Schedule"},
    "urgent": {"label": "Urgent", "description": "Delegate"},
    "normal": {"label": "Normal", "description": "Do later"},
}

TASK_STATUSES = {
    "pending": "Pending",
    "in-progress": "In Progress",
    "completed": "Completed",
    "cancelled": "Cancelled",
}

GOAL_CATEGORIES = {
    "personal": "Personal",
    "professional": "Professional",
    "project": "Project",
}

GOAL_TIMEFRAMES = {
    "short-term": "Short-term",
    "medium-term": "Medium-term",
    "long-term": "Long-term",
}

GOAL_STATUSES = {
    "not-started": "Not Started",
    "in-progress": "In Progress",
    "completed": "Completed",
    "on-hold": "On Hold",
}

EVENT_TYPE_COLORS = {
    "meeting": "#3b82f6",
    "deadline": "#ef4444",
    "reminder": "#f59e0b",
    "holiday": "#10b981",
    "company-event": "#8b5cf6",
    "personal": "#ec4899",
}

EVENT_TYPE_LABELS = {
    "meeting": "Meeting",
    "deadline": "Deadline",
    "reminder": "Reminder",
    "holiday": "Holiday",
    "company-event": "Company Event",
    "personal": "Personal",
}

NOTE_CATEGORIES = {
    "meeting": "Meeting",
    "ideas": "Ideas",
    "project": "Project",
    "personal": "Personal",
    "general": "General",
}

# (name, value) swatches; "" means the default card color
NOTE_COLORS: List[Tuple[str, str]] = [
    ("Default", ""),
    ("Yellow", "#fef9c3"),
    ("Green", "#dcfce7"),
    ("Blue", "#dbeafe"),
    ("Pink", "#fce7f3"),
    ("Purple", "#f3e8ff"),
]

CONTACT_CATEGORIES = {
    "client": "Client",
    "colleague": "Colleague",
    "vendor": "Vendor",
    "partner": "Partner",
    "personal": "Personal",
    "other": "Other",
}

# Columns the store fills in itself
SERVER_FIELDS = ("id", "created_at", "updated_at")


# =============================================================================
# Records
# =============================================================================

class RecordMixin:
    """Shared helpers for the record dataclasses."""

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def editable_fields(cls) -> List[str]:
        """Fields a form may submit (everything the server does not assign)"""
        return [name for name in cls.field_names() if name not in SERVER_FIELDS]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Create a record from a row dictionary, ignoring unknown keys"""
        known = set(cls.field_names())
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def _parse_json_list(value: Any) -> List[Any]:
        """Parse JSON array string (or pass through an existing list)"""
        if isinstance(value, list):
            return value
        if value:
            try:
                result = json.loads(value)
                return result if isinstance(result, list) else []
            except (json.JSONDecodeError, TypeError):
                return []
        return []


@dataclass
class Task(RecordMixin):
    """Task data model"""
    id: Optional[int] = None
    title: str = ""
    description: str = ""
    due_date: str = ""
    due_time: str = ""
    priority: str = "normal"
    status: str = "pending"
    category: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class Goal(RecordMixin):
    """Goal data model; milestones are stored as a JSON list"""
    id: Optional[int] = None
    title: str = ""
    description: str = ""
    category: str = "personal"
    timeframe: str = "short-term"
    target_date: str = ""
    status: str = "not-started"
    progress: int = 0
    milestones: List[Dict[str, Any]] = field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class Event(RecordMixin):
    """Calendar event data model"""
    id: Optional[int] = None
    title: str = ""
    description: str = ""
    date: str = ""
    start_time: str = ""
    end_time: str = ""
    event_type: str = "meeting"
    location: str = ""
    color: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class Note(RecordMixin):
    """Note data model; content is markdown text"""
    id: Optional[int] = None
    title: str = ""
    content: str = ""
    category: str = "general"
    tags: List[str] = field(default_factory=list)
    is_pinned: bool = False
    color: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class Contact(RecordMixin):
    """Contact data model"""
    id: Optional[int] = None
    name: str = ""
    company: str = ""
    position: str = ""
    email: str = ""
    phone: str = ""
    secondary_phone: str = ""
    address: str = ""
    category: str = "other"
    notes: str = ""
    is_favorite: bool = False
    avatar_url: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class PlannerSettings(RecordMixin):
    """Branding and preference singleton (at most one row is used)"""
    id: Optional[int] = None
    company_name: str = ""
    logo_url: str = ""
    slogan: str = ""
    primary_color: str = "#1e3a5f"
    accent_color: str = "#c9a962"
    theme: str = "classic"
    week_starts_on: str = "monday"
    time_format: str = "12h"
    date_format: str = "MM/DD/YYYY"
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
