"""
Pydantic schemas for API request/response bodies.

Request schemas declare the writable fields of each entity with every field
optional: the HTTP shell passes records through to the data-access client
and performs no validation of its own beyond types. Response schemas add the
server-assigned id and timestamps.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel


# =============================================================================
# Base Schemas
# =============================================================================

class ErrorResponse(BaseModel):
    """Error response for API errors."""
    detail: str
    code: Optional[str] = None


class RecordResponse(BaseModel):
    """Fields every persisted row carries."""
    id: int
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


# =============================================================================
# Task Schemas
# =============================================================================

class TaskWrite(BaseModel):
    """Request body for creating or updating a task."""
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[str] = None
    due_time: Optional[str] = None
    priority: Optional[str] = None  # urgent-important, important, urgent, normal
    status: Optional[str] = None  # pending, in-progress, completed, cancelled
    category: Optional[str] = None


class TaskResponse(RecordResponse, TaskWrite):
    pass


# =============================================================================
# Goal Schemas
# =============================================================================

class MilestoneSchema(BaseModel):
    title: str = ""
    completed: bool = False


class GoalWrite(BaseModel):
    """Request body for creating or updating a goal."""
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    timeframe: Optional[str] = None
    target_date: Optional[str] = None
    status: Optional[str] = None
    progress: Optional[int] = None
    milestones: Optional[List[MilestoneSchema]] = None


class GoalResponse(RecordResponse, GoalWrite):
    pass


# =============================================================================
# Event Schemas
# =============================================================================

class EventWrite(BaseModel):
    """Request body for creating or updating a calendar event."""
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    event_type: Optional[str] = None
    location: Optional[str] = None
    color: Optional[str] = None


class EventResponse(RecordResponse, EventWrite):
    pass


# =============================================================================
# Note Schemas
# =============================================================================

class NoteWrite(BaseModel):
    """Request body for creating or updating a note."""
    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    is_pinned: Optional[bool] = None
    color: Optional[str] = None


class NoteResponse(RecordResponse, NoteWrite):
    pass


# =============================================================================
# Contact Schemas
# =============================================================================

class ContactWrite(BaseModel):
    """Request body for creating or updating a contact."""
    name: Optional[str] = None
    company: Optional[str] = None
    position: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    secondary_phone: Optional[str] = None
    address: Optional[str] = None
    category: Optional[str] = None
    notes: Optional[str] = None
    is_favorite: Optional[bool] = None
    avatar_url: Optional[str] = None


class ContactResponse(RecordResponse, ContactWrite):
    pass


# =============================================================================
# Settings Schemas
# =============================================================================

class SettingsWrite(BaseModel):
    """Request body for creating or updating the planner settings row."""
    company_name: Optional[str] = None
    logo_url: Optional[str] = None
    slogan: Optional[str] = None
    primary_color: Optional[str] = None
    accent_color: Optional[str] = None
    theme: Optional[str] = None
    week_starts_on: Optional[str] = None  # sunday or monday
    time_format: Optional[str] = None  # 12h or 24h
    date_format: Optional[str] = None


class SettingsResponse(RecordResponse, SettingsWrite):
    pass


# =============================================================================
# Upload and Dashboard Schemas
# =============================================================================

class UploadResponse(BaseModel):
    """Public URL of a stored file."""
    file_url: str


class ProgressResponse(BaseModel):
    range_name: str
    start: str
    end: str
    tasks: Dict[str, int]
    tasks_by_priority: List[Dict[str, Any]]
    goals: Dict[str, int]
    goals_by_category: List[Dict[str, Any]]
    weekly: List[Dict[str, Any]]
    productivity_score: int
    total_events: int
