"""
Error types for the Business Planner core.

Three failure families surface to callers:
- DataAccessError: a remote (database) operation reported an error
- UploadError: storing a binary asset failed
- ValidationError: a local, pre-submission check failed; never sent anywhere
"""

from typing import Any, List, Optional


class PlannerError(Exception):
    """Base class for all planner errors."""

    def __init__(self, message: str, detail: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        return self.message


class DataAccessError(PlannerError):
    """
    A data-access operation failed.

    Attributes:
        message: Human-readable description suitable for a notification
        detail: Raw error reported by the backing store
        entity: Entity name the operation targeted, if known
    """

    def __init__(self, message: str, detail: Optional[Any] = None,
                 entity: Optional[str] = None):
        super().__init__(message, detail)
        self.entity = entity


class NotFoundError(DataAccessError):
    """An update targeted a row that does not exist."""


class UploadError(PlannerError):
    """File upload failed; the surrounding form stays usable."""


class ValidationError(PlannerError):
    """Local pre-submit check failed (e.g. missing title)."""

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.fields = fields or []
