"""
Form-state lifecycle shared by every entity dialog, plus the small list
editors used inside forms (milestones, tags).

Dialog state machine:

    closed -> open(create, empty seed) | open(edit, record seed)
           -> submitting -> closed on success
                         -> open with error on failure (values kept)
"""

import copy
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ..core.errors import ValidationError
from .aggregates import round_half_up


class FormMode(str, Enum):
    CLOSED = "closed"
    CREATE = "create"
    EDIT = "edit"


def empty_record(model) -> Dict[str, Any]:
    """Create-form seed: the model's default for every editable field."""
    defaults = model().to_dict()
    return {name: defaults[name] for name in model.editable_fields()}


def seed_record(model, record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Edit-form seed: each editable field from ``record``, falling back to the
    model default when the stored value is empty (``field or default``).
    """
    seed = {}
    for name, default in empty_record(model).items():
        seed[name] = copy.deepcopy(record.get(name) or default)
    return seed


def require_fields(values: Dict[str, Any], required: Sequence[str]) -> None:
    """Raise ValidationError when a required text field is blank."""
    missing = [name for name in required if not str(values.get(name) or "").strip()]
    if missing:
        raise ValidationError(f"Required: {', '.join(missing)}", fields=missing)


class FormDialog:
    """
    Create/edit dialog for one entity type.

    Attributes:
        mode: FormMode.CLOSED, CREATE or EDIT
        values: Current field values (survive a failed submit)
        editing: Record being edited (None when creating)
        submitting: True between start_submit() and succeed()/fail()
        error: Message of the last failed submit, shown until the next one
    """

    def __init__(self, model, required: Sequence[str] = ("title",)):
        self.model = model
        self.required = tuple(required)
        self.mode = FormMode.CLOSED
        self.values: Dict[str, Any] = {}
        self.editing: Optional[Dict[str, Any]] = None
        self.submitting = False
        self.error: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.mode != FormMode.CLOSED

    @property
    def record_id(self) -> Optional[Any]:
        return self.editing.get("id") if self.editing else None

    def open_create(self, **overrides: Any) -> Dict[str, Any]:
        self.mode = FormMode.CREATE
        self.editing = None
        self.values = {**empty_record(self.model), **overrides}
        self.submitting = False
        self.error = None
        return self.values

    def open_edit(self, record: Dict[str, Any]) -> Dict[str, Any]:
        self.mode = FormMode.EDIT
        self.editing = record
        self.values = seed_record(self.model, record)
        self.submitting = False
        self.error = None
        return self.values

    def update(self, **changes: Any) -> Dict[str, Any]:
        unknown = set(changes) - set(self.model.editable_fields())
        if unknown:
            raise KeyError(f"Unknown form fields: {', '.join(sorted(unknown))}")
        self.values.update(changes)
        return self.values

    def validate(self) -> None:
        require_fields(self.values, self.required)

    def start_submit(self) -> Dict[str, Any]:
        """
        Gate and begin a submit; returns the payload to send.

        Raises:
            ValidationError: required fields are blank (nothing is sent)
        """
        if not self.is_open:
            raise ValidationError("No form is open")
        self.validate()
        self.submitting = True
        self.error = None
        return copy.deepcopy(self.values)

    def succeed(self) -> None:
        self.close()

    def fail(self, message: str) -> None:
        self.submitting = False
        self.error = message

    def close(self) -> None:
        self.mode = FormMode.CLOSED
        self.editing = None
        self.values = {}
        self.submitting = False
        self.error = None


# =============================================================================
# Milestones
# =============================================================================

def milestone_progress(milestones: List[Dict[str, Any]]) -> Optional[int]:
    """round(100 * completed / total); None when there are no milestones."""
    if not milestones:
        return None
    completed = sum(1 for m in milestones if m.get("completed"))
    return round_half_up(100 * completed / len(milestones))


def toggle_milestone(milestones: List[Dict[str, Any]], index: int) -> List[Dict[str, Any]]:
    """Copy of ``milestones`` with entry ``index`` flipped."""
    toggled = [dict(m) for m in milestones]
    toggled[index]["completed"] = not toggled[index].get("completed")
    return toggled


def apply_milestone_toggle(progress: int, milestones: List[Dict[str, Any]],
                           index: int) -> Dict[str, Any]:
    """
    Toggle one milestone and recompute progress.

    With no milestones nothing changes (there is nothing to divide by).
    """
    if not milestones:
        return {"milestones": [], "progress": progress}
    toggled = toggle_milestone(milestones, index)
    return {"milestones": toggled, "progress": milestone_progress(toggled)}


def goal_status_for_progress(progress: int, current_status: str) -> str:
    """Status after a milestone toggle: completed at 100, in-progress above 0."""
    if progress == 100:
        return "completed"
    if progress > 0:
        return "in-progress"
    return current_status


def status_divergence(goal: Dict[str, Any]) -> Optional[str]:
    """
    Describe a status that disagrees with progress, or None.

    Status can be edited directly, so disagreement is reported, never fixed.
    """
    progress = goal.get("progress") or 0
    status = goal.get("status") or "not-started"
    if progress == 100 and status != "completed":
        return f"progress is 100% but status is '{status}'"
    if status == "completed" and progress < 100:
        return f"status is 'completed' but progress is {progress}%"
    if status == "not-started" and progress > 0:
        return f"status is 'not-started' but progress is {progress}%"
    return None


def add_milestone(milestones: List[Dict[str, Any]], title: str) -> List[Dict[str, Any]]:
    title = (title or "").strip()
    if not title:
        return list(milestones)
    return [*milestones, {"title": title, "completed": False}]


def remove_milestone(milestones: List[Dict[str, Any]], index: int) -> List[Dict[str, Any]]:
    return [m for i, m in enumerate(milestones) if i != index]


# =============================================================================
# Tags and display helpers
# =============================================================================

def add_tag(tags: List[str], tag: str) -> List[str]:
    """Append a trimmed tag unless blank or already present (order kept)."""
    tag = (tag or "").strip()
    if not tag or tag in tags:
        return list(tags)
    return [*tags, tag]


def remove_tag(tags: List[str], tag: str) -> List[str]:
    return [t for t in tags if t != tag]


def initials(name: Optional[str]) -> str:
    """Up to two initials for an avatar placeholder."""
    letters = "".join(part[0] for part in (name or "").split() if part)
    return letters.upper()[:2] or "?"
