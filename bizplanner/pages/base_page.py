"""
Base page controller for Business Planner
Defines the shared view-state pattern every page is built from.

A page:
- fetches its collections through the CollectionCache (shared keys, no
  redundant loads)
- resolves branding/preferences from the PlannerSettings row and holds them
  as an explicit BrandingSettings value
- owns a FormDialog for its entity and routes submits to create or update
- invalidates its collection after every successful mutation and refetches
- reports failures as error toasts, leaving any open form and its values
  in place
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional
import json
import logging

from ..core.errors import DataAccessError, ValidationError
from ..data.cache import CollectionCache
from ..data.client import PlannerClient, get_entity_spec
from ..views.branding import BrandingSettings, resolve_branding
from ..views.forms import FormDialog, FormMode
from ..views.notifications import Notifier


@dataclass
class ActionResult:
    """
    Outcome of a user action on a page.

    Attributes:
        success: Whether the action completed
        message: Human-readable description of the result
        data: Optional payload (e.g. the persisted record)
    """
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "message": self.message, "data": self.data}

    @classmethod
    def error(cls, message: str, data: Optional[Dict[str, Any]] = None) -> 'ActionResult':
        return cls(success=False, message=message, data=data)

    @classmethod
    def ok(cls, message: str, data: Optional[Dict[str, Any]] = None) -> 'ActionResult':
        return cls(success=True, message=message, data=data)


class BasePage:
    """
    Shared behaviour for all page controllers.

    Subclasses set ``entity`` (the entity their form edits) and
    ``required_fields``, and implement ``load()``.
    """

    entity: str = ""
    required_fields = ("title",)
    settings_key = get_entity_spec("PlannerSettings").cache_key

    def __init__(self, client: PlannerClient, cache: CollectionCache, name: str,
                 notifier: Optional[Notifier] = None,
                 branding: Optional[BrandingSettings] = None,
                 today: Optional[date] = None):
        """
        Initialize the page.

        Args:
            client: Data-access client (the only path to the store)
            cache: Collection cache shared between pages
            name: Page identifier used for logging ("tasks", "goals", ...)
            notifier: Toast sink shared with the shell
            branding: Pre-resolved settings; loaded from the store when omitted
            today: Fixed "today" for date math (defaults to the real date)
        """
        self.client = client
        self.cache = cache
        self.name = name
        self.notifier = notifier or Notifier()
        self.branding = branding or BrandingSettings()
        self._branding_fixed = branding is not None
        self._today = today
        self.logger = logging.getLogger(f"page.{name}")
        self.spec = get_entity_spec(self.entity) if self.entity else None
        self.form = FormDialog(self.spec.model, self.required_fields) if self.spec else None

    @property
    def today(self) -> date:
        return self._today if self._today is not None else date.today()

    # =========================================================================
    # Reading
    # =========================================================================

    async def fetch(self, entity: str) -> List[Dict[str, Any]]:
        """Collection for ``entity`` via the shared cache."""
        spec = get_entity_spec(entity)
        return await self.cache.fetch(spec.cache_key, self.client.entity(spec.name).list)

    async def load_settings_row(self) -> Dict[str, Any]:
        """The PlannerSettings row or {} (the row may not exist)."""
        rows = await self.cache.fetch(self.settings_key, self.client.settings.list)
        return rows[0] if rows else {}

    async def load_branding(self) -> BrandingSettings:
        if not self._branding_fixed:
            self.branding = resolve_branding(await self.load_settings_row())
        return self.branding

    async def load(self) -> None:
        """Fetch everything the page renders. Overridden by subclasses."""
        await self.load_branding()

    async def refresh(self) -> bool:
        """Reload after an invalidation; a failed reload is reported, not raised."""
        try:
            await self.load()
        except DataAccessError as e:
            self.logger.error(f"Reload failed: {e.message}")
            self.notifier.error(e.message)
            return False
        return True

    # =========================================================================
    # Forms and mutations
    # =========================================================================

    def open_create(self, **overrides: Any) -> Dict[str, Any]:
        return self.form.open_create(**overrides)

    def open_edit(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return self.form.open_edit(record)

    def close_form(self) -> None:
        self.form.close()

    def prepare_payload(self, payload: Dict[str, Any], mode: FormMode) -> Dict[str, Any]:
        """Hook for pages that derive fields at submit time."""
        return payload

    async def submit(self) -> ActionResult:
        """
        Submit the open form: create without an id, update with one.

        A blank required field blocks the submit locally; nothing is sent.
        """
        try:
            payload = self.form.start_submit()
        except ValidationError as e:
            self.form.error = e.message
            return ActionResult.error(e.message, data={"fields": e.fields})

        mode = self.form.mode
        payload = self.prepare_payload(payload, mode)
        entity_client = self.client.entity(self.spec.name)

        if mode == FormMode.EDIT:
            record_id = self.form.record_id
            return await self._mutate(
                "update", lambda: entity_client.update(record_id, payload), from_form=True
            )
        return await self._mutate(
            "create", lambda: entity_client.create(payload), from_form=True
        )

    async def update_fields(self, record_id: Any, fields: Dict[str, Any]) -> ActionResult:
        """Partial update that leaves any open form alone (toggles, pins)."""
        entity_client = self.client.entity(self.spec.name)
        return await self._mutate(
            "update", lambda: entity_client.update(record_id, fields), close_form=False
        )

    async def delete(self, record: Dict[str, Any]) -> ActionResult:
        entity_client = self.client.entity(self.spec.name)
        return await self._mutate(
            "delete", lambda: entity_client.delete(record["id"]),
            from_form=self.form.is_open,
        )

    async def _mutate(self, action: str, operation: Callable[[], Awaitable[Any]],
                      close_form: bool = True, from_form: bool = False) -> ActionResult:
        """
        Run a mutation, then invalidate and refetch on success.

        On DataAccessError the error is logged and toasted; a form that
        triggered the mutation stays open with its values and the error.
        """
        label = self.spec.name.lower()
        try:
            result = await operation()
        except DataAccessError as e:
            self.logger.error(f"Failed to {action} {label}: {e.message}")
            if from_form and self.form.is_open:
                self.form.fail(e.message)
            self.notifier.error(e.message)
            return ActionResult.error(e.message)

        self.cache.invalidate(self.spec.cache_key)
        if close_form and self.form.is_open:
            self.form.succeed()

        record = result if isinstance(result, dict) else None
        self.log_action(action, {"id": record.get("id")} if record else None)
        await self.refresh()
        return ActionResult.ok(f"{self.spec.name} {action}d", data={"record": record})

    def log_action(self, action: str, details: Optional[Dict[str, Any]] = None) -> None:
        """
        Log an action taken on this page.

        Args:
            action: Description of the action taken
            details: Optional additional details as key-value pairs
        """
        log_entry = {
            "page": self.name,
            "action": action,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
        if details:
            log_entry["details"] = details

        self.logger.info(json.dumps(log_entry, default=str))
