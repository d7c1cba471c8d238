"""
Generic data-access client for the planner entities.

Every entity exposes exactly the same four asynchronous operations, driven by
an EntitySpec instead of six hand-written modules:

    client = PlannerClient(db, storage)
    tasks = await client.tasks.list()
    task = await client.tasks.create({"title": "Call the bank"})
    task = await client.tasks.update(task["id"], {"status": "completed"})
    await client.tasks.delete(task["id"])

Rows travel as plain dicts. List-valued columns are decoded from JSON and
boolean columns are coerced to bool on the way out, so callers never see the
storage encoding.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..core.errors import DataAccessError, NotFoundError, UploadError
from ..core.models import (
    SERVER_FIELDS,
    Contact,
    Event,
    Goal,
    Note,
    PlannerSettings,
    RecordMixin,
    Task,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntitySpec:
    """
    Static description of one entity type.

    Attributes:
        name: Entity name used by callers ("Task")
        table: Backing table ("tasks")
        model: Record dataclass; its non-server fields are the writable columns
        order_by: Column for the default list order
        descending: Sort direction of the default order
        limit: Row cap for list() (PlannerSettings reads a single row)
        json_fields: Columns stored as JSON text
        bool_fields: Columns coerced to bool on read
        cache_key: Collection cache key shared by every page reading this entity
    """
    name: str
    table: str
    model: type
    order_by: str
    descending: bool = False
    limit: Optional[int] = None
    json_fields: Tuple[str, ...] = ()
    bool_fields: Tuple[str, ...] = ()
    cache_key: str = ""

    @property
    def columns(self) -> List[str]:
        return self.model.editable_fields()


ENTITIES: Dict[str, EntitySpec] = {
    "Task": EntitySpec(
        name="Task", table="tasks", model=Task,
        order_by="created_at", descending=True, cache_key="tasks",
    ),
    "Goal": EntitySpec(
        name="Goal", table="goals", model=Goal,
        order_by="created_at", descending=True,
        json_fields=("milestones",), cache_key="goals",
    ),
    "Event": EntitySpec(
        name="Event", table="events", model=Event,
        order_by="date", cache_key="events",
    ),
    "Note": EntitySpec(
        name="Note", table="notes", model=Note,
        order_by="created_at", descending=True,
        json_fields=("tags",), bool_fields=("is_pinned",), cache_key="notes",
    ),
    "Contact": EntitySpec(
        name="Contact", table="contacts", model=Contact,
        order_by="name", bool_fields=("is_favorite",), cache_key="contacts",
    ),
    "PlannerSettings": EntitySpec(
        name="PlannerSettings", table="planner_settings", model=PlannerSettings,
        order_by="id", limit=1, cache_key="plannerSettings",
    ),
}


def get_entity_spec(name: str) -> EntitySpec:
    """Look up an entity by name ("Task") or table name ("tasks")."""
    if name in ENTITIES:
        return ENTITIES[name]
    for spec in ENTITIES.values():
        if spec.table == name:
            return spec
    raise KeyError(f"Unknown entity: {name}")


class EntityClient:
    """list/create/update/delete for one table."""

    def __init__(self, db, spec: EntitySpec):
        self.db = db
        self.spec = spec

    async def _run(self, operation: str, fn: Callable, *args) -> Any:
        """Run a blocking database call off the event loop, wrapping driver errors."""
        try:
            return await asyncio.to_thread(fn, *args)
        except self.db.errors as e:
            logger.error(f"{self.spec.name}.{operation} failed: {e}")
            raise DataAccessError(
                f"Failed to {operation} {self.spec.name.lower()}: {e}",
                detail=str(e),
                entity=self.spec.name,
            ) from e

    def _encode(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Drop server-assigned fields and convert values to storage form."""
        columns = set(self.spec.columns)
        values = {}
        for key, value in record.items():
            if key in SERVER_FIELDS:
                continue
            if key not in columns:
                raise DataAccessError(
                    f"Unknown column '{key}' for {self.spec.table}",
                    detail={"column": key, "table": self.spec.table},
                    entity=self.spec.name,
                )
            if key in self.spec.json_fields:
                value = json.dumps(value if value is not None else [])
            elif key in self.spec.bool_fields:
                value = bool(value)
            values[key] = value
        return values

    def _decode(self, row: Dict[str, Any]) -> Dict[str, Any]:
        decoded = {}
        for key, value in row.items():
            if key in self.spec.json_fields:
                value = RecordMixin._parse_json_list(value)
            elif key in self.spec.bool_fields:
                value = bool(value)
            elif isinstance(value, (datetime, date)):
                value = value.isoformat()
            decoded[key] = value
        return decoded

    async def _fetch_row(self, record_id: Any) -> Optional[Dict[str, Any]]:
        row = await self._run(
            "read", self.db.execute_one,
            f"SELECT * FROM {self.spec.table} WHERE id = ?", (record_id,),
        )
        return self._decode(row) if row else None

    async def list(self) -> List[Dict[str, Any]]:
        """All rows in the entity's default order. Never paginated."""
        direction = "DESC" if self.spec.descending else "ASC"
        query = (
            f"SELECT * FROM {self.spec.table} "
            f"ORDER BY {self.spec.order_by} {direction}, id {direction}"
        )
        if self.spec.limit:
            query += f" LIMIT {int(self.spec.limit)}"
        rows = await self._run("list", self.db.execute, query)
        return [self._decode(row) for row in rows]

    async def create(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as persisted (with id and timestamps)."""
        values = self._encode(record)
        if values:
            columns = ", ".join(values)
            placeholders = ", ".join("?" for _ in values)
            query = f"INSERT INTO {self.spec.table} ({columns}) VALUES ({placeholders})"
        else:
            query = f"INSERT INTO {self.spec.table} DEFAULT VALUES"

        new_id = await self._run("create", self.db.execute_insert, query, tuple(values.values()))
        row = await self._fetch_row(new_id)
        if row is None:
            raise DataAccessError(
                f"Created {self.spec.name.lower()} could not be read back",
                detail={"id": new_id}, entity=self.spec.name,
            )
        logger.debug(f"Created {self.spec.name} {new_id}")
        return row

    async def update(self, record_id: Any, partial: Dict[str, Any]) -> Dict[str, Any]:
        """Merge the given fields into an existing row and return the full row."""
        values = self._encode(partial)
        if values:
            assignments = ", ".join(f"{column} = ?" for column in values)
            query = f"UPDATE {self.spec.table} SET {assignments} WHERE id = ?"
            count = await self._run(
                "update", self.db.execute_write, query, (*values.values(), record_id)
            )
            if count == 0:
                raise NotFoundError(
                    f"{self.spec.name} {record_id} not found",
                    detail={"id": record_id}, entity=self.spec.name,
                )

        row = await self._fetch_row(record_id)
        if row is None:
            raise NotFoundError(
                f"{self.spec.name} {record_id} not found",
                detail={"id": record_id}, entity=self.spec.name,
            )
        return row

    async def delete(self, record_id: Any) -> None:
        """Remove a row. Deleting a row that is already gone is a no-op."""
        count = await self._run(
            "delete", self.db.execute_write,
            f"DELETE FROM {self.spec.table} WHERE id = ?", (record_id,),
        )
        if count == 0:
            logger.debug(f"Delete of missing {self.spec.name} {record_id} ignored")


class PlannerClient:
    """
    The single entry point views use to reach the store.

    Attributes:
        tasks, goals, events, notes, contacts, settings: per-entity clients
        storage: FileStorage used by upload_file (optional)
    """

    def __init__(self, db, storage=None):
        self.db = db
        self.storage = storage
        self.clients: Dict[str, EntityClient] = {
            name: EntityClient(db, spec) for name, spec in ENTITIES.items()
        }
        self.tasks = self.clients["Task"]
        self.goals = self.clients["Goal"]
        self.events = self.clients["Event"]
        self.notes = self.clients["Note"]
        self.contacts = self.clients["Contact"]
        self.settings = self.clients["PlannerSettings"]

    def entity(self, name: str) -> EntityClient:
        """Client for an entity name or table name."""
        return self.clients[get_entity_spec(name).name]

    async def get_settings(self) -> Dict[str, Any]:
        """The PlannerSettings row, or an empty dict when none exists."""
        rows = await self.settings.list()
        return rows[0] if rows else {}

    async def upload_file(self, filename: str, content: bytes) -> str:
        """Store a binary asset and return its public URL."""
        if self.storage is None:
            raise UploadError("File storage is not configured")
        return await self.storage.upload_file(filename, content)
