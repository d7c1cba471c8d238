"""
CRUD endpoints for every planner entity.

One router per entity, all built by ``build_entity_router`` from the
entity's EntitySpec and schemas:

    GET    /api/{entity}          list in the entity's default order
    POST   /api/{entity}          create, returns the persisted row
    PATCH  /api/{entity}/{id}     partial update, returns the full row
    DELETE /api/{entity}/{id}     delete (missing rows are ignored)

Every successful mutation publishes an invalidation for the entity's cache
key over the WebSocket.
"""

from typing import Any, Dict, List, Type

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from backend.dependencies import get_client
from backend.schemas import (
    ContactResponse,
    ContactWrite,
    ErrorResponse,
    EventResponse,
    EventWrite,
    GoalResponse,
    GoalWrite,
    NoteResponse,
    NoteWrite,
    SettingsResponse,
    SettingsWrite,
    TaskResponse,
    TaskWrite,
)
from backend.websocket import notify_invalidate
from bizplanner.data.client import PlannerClient, get_entity_spec


def build_entity_router(entity: str, path: str, write_schema: Type[BaseModel],
                        response_schema: Type[BaseModel]) -> APIRouter:
    """
    Build the CRUD router for one entity.

    Args:
        entity: Entity name ("Task")
        path: URL segment under /api ("tasks")
        write_schema: Request body schema for create and update
        response_schema: Schema of a persisted row
    """
    spec = get_entity_spec(entity)
    router = APIRouter(prefix=f"/api/{path}", tags=[path])

    @router.get("", response_model=List[response_schema])
    async def list_records(client: PlannerClient = Depends(get_client)):
        return await client.entity(spec.name).list()

    @router.post("", response_model=response_schema, status_code=status.HTTP_201_CREATED,
                 responses={400: {"model": ErrorResponse}})
    async def create_record(body: write_schema, client: PlannerClient = Depends(get_client)):
        record = await client.entity(spec.name).create(body.model_dump(exclude_unset=True))
        await notify_invalidate(spec.cache_key)
        return record

    @router.patch("/{record_id}", response_model=response_schema,
                  responses={404: {"model": ErrorResponse}})
    async def update_record(record_id: int, body: write_schema,
                            client: PlannerClient = Depends(get_client)):
        record = await client.entity(spec.name).update(
            record_id, body.model_dump(exclude_unset=True)
        )
        await notify_invalidate(spec.cache_key)
        return record

    @router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_record(record_id: int, client: PlannerClient = Depends(get_client)):
        await client.entity(spec.name).delete(record_id)
        await notify_invalidate(spec.cache_key)

    list_records.__name__ = f"list_{path}"
    create_record.__name__ = f"create_{path}"
    update_record.__name__ = f"update_{path}"
    delete_record.__name__ = f"delete_{path}"
    return router


settings_current_router = APIRouter(prefix="/api/settings", tags=["settings"])


@settings_current_router.get("/current", response_model=Dict[str, Any])
async def get_current_settings(client: PlannerClient = Depends(get_client)):
    """The settings row, or {} when none has been saved yet."""
    return await client.get_settings()


tasks_router = build_entity_router("Task", "tasks", TaskWrite, TaskResponse)
goals_router = build_entity_router("Goal", "goals", GoalWrite, GoalResponse)
events_router = build_entity_router("Event", "events", EventWrite, EventResponse)
notes_router = build_entity_router("Note", "notes", NoteWrite, NoteResponse)
contacts_router = build_entity_router("Contact", "contacts", ContactWrite, ContactResponse)
settings_router = build_entity_router("PlannerSettings", "settings", SettingsWrite, SettingsResponse)
