"""
Unit tests for the generic entity client.
Tests list/create/update/delete against a real SQLite schema.
"""

import pytest

from bizplanner.core.errors import DataAccessError, NotFoundError, UploadError
from bizplanner.data.client import ENTITIES, PlannerClient, get_entity_spec


# One create record and one partial update per entity
SAMPLES = {
    "Task": ({"title": "Call the bank", "priority": "important"}, {"status": "completed"}),
    "Goal": ({"title": "Launch", "milestones": [{"title": "Design", "completed": False}]},
             {"progress": 50}),
    "Event": ({"title": "Board meeting", "date": "2026-10-20"}, {"location": "HQ"}),
    "Note": ({"title": "Pricing", "tags": ["q4"], "is_pinned": True}, {"content": "tiers"}),
    "Contact": ({"name": "Ada", "email": "ada@example.com", "is_favorite": True},
                {"phone": "555-0100"}),
    "PlannerSettings": ({"company_name": "Acme"}, {"slogan": "Plan ahead"}),
}


def test_samples_cover_every_entity():
    assert set(SAMPLES) == set(ENTITIES)


class TestEntitySpecs:
    """Tests for the entity registry."""

    def test_six_entities(self):
        assert set(ENTITIES) == {"Task", "Goal", "Event", "Note", "Contact", "PlannerSettings"}

    def test_lookup_by_table_name(self):
        assert get_entity_spec("planner_settings").name == "PlannerSettings"

    def test_unknown_entity(self):
        with pytest.raises(KeyError):
            get_entity_spec("Invoice")

    def test_cache_keys(self):
        keys = {spec.cache_key for spec in ENTITIES.values()}
        assert keys == {"tasks", "goals", "events", "notes", "contacts", "plannerSettings"}


class TestCreateAndList:
    """Tests for create() and list()."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("entity", sorted(SAMPLES))
    async def test_create_then_list_contains_record(self, client, entity):
        """A created record appears in list() with a server-assigned id."""
        record, _ = SAMPLES[entity]
        entity_client = client.entity(entity)

        created = await entity_client.create(record)
        rows = await entity_client.list()

        assert created["id"] is not None
        assert created["created_at"] is not None
        assert [r["id"] for r in rows] == [created["id"]]
        for field, value in record.items():
            assert rows[0][field] == value

    @pytest.mark.asyncio
    async def test_server_fields_in_input_are_ignored(self, client):
        created = await client.tasks.create({"id": 999, "title": "T", "created_at": "1999-01-01"})

        assert created["id"] != 999
        assert created["created_at"] != "1999-01-01"

    @pytest.mark.asyncio
    async def test_unknown_column_raises(self, client):
        with pytest.raises(DataAccessError) as exc_info:
            await client.tasks.create({"title": "T", "estimate": 30})

        assert "estimate" in exc_info.value.message
        assert await client.tasks.list() == []

    @pytest.mark.asyncio
    async def test_tasks_newest_first(self, client):
        first = await client.tasks.create({"title": "first"})
        second = await client.tasks.create({"title": "second"})

        rows = await client.tasks.list()

        assert [r["id"] for r in rows] == [second["id"], first["id"]]

    @pytest.mark.asyncio
    async def test_events_ordered_by_date(self, client):
        await client.events.create({"title": "later", "date": "2026-10-20"})
        await client.events.create({"title": "sooner", "date": "2026-10-15"})

        rows = await client.events.list()

        assert [r["title"] for r in rows] == ["sooner", "later"]

    @pytest.mark.asyncio
    async def test_contacts_ordered_by_name(self, client):
        for name in ("Zoe", "Adam", "Maya"):
            await client.contacts.create({"name": name})

        rows = await client.contacts.list()

        assert [r["name"] for r in rows] == ["Adam", "Maya", "Zoe"]

    @pytest.mark.asyncio
    async def test_json_and_bool_columns_decode(self, client):
        """Lists come back as lists and flags as bools."""
        note = await client.notes.create({"title": "N", "tags": ["q4", "sales"], "is_pinned": 1})
        goal = await client.goals.create({
            "title": "G", "milestones": [{"title": "Design", "completed": False}],
        })

        assert note["tags"] == ["q4", "sales"]
        assert note["is_pinned"] is True
        assert goal["milestones"] == [{"title": "Design", "completed": False}]

    @pytest.mark.asyncio
    async def test_settings_list_reads_one_row(self, client):
        await client.settings.create({"company_name": "First"})
        await client.settings.create({"company_name": "Second"})

        rows = await client.settings.list()

        assert len(rows) == 1
        assert rows[0]["company_name"] == "First"


class TestUpdate:
    """Tests for update()."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("entity", sorted(SAMPLES))
    async def test_only_given_field_changes(self, client, entity):
        record, partial = SAMPLES[entity]
        entity_client = client.entity(entity)
        created = await entity_client.create(record)

        updated = await entity_client.update(created["id"], partial)

        for field, value in partial.items():
            assert updated[field] == value
        for field in created:
            if field not in partial and field != "updated_at":
                assert updated[field] == created[field]

    @pytest.mark.asyncio
    async def test_update_missing_row_raises_not_found(self, client):
        with pytest.raises(NotFoundError):
            await client.tasks.update(12345, {"title": "ghost"})

    @pytest.mark.asyncio
    async def test_empty_update_returns_row(self, client):
        created = await client.tasks.create({"title": "T"})

        assert (await client.tasks.update(created["id"], {}))["title"] == "T"

    @pytest.mark.asyncio
    async def test_update_list_column(self, client):
        note = await client.notes.create({"title": "N", "tags": ["a"]})

        updated = await client.notes.update(note["id"], {"tags": ["a", "b"]})

        assert updated["tags"] == ["a", "b"]


class TestDelete:
    """Tests for delete()."""

    @pytest.mark.asyncio
    async def test_delete_removes_row(self, client):
        keep = await client.tasks.create({"title": "keep"})
        drop = await client.tasks.create({"title": "drop"})

        await client.tasks.delete(drop["id"])

        assert [r["id"] for r in await client.tasks.list()] == [keep["id"]]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("entity", sorted(SAMPLES))
    async def test_second_delete_is_a_no_op(self, client, entity):
        record, _ = SAMPLES[entity]
        entity_client = client.entity(entity)
        created = await entity_client.create(record)

        await entity_client.delete(created["id"])
        await entity_client.delete(created["id"])

        assert await entity_client.list() == []


class TestErrors:
    """Driver failures surface as DataAccessError."""

    @pytest.mark.asyncio
    async def test_missing_table_wraps_driver_error(self, client, db):
        db.execute_ddl("DROP TABLE contacts;")

        with pytest.raises(DataAccessError) as exc_info:
            await client.contacts.list()

        assert exc_info.value.entity == "Contact"
        assert exc_info.value.detail


class TestPlannerClient:
    """Tests for the PlannerClient facade."""

    @pytest.mark.asyncio
    async def test_get_settings_empty(self, client):
        assert await client.get_settings() == {}

    @pytest.mark.asyncio
    async def test_get_settings_first_row(self, client):
        await client.settings.create({"company_name": "Acme"})

        assert (await client.get_settings())["company_name"] == "Acme"

    def test_entity_lookup(self, client):
        assert client.entity("Note") is client.notes
        assert client.entity("notes") is client.notes

    @pytest.mark.asyncio
    async def test_upload_without_storage(self, db):
        with pytest.raises(UploadError):
            await PlannerClient(db).upload_file("logo.png", b"data")

    @pytest.mark.asyncio
    async def test_upload_returns_public_url(self, client):
        url = await client.upload_file("logo.png", b"\x89PNG")

        assert url.startswith("http://testserver/public/uploads/")
        assert url.endswith(".png")
