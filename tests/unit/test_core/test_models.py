"""
Unit tests for the record models and vocabularies.
"""

from bizplanner.core.models import (
    EVENT_TYPE_COLORS,
    SERVER_FIELDS,
    Contact,
    Goal,
    Note,
    PlannerSettings,
    RecordMixin,
    Task,
)


class TestDefaults:
    """Model defaults are the empty-form defaults."""

    def test_task_defaults(self):
        task = Task()
        assert task.priority == "normal"
        assert task.status == "pending"

    def test_goal_defaults(self):
        goal = Goal()
        assert (goal.category, goal.timeframe, goal.status, goal.progress) == \
            ("personal", "short-term", "not-started", 0)
        assert goal.milestones == []

    def test_mutable_defaults_are_not_shared(self):
        first, second = Note(), Note()
        first.tags.append("x")
        assert second.tags == []

    def test_settings_defaults(self):
        settings = PlannerSettings()
        assert settings.primary_color == "#1e3a5f"
        assert settings.accent_color == "#c9a962"
        assert settings.week_starts_on == "monday"

    def test_contact_defaults(self):
        contact = Contact()
        assert contact.category == "other"
        assert contact.is_favorite is False

    def test_every_event_type_has_a_color(self):
        assert set(EVENT_TYPE_COLORS) == {
            "meeting", "deadline", "reminder", "holiday", "company-event", "personal"
        }


class TestRecordMixin:
    """Tests for the shared record helpers."""

    def test_editable_fields_exclude_server_fields(self):
        editable = Task.editable_fields()
        assert "title" in editable
        assert not set(SERVER_FIELDS) & set(editable)

    def test_from_dict_ignores_unknown_keys(self):
        task = Task.from_dict({"id": 3, "title": "T", "unexpected": True})
        assert task.id == 3
        assert task.title == "T"

    def test_to_dict_round_trip(self):
        note = Note(title="N", tags=["a"])
        assert Note.from_dict(note.to_dict()) == note

    def test_parse_json_list(self):
        assert RecordMixin._parse_json_list('["a", "b"]') == ["a", "b"]
        assert RecordMixin._parse_json_list(["a"]) == ["a"]
        assert RecordMixin._parse_json_list(None) == []
        assert RecordMixin._parse_json_list("not json") == []
        assert RecordMixin._parse_json_list('{"a": 1}') == []
