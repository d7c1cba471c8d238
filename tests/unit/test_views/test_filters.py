"""
Unit tests for collection filtering and sorting.
"""

from datetime import date

from bizplanner.views.filters import (
    filter_by_category,
    filter_by_flag,
    filter_tasks_by_tab,
    group_by_priority,
    items_for_day,
    search,
    sort_by_date,
    sort_contacts,
    sort_notes,
)


def make_tasks():
    return [
        {"id": 1, "title": "Launch plan", "status": "pending", "priority": "urgent-important",
         "due_date": "2026-10-14"},
        {"id": 2, "title": "Invoice run", "status": "completed", "priority": "normal",
         "due_date": "2026-10-14"},
        {"id": 3, "title": "Hire designer", "status": "in-progress", "priority": "important",
         "due_date": "2026-10-20"},
        {"id": 4, "title": "Old idea", "status": "cancelled", "priority": "urgent",
         "due_date": None},
    ]


class TestTaskTabs:

    def test_pending_includes_in_progress(self, today):
        ids = [t["id"] for t in filter_tasks_by_tab(make_tasks(), "pending", today)]
        assert ids == [1, 3]

    def test_completed(self, today):
        assert [t["id"] for t in filter_tasks_by_tab(make_tasks(), "completed", today)] == [2]

    def test_today_any_status(self, today):
        assert [t["id"] for t in filter_tasks_by_tab(make_tasks(), "today", today)] == [1, 2]

    def test_all(self, today):
        assert len(filter_tasks_by_tab(make_tasks(), "all", today)) == 4

    def test_input_not_mutated(self, today):
        tasks = make_tasks()
        filter_tasks_by_tab(tasks, "pending", today)
        assert len(tasks) == 4


class TestGrouping:

    def test_every_quadrant_present(self):
        groups = group_by_priority([])
        assert list(groups) == ["urgent-important", "important", "urgent", "normal"]
        assert all(v == [] for v in groups.values())

    def test_tasks_land_in_their_quadrant(self):
        groups = group_by_priority(make_tasks())
        assert [t["id"] for t in groups["urgent-important"]] == [1]
        assert [t["id"] for t in groups["urgent"]] == [4]


class TestSearch:

    def test_case_insensitive(self):
        assert [t["id"] for t in search(make_tasks(), "LAUNCH", ["title"])] == [1]

    def test_empty_query_keeps_all(self):
        assert len(search(make_tasks(), "", ["title"])) == 4

    def test_list_field_matches_any_element(self):
        notes = [{"title": "A", "tags": ["budget", "q4"]}, {"title": "B", "tags": []}]
        assert [n["title"] for n in search(notes, "q4", ["title", "tags"])] == ["A"]

    def test_missing_fields_never_match(self):
        contacts = [{"name": "Ana", "email": None}, {"name": "Bo", "email": "bo@acme.com"}]
        assert [c["name"] for c in search(contacts, "acme", ["name", "email"])] == ["Bo"]


class TestCategoryAndFlags:

    def test_all_category(self):
        rows = [{"category": "client"}, {"category": "vendor"}]
        assert filter_by_category(rows, "all") == rows
        assert filter_by_category(rows, "vendor") == [{"category": "vendor"}]

    def test_flag(self):
        rows = [{"id": 1, "is_favorite": True}, {"id": 2, "is_favorite": False}]
        assert [r["id"] for r in filter_by_flag(rows, "is_favorite")] == [1]


class TestSorting:

    def test_notes_pinned_first_then_newest(self):
        notes = [
            {"id": 1, "is_pinned": False, "created_at": "2026-10-10T09:00:00"},
            {"id": 2, "is_pinned": True, "created_at": "2026-10-01T09:00:00"},
            {"id": 3, "is_pinned": False, "created_at": "2026-10-12T09:00:00"},
            {"id": 4, "is_pinned": True, "created_at": "2026-10-05T09:00:00"},
        ]
        assert [n["id"] for n in sort_notes(notes)] == [4, 2, 3, 1]

    def test_contacts_favorites_first_then_name(self):
        contacts = [
            {"name": "zed", "is_favorite": False},
            {"name": "Amy", "is_favorite": False},
            {"name": "Max", "is_favorite": True},
        ]
        assert [c["name"] for c in sort_contacts(contacts)] == ["Max", "Amy", "zed"]

    def test_sort_by_date_undated_last(self):
        rows = [{"date": None}, {"date": "2026-10-20"}, {"date": "2026-10-01"}]
        assert [r["date"] for r in sort_by_date(rows)] == ["2026-10-01", "2026-10-20", None]


def test_items_for_day():
    events = [{"date": "2026-10-14", "title": "Standup"}, {"date": "2026-10-15", "title": "Review"}]
    items = items_for_day(make_tasks(), events, date(2026, 10, 14))
    assert [t["id"] for t in items["tasks"]] == [1, 2]
    assert [e["title"] for e in items["events"]] == ["Standup"]
