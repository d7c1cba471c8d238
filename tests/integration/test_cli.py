"""
Integration tests for the planner CLI.

Each test gets its own config directory and SQLite file, created through
the `init-db` command.
"""

import pytest
from typer.testing import CliRunner

import planner
from bizplanner.core.config import Config


@pytest.fixture
def runner(tmp_path, monkeypatch):
    config_dir = tmp_path / "config"
    monkeypatch.setenv("PLANNER_CONFIG_DIR", str(config_dir))
    monkeypatch.delenv("DATABASE_URL", raising=False)
    config = Config(config_dir)
    config.set("database_path", str(tmp_path / "db" / "planner.db"))
    config.set("storage_directory", str(tmp_path / "storage"))

    monkeypatch.setattr(planner, "_client", None)
    monkeypatch.setattr(planner, "_cache", None)
    monkeypatch.setattr(planner, "_notifier", None)

    cli = CliRunner()
    result = cli.invoke(planner.app, ["init-db"])
    assert result.exit_code == 0, result.output
    return cli


def invoke(runner, *args):
    return runner.invoke(planner.app, list(args))


class TestTaskCommands:

    def test_add_and_list(self, runner):
        added = invoke(runner, "add", "Call the bank", "--due", "2026-10-20", "-p", "important")

        assert added.exit_code == 0, added.output
        assert "Task created" in added.output
        assert "2026-10-20" in added.output

        listed = invoke(runner, "tasks", "--tab", "pending")
        assert "Call the bank" in listed.output

    def test_blank_title_fails(self, runner):
        result = invoke(runner, "add", "   ")

        assert result.exit_code == 1
        assert "Required: title" in result.output

    def test_done_missing_task(self, runner):
        result = invoke(runner, "done", "99")

        assert result.exit_code == 1
        assert "Task #99 not found" in result.output

    def test_unknown_tab(self, runner):
        assert invoke(runner, "tasks", "--tab", "someday").exit_code == 1


class TestGoalCommands:

    def test_launch_goal_with_milestone(self, runner):
        created = invoke(runner, "goals", "--new", "Launch", "--milestone", "Design")
        assert created.exit_code == 0, created.output

        toggled = invoke(runner, "milestone", "1", "1")

        assert toggled.exit_code == 0, toggled.output
        assert "Progress: 100%" in toggled.output
        assert "Status: completed" in toggled.output

    def test_milestone_out_of_range(self, runner):
        invoke(runner, "goals", "--new", "Launch", "--milestone", "Design")

        result = invoke(runner, "milestone", "1", "5")

        assert result.exit_code == 1
        assert "has 1 milestones" in result.output


class TestOtherCommands:

    def test_event_needs_a_date(self, runner):
        result = invoke(runner, "events", "--add", "Board meeting")

        assert result.exit_code == 1
        assert "--on is required" in result.output

    def test_settings_preset(self, runner):
        result = invoke(runner, "settings", "--company", "Acme", "--preset", "Charcoal")

        assert result.exit_code == 0, result.output
        assert "Settings saved successfully" in result.output
        assert "#2d2d2d" in result.output

    def test_unknown_preset(self, runner):
        assert invoke(runner, "settings", "--preset", "Neon").exit_code == 1

    def test_delete_unknown_entity(self, runner):
        assert invoke(runner, "delete", "invoice", "1").exit_code == 1

    def test_progress_bad_range(self, runner):
        assert invoke(runner, "progress", "--range", "decade").exit_code == 1

    def test_dashboard_renders(self, runner):
        result = invoke(runner, "dashboard")

        assert result.exit_code == 0, result.output
        assert "Business Planner" in result.output

    def test_note_create_and_search(self, runner):
        created = invoke(runner, "notes", "--new", "Retro", "--tag", "team", "--color", "Green")
        assert created.exit_code == 0, created.output

        listed = invoke(runner, "notes", "--search", "TEAM")

        assert "Retro" in listed.output
        assert "Green" in listed.output
