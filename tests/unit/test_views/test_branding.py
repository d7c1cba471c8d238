"""
Unit tests for branding resolution and notifications.
"""

from bizplanner.views.branding import (
    THEME_PRESETS,
    apply_theme_preset,
    find_preset,
    resolve_branding,
)
from bizplanner.views.notifications import Notifier


class TestResolveBranding:

    def test_missing_row_gives_defaults(self):
        branding = resolve_branding({})

        assert branding.primary_color == "#1e3a5f"
        assert branding.accent_color == "#c9a962"
        assert branding.week_starts_on == "monday"

    def test_none_row(self):
        assert resolve_branding(None) == resolve_branding({})

    def test_blank_values_fall_back(self):
        branding = resolve_branding({"company_name": "Acme", "primary_color": ""})

        assert branding.company_name == "Acme"
        assert branding.primary_color == "#1e3a5f"

    def test_extra_columns_ignored(self):
        branding = resolve_branding({"id": 1, "week_starts_on": "sunday"})
        assert branding.week_starts_on == "sunday"


class TestPresets:

    def test_six_presets(self):
        assert len(THEME_PRESETS) == 6

    def test_find_is_case_insensitive(self):
        assert find_preset("forest green")["primary"] == "#1a4d2e"
        assert find_preset("Neon") is None

    def test_apply_keeps_other_values(self):
        values = apply_theme_preset({"company_name": "Acme"}, find_preset("Charcoal"))
        assert values == {
            "company_name": "Acme", "primary_color": "#2d2d2d", "accent_color": "#ff6b6b",
        }


class TestNotifier:

    def test_drain(self):
        notifier = Notifier()
        notifier.success("Saved")
        notifier.error("Broken")

        assert notifier.last.level == "error"
        assert [t.message for t in notifier.drain()] == ["Saved", "Broken"]
        assert notifier.drain() == []
