"""
Branding and preference values resolved from the PlannerSettings row.

The row may not exist: ``resolve_branding({})`` yields the documented
defaults. The resolved BrandingSettings value is passed explicitly to the
pages and derivation helpers that need it.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from ..core.models import PlannerSettings

_DEFAULTS = PlannerSettings()

DEFAULT_PRIMARY_COLOR = _DEFAULTS.primary_color
DEFAULT_ACCENT_COLOR = _DEFAULTS.accent_color

THEME_PRESETS: List[Dict[str, str]] = [
    {"name": "Classic Navy", "primary": "#1e3a5f", "accent": "#c9a962"},
    {"name": "Forest Green", "primary": "#1a4d2e", "accent": "#f5c45e"},
    {"name": "Royal Purple", "primary": "#4a1d6e", "accent": "#e8b4bc"},
    {"name": "Ocean Blue", "primary": "#1e4d6b", "accent": "#7fd1ae"},
    {"name": "Charcoal", "primary": "#2d2d2d", "accent": "#ff6b6b"},
    {"name": "Burgundy", "primary": "#722f37", "accent": "#d4a574"},
]


@dataclass(frozen=True)
class BrandingSettings:
    company_name: str = _DEFAULTS.company_name
    logo_url: str = _DEFAULTS.logo_url
    slogan: str = _DEFAULTS.slogan
    primary_color: str = DEFAULT_PRIMARY_COLOR
    accent_color: str = DEFAULT_ACCENT_COLOR
    theme: str = _DEFAULTS.theme
    week_starts_on: str = _DEFAULTS.week_starts_on
    time_format: str = _DEFAULTS.time_format
    date_format: str = _DEFAULTS.date_format

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def resolve_branding(row: Optional[Dict[str, Any]]) -> BrandingSettings:
    """Settings row (or {} / None) -> BrandingSettings with defaults for blanks."""
    row = row or {}
    defaults = BrandingSettings()
    return BrandingSettings(**{
        name: row.get(name) or value for name, value in defaults.to_dict().items()
    })


def find_preset(name: str) -> Optional[Dict[str, str]]:
    for preset in THEME_PRESETS:
        if preset["name"].lower() == name.lower():
            return preset
    return None


def apply_theme_preset(values: Dict[str, Any], preset: Dict[str, str]) -> Dict[str, Any]:
    """Form values with the preset's primary/accent colors applied."""
    return {**values, "primary_color": preset["primary"], "accent_color": preset["accent"]}
