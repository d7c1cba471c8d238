"""
Notes page: searchable, pinnable notes with tags and color swatches.
"""

from typing import Any, Dict, List, Optional

from ..core.models import NOTE_COLORS
from ..views import filters, forms
from .base_page import ActionResult, BasePage

SEARCH_FIELDS = ("title", "content", "tags")
SWATCH_NAMES = {value: name for name, value in NOTE_COLORS}


class NotesPage(BasePage):

    entity = "Note"
    required_fields = ("title",)

    def __init__(self, client, cache, **kwargs):
        super().__init__(client, cache, "notes", **kwargs)
        self.notes: List[Dict[str, Any]] = []
        self.tab = "all"
        self.search_query = ""
        self.viewing: Optional[Dict[str, Any]] = None

    async def load(self) -> None:
        await self.load_branding()
        self.notes = await self.fetch("Note")

    def visible_notes(self) -> List[Dict[str, Any]]:
        """Category tab, then search, then pinned-first / newest-first."""
        notes = filters.filter_by_category(self.notes, self.tab)
        notes = filters.search(notes, self.search_query, SEARCH_FIELDS)
        return filters.sort_notes(notes)

    def view(self, note: Dict[str, Any]) -> None:
        self.viewing = note

    def close_view(self) -> None:
        self.viewing = None

    def open_create(self, **overrides: Any) -> Dict[str, Any]:
        self.viewing = None
        return super().open_create(**overrides)

    def open_edit(self, record: Dict[str, Any]) -> Dict[str, Any]:
        self.viewing = None
        return super().open_edit(record)

    def add_form_tag(self, tag: str) -> List[str]:
        tags = forms.add_tag(self.form.values.get("tags", []), tag)
        self.form.update(tags=tags)
        return tags

    def remove_form_tag(self, tag: str) -> List[str]:
        tags = forms.remove_tag(self.form.values.get("tags", []), tag)
        self.form.update(tags=tags)
        return tags

    def set_form_color(self, swatch: str) -> str:
        """Apply a named swatch to the open form; raises KeyError for an unknown name."""
        for name, value in NOTE_COLORS:
            if name.lower() == swatch.lower():
                self.form.update(color=value)
                return value
        raise KeyError(f"Unknown color: {swatch}")

    def swatch_name(self, note: Dict[str, Any]) -> str:
        return SWATCH_NAMES.get(note.get("color") or "", "Custom")

    async def toggle_pin(self, note: Dict[str, Any]) -> ActionResult:
        return await self.update_fields(note["id"], {"is_pinned": not note.get("is_pinned")})

    async def delete(self, record: Dict[str, Any]) -> ActionResult:
        result = await super().delete(record)
        if result.success:
            self.viewing = None
        return result
