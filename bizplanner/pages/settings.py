"""
Settings page: company branding and planner preferences.

The settings table holds at most one meaningful row (the first). The form is
always open: seeded from that row when it exists, from defaults otherwise.
Saving updates the row or creates it.
"""

from typing import Any, Dict, Optional

from ..core.errors import UploadError
from ..views.branding import apply_theme_preset, find_preset
from ..views.forms import FormMode
from .base_page import ActionResult, BasePage


class SettingsPage(BasePage):

    entity = "PlannerSettings"
    required_fields = ()

    def __init__(self, client, cache, **kwargs):
        super().__init__(client, cache, "settings", **kwargs)
        self.row: Dict[str, Any] = {}
        self.uploading = False

    async def load(self) -> None:
        self.row = await self.load_settings_row()
        await self.load_branding()
        if self.row:
            self.form.open_edit(self.row)
        else:
            self.form.open_create()

    @property
    def has_row(self) -> bool:
        return bool(self.row.get("id"))

    async def save(self) -> ActionResult:
        creating = self.form.mode == FormMode.CREATE
        result = await self.submit()
        if result.success:
            message = "Settings saved successfully" if creating else "Settings updated successfully"
            self.notifier.success(message)
            result.message = message
        return result

    def apply_preset(self, name: str) -> Optional[Dict[str, Any]]:
        """Copy a theme preset's colors into the form; None for an unknown preset."""
        preset = find_preset(name)
        if preset is None:
            return None
        self.form.values = apply_theme_preset(self.form.values, preset)
        return self.form.values

    async def upload_logo(self, filename: str, content: bytes) -> ActionResult:
        self.uploading = True
        try:
            url = await self.client.upload_file(filename, content)
        except UploadError as e:
            self.logger.error(f"Logo upload failed: {e.message}")
            self.notifier.error("Failed to upload logo")
            return ActionResult.error(e.message)
        finally:
            self.uploading = False

        self.form.update(logo_url=url)
        return ActionResult.ok("Logo uploaded", data={"file_url": url})
