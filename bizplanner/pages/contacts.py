"""
Contacts page: address book with favorites, categories and search.
"""

from typing import Any, Dict, List, Optional

from ..core.errors import UploadError
from ..views import filters, forms
from .base_page import ActionResult, BasePage

SEARCH_FIELDS = ("name", "company", "email", "phone")


class ContactsPage(BasePage):
    """
    View state:
        tab: "all", "favorites" or a contact category
        search_query: free text matched against name, company, email, phone
    """

    entity = "Contact"
    required_fields = ("name",)

    def __init__(self, client, cache, **kwargs):
        super().__init__(client, cache, "contacts", **kwargs)
        self.contacts: List[Dict[str, Any]] = []
        self.tab = "all"
        self.search_query = ""
        self.viewing: Optional[Dict[str, Any]] = None
        self.uploading = False

    async def load(self) -> None:
        await self.load_branding()
        self.contacts = await self.fetch("Contact")

    def visible_contacts(self) -> List[Dict[str, Any]]:
        if self.tab == "favorites":
            contacts = filters.filter_by_flag(self.contacts, "is_favorite")
        else:
            contacts = filters.filter_by_category(self.contacts, self.tab)
        contacts = filters.search(contacts, self.search_query, SEARCH_FIELDS)
        return filters.sort_contacts(contacts)

    def initials(self, contact: Dict[str, Any]) -> str:
        return forms.initials(contact.get("name"))

    def view(self, contact: Dict[str, Any]) -> None:
        self.viewing = contact

    def close_view(self) -> None:
        self.viewing = None

    def open_create(self, **overrides: Any) -> Dict[str, Any]:
        self.viewing = None
        return super().open_create(**overrides)

    def open_edit(self, record: Dict[str, Any]) -> Dict[str, Any]:
        self.viewing = None
        return super().open_edit(record)

    async def toggle_favorite(self, contact: Dict[str, Any]) -> ActionResult:
        return await self.update_fields(contact["id"], {"is_favorite": not contact.get("is_favorite")})

    async def upload_avatar(self, filename: str, content: bytes) -> ActionResult:
        """Upload an avatar into the open form; the form survives a failure."""
        self.uploading = True
        try:
            url = await self.client.upload_file(filename, content)
        except UploadError as e:
            self.logger.error(f"Avatar upload failed: {e.message}")
            self.notifier.error("Failed to upload avatar")
            return ActionResult.error(e.message)
        finally:
            self.uploading = False

        self.form.update(avatar_url=url)
        return ActionResult.ok("Avatar uploaded", data={"file_url": url})

    async def delete(self, record: Dict[str, Any]) -> ActionResult:
        result = await super().delete(record)
        if result.success:
            self.viewing = None
        return result
