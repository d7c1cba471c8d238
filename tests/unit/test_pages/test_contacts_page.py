"""
Unit tests for the ContactsPage.
"""

import pytest

from bizplanner.core.errors import UploadError
from bizplanner.pages import ContactsPage


@pytest.fixture
def page(client, cache, page_kwargs):
    return ContactsPage(client, cache, **page_kwargs)


async def seed_contacts(client):
    await client.contacts.create({"name": "Dana Scott", "company": "Northwind",
                                  "email": "dana@northwind.io", "category": "client"})
    await client.contacts.create({"name": "Lee Park", "company": "Contoso",
                                  "email": "LEE@FABRIKAM.COM", "category": "vendor",
                                  "is_favorite": True})


class TestListing:

    @pytest.mark.asyncio
    async def test_search_by_email_only_match(self, page, client):
        """'fabrikam' appears only in Lee's email; matching ignores case."""
        await seed_contacts(client)
        await page.load()

        page.search_query = "Fabrikam"

        assert [c["name"] for c in page.visible_contacts()] == ["Lee Park"]

    @pytest.mark.asyncio
    async def test_favorites_tab(self, page, client):
        await seed_contacts(client)
        await page.load()

        page.tab = "favorites"

        assert [c["name"] for c in page.visible_contacts()] == ["Lee Park"]

    @pytest.mark.asyncio
    async def test_favorites_sort_first(self, page, client):
        await seed_contacts(client)
        await page.load()

        assert [c["name"] for c in page.visible_contacts()] == ["Lee Park", "Dana Scott"]
        assert page.initials(page.contacts[0]) == "DS"

    @pytest.mark.asyncio
    async def test_toggle_favorite(self, page, client):
        await seed_contacts(client)
        await page.load()
        dana = next(c for c in page.contacts if c["name"] == "Dana Scott")

        await page.toggle_favorite(dana)

        page.tab = "favorites"
        assert len(page.visible_contacts()) == 2

    @pytest.mark.asyncio
    async def test_name_is_required(self, page, client):
        await page.load()
        page.open_create(email="nobody@example.com")

        result = await page.submit()

        assert not result.success
        assert await client.contacts.list() == []


class TestAvatarUpload:

    @pytest.mark.asyncio
    async def test_upload_sets_avatar_url(self, page):
        await page.load()
        page.open_create(name="Avery")

        result = await page.upload_avatar("me.png", b"png-bytes")
        await page.submit()

        assert result.success
        assert page.contacts[0]["avatar_url"] == result.data["file_url"]
        assert not page.uploading

    @pytest.mark.asyncio
    async def test_failed_upload_keeps_form(self, page, client, notifier, monkeypatch):
        async def failing_upload(filename, content):
            raise UploadError("Failed to upload me.png", detail="read-only")

        monkeypatch.setattr(client, "upload_file", failing_upload)
        await page.load()
        page.open_create(name="Avery")

        result = await page.upload_avatar("me.png", b"png-bytes")

        assert not result.success
        assert page.form.is_open
        assert page.form.values["name"] == "Avery"
        assert page.form.values["avatar_url"] == ""
        assert notifier.last.message == "Failed to upload avatar"
        assert not page.uploading
