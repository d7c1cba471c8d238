"""
Unit tests for the SettingsPage.
"""

import pytest

from bizplanner.pages import SettingsPage, TasksPage
from bizplanner.views.forms import FormMode


@pytest.fixture
def page(client, cache, page_kwargs):
    return SettingsPage(client, cache, **page_kwargs)


@pytest.mark.asyncio
async def test_empty_table_uses_defaults(page):
    await page.load()

    assert not page.has_row
    assert page.form.mode == FormMode.CREATE
    assert page.form.values["primary_color"] == "#1e3a5f"
    assert page.branding.accent_color == "#c9a962"


@pytest.mark.asyncio
async def test_first_save_creates_then_updates(page, client, notifier):
    await page.load()
    page.form.update(company_name="Acme")

    created = await page.save()
    assert created.message == "Settings saved successfully"
    assert page.has_row
    assert page.form.mode == FormMode.EDIT

    page.form.update(slogan="Built to last")
    updated = await page.save()

    rows = await client.settings.list()
    assert updated.message == "Settings updated successfully"
    assert rows[0]["company_name"] == "Acme"
    assert rows[0]["slogan"] == "Built to last"
    assert [t.level for t in notifier.toasts] == ["success", "success"]


@pytest.mark.asyncio
async def test_preset_applies_colors(page):
    await page.load()

    values = page.apply_preset("Burgundy")

    assert (values["primary_color"], values["accent_color"]) == ("#722f37", "#d4a574")
    assert page.apply_preset("Unknown") is None


@pytest.mark.asyncio
async def test_saved_branding_reaches_other_pages(page, client, cache, page_kwargs):
    tasks_page = TasksPage(client, cache, **page_kwargs)
    await tasks_page.load()
    await page.load()
    page.form.update(primary_color="#123456")

    await page.save()
    await tasks_page.load()

    assert tasks_page.branding.primary_color == "#123456"


@pytest.mark.asyncio
async def test_upload_logo(page):
    await page.load()

    result = await page.upload_logo("logo.svg", b"<svg/>")

    assert result.success
    assert page.form.values["logo_url"].endswith(".svg")
