"""
Unit tests for the NotesPage.
"""

import pytest

from bizplanner.pages import NotesPage


@pytest.fixture
def page(client, cache, page_kwargs):
    return NotesPage(client, cache, **page_kwargs)


@pytest.mark.asyncio
async def test_search_matches_tags(page, client):
    await client.notes.create({"title": "Pricing", "content": "tiers", "tags": ["Q4"]})
    await client.notes.create({"title": "Offsite", "content": "venue"})
    await page.load()

    page.search_query = "q4"

    assert [n["title"] for n in page.visible_notes()] == ["Pricing"]


@pytest.mark.asyncio
async def test_pin_moves_note_first(page, client):
    await client.notes.create({"title": "Older"})
    await client.notes.create({"title": "Newer"})
    await page.load()
    older = next(n for n in page.notes if n["title"] == "Older")

    await page.toggle_pin(older)

    assert page.visible_notes()[0]["title"] == "Older"
    assert page.visible_notes()[0]["is_pinned"] is True


@pytest.mark.asyncio
async def test_form_tags_saved_with_note(page):
    await page.load()
    page.open_create(title="Retro", category="meeting")
    page.add_form_tag("team")
    page.add_form_tag("team")
    page.add_form_tag("sprint")
    page.remove_form_tag("sprint")

    await page.submit()

    assert page.notes[0]["tags"] == ["team"]
    assert page.notes[0]["category"] == "meeting"


@pytest.mark.asyncio
async def test_delete_closes_viewer(page, client):
    await client.notes.create({"title": "Scratch"})
    await page.load()
    page.view(page.notes[0])

    await page.delete(page.notes[0])

    assert page.viewing is None
    assert page.notes == []


@pytest.mark.asyncio
async def test_editing_closes_viewer(page, client):
    await client.notes.create({"title": "N"})
    await page.load()
    page.view(page.notes[0])

    page.open_edit(page.notes[0])

    assert page.viewing is None
    assert page.form.values["title"] == "N"


@pytest.mark.asyncio
async def test_color_swatch(page):
    await page.load()
    page.open_create(title="Ideas")

    assert page.set_form_color("yellow") == "#fef9c3"
    await page.submit()

    assert page.swatch_name(page.notes[0]) == "Yellow"
    assert page.swatch_name({"color": ""}) == "Default"
    assert page.swatch_name({"color": "#000000"}) == "Custom"


@pytest.mark.asyncio
async def test_unknown_swatch(page):
    await page.load()
    page.open_create(title="Ideas")

    with pytest.raises(KeyError):
        page.set_form_color("Neon")
