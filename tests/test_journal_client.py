from unittest.mock import AsyncMock, patch

import pytest

from tools.journal.client import JournalApiClient


@pytest.mark.asyncio
async def test_fetch_entries_keeps_server_index():
    client = JournalApiClient(base_url="http://journal.test/")
    payload = [
        {"id": "a", "index": 0, "date": "2025-06-15", "title": "Picnic", "color": "green"},
        {"date": "2025-06-16", "title": "Legacy"},
    ]

    with patch.object(client, "_request", AsyncMock(return_value=payload)) as request:
        entries = await client.fetch_entries()

    request.assert_awaited_once_with("GET", "/api/journal/all")
    assert client.base_url == "http://journal.test"
    assert [(e.id, e.index, e.color) for e in entries] == [("a", 0, "green"), (None, 1, "blue")]


@pytest.mark.asyncio
async def test_fetch_entry_by_date_returns_none_for_null():
    client = JournalApiClient(base_url="http://journal.test")
    with patch.object(client, "_request", AsyncMock(return_value=None)):
        assert await client.fetch_entry_by_date("2025-01-01") is None


@pytest.mark.asyncio
async def test_create_entry_sends_photos_and_skips_empty_fields(tmp_path):
    photo = tmp_path / "beach.jpg"
    photo.write_bytes(b"img")
    client = JournalApiClient(base_url="http://journal.test")

    with patch.object(client, "_request", AsyncMock(return_value={"success": True})) as request:
        await client.create_entry({"date": "2025-06-15", "title": "Beach", "time": None}, [photo])

    method, path = request.await_args.args
    form = request.await_args.kwargs["data"]
    names = [options["name"] for options, _, _ in form._fields]
    assert (method, path) == ("POST", "/api/journal")
    assert names == ["date", "title", "photos"]
