from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from tools.calendar.dashboard import CalendarDashboard, NoteForm
from tools.journal.client import JournalApiClient
from tools.journal.exceptions import ExternalDependencyError, JournalApiError
from tools.journal.models import JournalEntry
from tools.weather.api_utils import WeatherSummary

TODAY = date(2025, 6, 15)


def _entries():
    return [
        JournalEntry(date="2025-06-14", title="yesterday", id="a", index=0),
        JournalEntry(date="2025-06-15", title="today", id="b", index=1),
        JournalEntry(date="2025-06-20", title="later", id="c", index=2),
    ]


@pytest.fixture
def client():
    client = MagicMock()
    client.fetch_entries = AsyncMock(return_value=_entries())
    client.create_entry = AsyncMock(return_value={"success": True})
    client.update_entry_by_id = AsyncMock(return_value={})
    client.update_entry = AsyncMock(return_value={})
    client.delete_entry_by_id = AsyncMock(return_value={"success": True})
    client.delete_entry = AsyncMock(return_value={"success": True})
    return client


def _dashboard(client, forecast_loader=None):
    forecast = [WeatherSummary("2025-06-15", 12, 19, "Clear", "01d")]
    return CalendarDashboard(
        client,
        city="Oslo",
        today_fn=lambda: TODAY,
        forecast_loader=forecast_loader or AsyncMock(return_value=forecast),
    )


@pytest.mark.asyncio
async def test_refresh_builds_all_views(client):
    dashboard = _dashboard(client)

    assert await dashboard.refresh() is True
    view = dashboard.view()

    assert view.weather_available is True
    assert list(view.memories) == ["2025-06-14"]
    assert list(view.reminders) == ["2025-06-15", "2025-06-20"]
    cell = next(c for c in view.cells if c.date == "2025-06-15")
    assert cell.is_today and cell.weather.temp_max == 19
    assert [e.title for e in dashboard.day_panel("2025-06-20")] == ["later"]


@pytest.mark.asyncio
async def test_forecast_failure_shows_calendar_without_weather(client):
    loader = AsyncMock(side_effect=ExternalDependencyError("down"))
    dashboard = _dashboard(client, forecast_loader=loader)

    assert await dashboard.refresh() is True
    view = dashboard.view()

    assert view.weather_available is False
    assert all(c.weather is None for c in view.cells)
    assert len(dashboard.entries) == 3


@pytest.mark.asyncio
async def test_entries_failure_keeps_previous_entries(client):
    dashboard = _dashboard(client)
    await dashboard.refresh()

    client.fetch_entries.side_effect = JournalApiError("boom")
    assert await dashboard.refresh() is False
    assert dashboard.last_error
    assert len(dashboard.entries) == 3


@pytest.mark.asyncio
async def test_failed_create_keeps_form_and_entries(client):
    dashboard = _dashboard(client)
    await dashboard.refresh()
    client.create_entry.side_effect = JournalApiError("boom", status=500)
    form = NoteForm(date="2025-06-16", title="Dentist", time="10:00", color="purple")

    assert await dashboard.submit_new_note(form) is False

    assert form.is_open and form.error
    assert (form.title, form.time, form.color) == ("Dentist", "10:00", "purple")
    assert client.fetch_entries.await_count == 1
    assert len(dashboard.entries) == 3


@pytest.mark.asyncio
async def test_successful_create_closes_form_and_reloads(client):
    dashboard = _dashboard(client)
    await dashboard.refresh()
    form = NoteForm(date="2025-06-16", title="Dentist")

    assert await dashboard.submit_new_note(form) is True

    assert not form.is_open and form.error is None
    client.create_entry.assert_awaited_once()
    assert client.create_entry.await_args.args[0]["title"] == "Dentist"
    assert client.fetch_entries.await_count == 2


@pytest.mark.asyncio
async def test_update_and_delete_use_stable_id_and_fall_back_to_index(client):
    dashboard = _dashboard(client)
    await dashboard.refresh()
    entry = dashboard.entries[1]

    form = NoteForm.for_entry(entry)
    form.title = "today (edited)"
    assert await dashboard.submit_update(form, entry) is True
    client.update_entry_by_id.assert_awaited_once_with("b", {"title": "today (edited)", "time": None, "text": None})

    legacy = JournalEntry(date="2025-06-14", title="old", index=0)
    assert await dashboard.delete_note(legacy) is True
    client.delete_entry.assert_awaited_once_with(0)


def test_month_navigation_crosses_year():
    dashboard = CalendarDashboard(MagicMock(), month=date(2025, 1, 20), today_fn=lambda: TODAY)
    dashboard.prev_month()
    assert dashboard.month == date(2024, 12, 1)
    dashboard.next_month()
    dashboard.next_month()
    assert dashboard.month == date(2025, 2, 1)


@pytest.mark.asyncio
async def test_unreadable_photo_keeps_form_open(tmp_path):
    dashboard = CalendarDashboard(
        JournalApiClient(base_url="http://127.0.0.1:9"),
        city="Oslo",
        today_fn=lambda: TODAY,
        forecast_loader=AsyncMock(return_value=[]),
    )
    form = NoteForm(date="2025-06-16", title="Beach", photos=[tmp_path / "missing.jpg"])

    assert await dashboard.submit_new_note(form) is False

    assert form.is_open and form.error
    assert form.photos == [tmp_path / "missing.jpg"]
