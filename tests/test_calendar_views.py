from datetime import date

import pytest

from tools.calendar import views
from tools.calendar.note_colors import NOTE_COLOR_OPTIONS, color_to_hex, normalize_color, note_classes
from tools.journal.models import JournalEntry
from tools.weather.api_utils import WeatherSummary


def _entry(day, title="note", index=None):
    return JournalEntry(date=day, title=title, index=index)


def test_month_starting_wednesday_has_three_leading_blanks():
    # 1 октября 2025 — среда
    cells = views.build_month_grid(date(2025, 10, 1), [], {}, today=date(2025, 10, 18))

    assert [c.is_blank for c in cells[:4]] == [True, True, True, False]
    assert cells[3].date == "2025-10-01"
    assert cells[3].day_of_month == 1


def test_month_grid_has_no_trailing_blanks():
    cells = views.build_month_grid(date(2024, 2, 10), [], {}, today=date(2024, 2, 10))
    # 1 февраля 2024 — четверг: 4 пустые + 29 дней
    assert len(cells) == 4 + 29
    assert cells[-1].date == "2024-02-29"


def test_month_starting_sunday_has_no_blanks():
    # 1 июня 2025 — воскресенье
    cells = views.build_month_grid(date(2025, 6, 1), [], {}, today=date(2025, 6, 1))
    assert cells[0].date == "2025-06-01"
    assert cells[0].is_today


def test_month_grid_attaches_entries_and_weather():
    entries = [_entry("2025-06-15", "b"), _entry("2025-07-01", "other month"), _entry("2025-06-15", "c")]
    forecast = {"2025-06-15": WeatherSummary("2025-06-15", 15, 22, "Rain", "10d")}

    cells = views.build_month_grid(date(2025, 6, 1), entries, forecast, today=date(2025, 6, 1))
    cell = next(c for c in cells if c.date == "2025-06-15")

    assert [e.title for e in cell.entries] == ["b", "c"]
    assert cell.weather.temp_max == 22
    assert next(c for c in cells if c.date == "2025-06-16").weather is None


@pytest.mark.parametrize(
    "day, is_memory",
    [("2025-06-14", True), ("2025-06-15", False), ("2025-06-16", False)],
)
def test_memory_reminder_partition(day, is_memory):
    memories, reminders = views.partition_entries([_entry(day)], date(2025, 6, 15))
    assert (len(memories) == 1) is is_memory
    assert (len(reminders) == 1) is (not is_memory)


def test_group_by_date_sorts_dates_and_keeps_storage_order():
    entries = [
        _entry("2025-06-20", "late-1", 0),
        _entry("2025-06-02", "early", 1),
        _entry("2025-06-20", "late-2", 2),
    ]
    grouped = views.group_by_date(entries)

    assert list(grouped) == ["2025-06-02", "2025-06-20"]
    assert [e.title for e in grouped["2025-06-20"]] == ["late-1", "late-2"]


def test_week_window_for_wednesday():
    start, end = views.week_window(date(2025, 6, 18))
    assert (start, end) == (date(2025, 6, 15), date(2025, 6, 22))


def test_week_window_for_sunday_starts_same_day():
    start, _ = views.week_window(date(2025, 6, 15))
    assert start == date(2025, 6, 15)


def test_entries_in_week_skips_unparseable_dates():
    entries = [_entry("2025-06-16"), _entry("garbage"), _entry("2025-06-22")]
    result = views.entries_in_week(entries, date(2025, 6, 18))
    assert [e.date for e in result] == ["2025-06-16"]


@pytest.mark.parametrize(
    "month, delta, expected",
    [
        (date(2025, 1, 31), -1, date(2024, 12, 1)),
        (date(2025, 12, 5), 1, date(2026, 1, 1)),
        (date(2025, 6, 15), 0, date(2025, 6, 1)),
    ],
)
def test_shift_month(month, delta, expected):
    assert views.shift_month(month, delta) == expected


def test_entries_for_day_and_forecast_map():
    entries = [_entry("2025-06-15", "a"), _entry("2025-06-16", "b")]
    assert [e.title for e in views.entries_for_day(entries, "2025-06-16")] == ["b"]

    summaries = [WeatherSummary("2025-06-15", 1, 2, "Clear", "01d")]
    assert views.forecast_by_date(summaries)["2025-06-15"].icon == "01d"


def test_note_colors_single_table():
    assert NOTE_COLOR_OPTIONS == ["red", "orange", "yellow", "green", "blue", "purple", "pink", "gray"]
    assert normalize_color(None) == "blue"
    assert normalize_color("  Pink ") == "pink"
    assert normalize_color("teal") == "blue"
    assert color_to_hex("red") == "#ef4444"
    assert note_classes("unknown") == note_classes("blue")
