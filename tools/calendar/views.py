# tsukiCalendar - Weather Journal & Calendar
# Copyright (C) 2025-2026 Olga Kalinina

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.

"""
Представления календаря, вычисляемые из плоского списка записей.

Все функции чистые: получают записи и прогноз, возвращают новую структуру.
Клиент пересчитывает их после каждого свежего чтения коллекции.
"""

import calendar
from collections import OrderedDict, defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
from zoneinfo import ZoneInfo

from settings import settings
from tools.calendar.note_colors import note_classes
from tools.journal.models import JournalEntry
from tools.weather.api_utils import WeatherSummary


def today_local(tz_name: Optional[str] = None) -> date:
    """Сегодняшняя дата в TIMEZONE из настроек (или локальная дата сервера)."""
    tz_name = tz_name or settings.TIMEZONE
    if tz_name:
        return datetime.now(ZoneInfo(tz_name)).date()
    return date.today()


def format_date(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def parse_entry_date(value: Optional[str]) -> Optional[date]:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def shift_month(month: date, delta: int) -> date:
    """Первое число месяца, отстоящего на delta месяцев."""
    total = month.year * 12 + (month.month - 1) + delta
    return date(total // 12, total % 12 + 1, 1)


@dataclass
class CalendarCell:
    """Ячейка сетки месяца. У пустой ячейки date и day_of_month = None."""
    date: Optional[str] = None
    day_of_month: Optional[int] = None
    entries: List[JournalEntry] = field(default_factory=list)
    weather: Optional[WeatherSummary] = None
    is_today: bool = False

    @property
    def is_blank(self) -> bool:
        return self.date is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "day_of_month": self.day_of_month,
            "is_today": self.is_today,
            "weather": self.weather.to_dict() if self.weather else None,
            "entries": [
                {**entry.to_public(), "classes": note_classes(entry.color)}
                for entry in self.entries
            ],
        }


def entries_by_date(entries: Iterable[JournalEntry]) -> Dict[str, List[JournalEntry]]:
    """date → записи этой даты в порядке хранения."""
    grouped: Dict[str, List[JournalEntry]] = defaultdict(list)
    for entry in entries:
        if not entry.date:
            continue
        grouped[entry.date].append(entry)
    return dict(grouped)


def entries_for_day(entries: Iterable[JournalEntry], day: str) -> List[JournalEntry]:
    return [entry for entry in entries if entry.date == day]


def forecast_by_date(summaries: Iterable[WeatherSummary]) -> Dict[str, WeatherSummary]:
    return {summary.date: summary for summary in summaries if summary.date}


def build_month_grid(
    month: date,
    entries: Iterable[JournalEntry],
    forecast: Optional[Mapping[str, WeatherSummary]] = None,
    today: Optional[date] = None,
) -> List[CalendarCell]:
    """
    Сетка месяца, неделя с воскресенья.

    Перед первым числом идут пустые ячейки (их столько, каков день недели
    первого числа, воскресенье = 0). Пустых ячеек в конце нет.
    """
    forecast = forecast or {}
    today_str = format_date(today or today_local())
    by_date = entries_by_date(entries)

    first = date(month.year, month.month, 1)
    leading_blanks = (first.weekday() + 1) % 7
    days_in_month = calendar.monthrange(month.year, month.month)[1]

    cells = [CalendarCell() for _ in range(leading_blanks)]
    for day in range(1, days_in_month + 1):
        day_str = format_date(date(month.year, month.month, day))
        cells.append(
            CalendarCell(
                date=day_str,
                day_of_month=day,
                entries=by_date.get(day_str, []),
                weather=forecast.get(day_str),
                is_today=day_str == today_str,
            )
        )
    return cells


def is_memory(entry: JournalEntry, today: date) -> bool:
    """Воспоминание — дата строго раньше сегодняшней."""
    entry_date = parse_entry_date(entry.date)
    if entry_date is None:
        # Кривую дату сравниваем как строку: формат с нулями сортируется лексикографически
        return (entry.date or "") < format_date(today)
    return entry_date < today


def partition_entries(
    entries: Iterable[JournalEntry], today: date
) -> Tuple[List[JournalEntry], List[JournalEntry]]:
    """(воспоминания, напоминания). Сегодняшние записи — напоминания."""
    memories: List[JournalEntry] = []
    reminders: List[JournalEntry] = []
    for entry in entries:
        (memories if is_memory(entry, today) else reminders).append(entry)
    return memories, reminders


def group_by_date(entries: Iterable[JournalEntry]) -> "OrderedDict[str, List[JournalEntry]]":
    """Группы по датам, даты по возрастанию, внутри группы — порядок хранения."""
    grouped = entries_by_date(entries)
    return OrderedDict((day, grouped[day]) for day in sorted(grouped))


def week_window(today: date) -> Tuple[date, date]:
    """[воскресенье текущей недели, следующее воскресенье)."""
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return start, start + timedelta(days=7)


def entries_in_week(entries: Iterable[JournalEntry], today: date) -> List[JournalEntry]:
    start, end = week_window(today)
    result = []
    for entry in entries:
        entry_date = parse_entry_date(entry.date)
        if entry_date is not None and start <= entry_date < end:
            result.append(entry)
    return result
