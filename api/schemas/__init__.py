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
Схемы API tsukiCalendar.

Структура:
- journal: записи дневника, ответы представлений календаря и погоды
"""

from api.schemas.journal import (
    JournalEntryOut,
    JournalEntryUpdate,
    SuccessResponse,
    WeatherSummaryOut,
    CalendarEntryOut,
    CalendarCellOut,
    MonthViewOut,
    NotesOverviewOut,
)

__all__ = [
    "JournalEntryOut",
    "JournalEntryUpdate",
    "SuccessResponse",
    "WeatherSummaryOut",
    "CalendarEntryOut",
    "CalendarCellOut",
    "MonthViewOut",
    "NotesOverviewOut",
]
