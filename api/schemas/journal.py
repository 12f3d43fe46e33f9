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
Схемы для эндпоинтов /api/journal и /api/calendar.

Содержит модели записей дневника для ответа клиенту, тело частичного
обновления и ответы представлений календаря.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class JournalEntryOut(BaseModel):
    """
    Запись дневника для возврата клиенту.

    `id` — стабильный идентификатор, `index` — позиция в коллекции
    на момент ответа (меняется после удаления предыдущих записей).
    """
    id: Optional[str] = None
    index: Optional[int] = None
    date: str
    title: Optional[str] = None
    time: Optional[str] = None
    text: Optional[str] = None
    color: str = "blue"
    photos: List[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class JournalEntryUpdate(BaseModel):
    """
    Частичное обновление записи.

    Меняются только переданные поля; пустая строка тоже применяется.
    Дату, цвет и фото этим запросом поменять нельзя.
    """
    title: Optional[str] = None
    time: Optional[str] = None
    text: Optional[str] = None


class SuccessResponse(BaseModel):
    success: bool = True
    id: Optional[str] = None


class WeatherSummaryOut(BaseModel):
    """Сводка погоды на день (ключи как у клиента: tempMin / tempMax)."""
    date: str
    tempMin: float
    tempMax: float
    weather: str
    icon: str


class CalendarEntryOut(JournalEntryOut):
    classes: str  # CSS-классы цвета заметки


class CalendarCellOut(BaseModel):
    date: Optional[str] = None
    day_of_month: Optional[int] = None
    is_today: bool = False
    weather: Optional[WeatherSummaryOut] = None
    entries: List[CalendarEntryOut] = Field(default_factory=list)


class MonthViewOut(BaseModel):
    year: int
    month: int
    weather_available: bool
    cells: List[CalendarCellOut]


class NotesOverviewOut(BaseModel):
    """Воспоминания и напоминания, сгруппированные по датам."""
    today: str
    memories: Dict[str, List[JournalEntryOut]]
    reminders: Dict[str, List[JournalEntryOut]]
