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
Состояние экрана календаря на стороне клиента.

Держит последние успешно загруженные записи и прогноз, а все представления
(сетка месяца, воспоминания, напоминания, панель дня) пересчитывает из них.
После любого изменения записи коллекция перечитывается целиком, локально
ничего не применяется заранее.
"""

import asyncio
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Awaitable, Callable, Dict, List, Optional

from infrastructure.logging.logger import setup_logger
from settings import settings
from tools.calendar import views
from tools.journal.client import JournalApiClient
from tools.journal.exceptions import JournalError
from tools.journal.models import JournalEntry
from tools.weather.api_utils import WeatherSummary, fetch_five_day_forecast

logger = setup_logger("dashboard")

ForecastLoader = Callable[[str], Awaitable[List[WeatherSummary]]]


@dataclass
class NoteForm:
    """Черновик заметки. При ошибке сохранения поля не трогаются, форма остаётся открытой."""
    date: str
    title: str = ""
    time: Optional[str] = None
    text: Optional[str] = None
    color: str = "blue"
    photos: List[Path] = field(default_factory=list)
    error: Optional[str] = None
    is_open: bool = True

    def create_fields(self) -> Dict[str, Optional[str]]:
        return {
            "date": self.date,
            "title": self.title,
            "time": self.time,
            "text": self.text,
            "color": self.color,
        }

    def update_body(self) -> Dict[str, Optional[str]]:
        return {"title": self.title, "time": self.time, "text": self.text}

    @classmethod
    def for_entry(cls, entry: JournalEntry) -> "NoteForm":
        return cls(
            date=entry.date,
            title=entry.title or "",
            time=entry.time,
            text=entry.text,
            color=entry.color,
        )


@dataclass
class DashboardView:
    month: date
    today: date
    cells: List[views.CalendarCell]
    memories: "OrderedDict[str, List[JournalEntry]]"
    reminders: "OrderedDict[str, List[JournalEntry]]"
    weather_available: bool


class CalendarDashboard:
    def __init__(
        self,
        client: JournalApiClient,
        city: Optional[str] = None,
        month: Optional[date] = None,
        today_fn: Callable[[], date] = views.today_local,
        forecast_loader: ForecastLoader = fetch_five_day_forecast,
    ):
        self.client = client
        self.city = city or settings.DEFAULT_CITY
        self.today_fn = today_fn
        self.forecast_loader = forecast_loader

        start = month or today_fn()
        self.month = date(start.year, start.month, 1)
        self.entries: List[JournalEntry] = []
        self.forecast: Dict[str, WeatherSummary] = {}
        self.last_error: Optional[str] = None

    # --- загрузка ---
    async def _load_entries(self) -> None:
        self.entries = await self.client.fetch_entries()

    async def _load_forecast(self) -> None:
        try:
            self.forecast = views.forecast_by_date(await self.forecast_loader(self.city))
        except JournalError as e:
            # Без погоды календарь всё равно рабочий
            logger.warning(f"Прогноз для {self.city!r} недоступен: {e}")
            self.forecast = {}

    async def refresh(self) -> bool:
        """
        Загружает записи и прогноз параллельно.

        Returns:
            False, если записи загрузить не удалось (остаются предыдущие).
        """
        entries_result, _ = await asyncio.gather(
            self._load_entries(), self._load_forecast(), return_exceptions=True
        )
        if isinstance(entries_result, JournalError):
            logger.error(f"Не удалось загрузить записи: {entries_result}")
            self.last_error = "Failed to load journal entries"
            return False
        if isinstance(entries_result, BaseException):
            raise entries_result

        self.last_error = None
        return True

    async def reload_entries(self) -> bool:
        try:
            await self._load_entries()
        except JournalError as e:
            logger.error(f"Не удалось перечитать записи: {e}")
            self.last_error = "Failed to load journal entries"
            return False
        return True

    async def change_city(self, city: str) -> None:
        self.city = city
        await self._load_forecast()

    # --- навигация ---
    def prev_month(self) -> None:
        self.month = views.shift_month(self.month, -1)

    def next_month(self) -> None:
        self.month = views.shift_month(self.month, 1)

    # --- представления ---
    def view(self) -> DashboardView:
        today = self.today_fn()
        memories, reminders = views.partition_entries(self.entries, today)
        return DashboardView(
            month=self.month,
            today=today,
            cells=views.build_month_grid(self.month, self.entries, self.forecast, today),
            memories=views.group_by_date(memories),
            reminders=views.group_by_date(reminders),
            weather_available=bool(self.forecast),
        )

    def day_panel(self, day: str) -> List[JournalEntry]:
        return views.entries_for_day(self.entries, day)

    # --- изменения ---
    async def submit_new_note(self, form: NoteForm) -> bool:
        """Создаёт заметку и перечитывает записи. При ошибке — form.error, форма не закрывается."""
        try:
            await self.client.create_entry(form.create_fields(), form.photos)
        except (JournalError, OSError) as e:
            # OSError: фото из формы не удалось открыть
            logger.error(f"Не удалось создать заметку: {e}")
            form.error = "Could not save the note. Please try again."
            return False

        form.error = None
        form.is_open = False
        await self.reload_entries()
        return True

    async def submit_update(self, form: NoteForm, entry: JournalEntry) -> bool:
        """Сохраняет правку заметки (по id, для старых записей — по index)."""
        try:
            if entry.id:
                await self.client.update_entry_by_id(entry.id, form.update_body())
            else:
                await self.client.update_entry(entry.index, form.update_body())
        except JournalError as e:
            logger.error(f"Не удалось обновить заметку {entry.id or entry.index}: {e}")
            form.error = "Could not update the note. Please try again."
            return False

        form.error = None
        form.is_open = False
        await self.reload_entries()
        return True

    async def delete_note(self, entry: JournalEntry, form: Optional[NoteForm] = None) -> bool:
        try:
            if entry.id:
                await self.client.delete_entry_by_id(entry.id)
            else:
                await self.client.delete_entry(entry.index)
        except JournalError as e:
            logger.error(f"Не удалось удалить заметку {entry.id or entry.index}: {e}")
            message = "Could not delete the note. Please try again."
            if form is not None:
                form.error = message
            self.last_error = message
            return False

        if form is not None:
            form.is_open = False
        await self.reload_entries()
        return True
