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

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool

from api.dependencies.runtime import get_store
from api.helpers import raise_http
from api.schemas.journal import JournalEntryOut, MonthViewOut, NotesOverviewOut
from infrastructure.logging.logger import setup_logger
from tools.calendar import views
from tools.journal.entry_store import EntryStore
from tools.journal.exceptions import JournalError, ValidationError
from tools.weather.api_utils import fetch_five_day_forecast

logger = setup_logger("calendar")
router = APIRouter(prefix="/api/calendar", tags=["calendar"])


@router.get("/week", response_model=List[JournalEntryOut])
def get_week(store: EntryStore = Depends(get_store)):
    """
    Записи текущей недели: от воскресенья 00:00 до следующего воскресенья 00:00.

    Записи с нераспознаваемой датой в неделю не попадают.
    """
    try:
        entries = store.list()
    except JournalError as e:
        raise_http(e, "fetch weekly calendar")
    return [entry.to_public() for entry in views.entries_in_week(entries, views.today_local())]


@router.get("/notes", response_model=NotesOverviewOut)
def get_notes(store: EntryStore = Depends(get_store)):
    """
    Воспоминания (дата раньше сегодняшней) и напоминания (сегодня и позже),
    каждые сгруппированы по датам по возрастанию.
    """
    try:
        entries = store.list()
    except JournalError as e:
        raise_http(e, "fetch notes")

    today = views.today_local()
    memories, reminders = views.partition_entries(entries, today)
    return {
        "today": views.format_date(today),
        "memories": {d: [e.to_public() for e in group] for d, group in views.group_by_date(memories).items()},
        "reminders": {d: [e.to_public() for e in group] for d, group in views.group_by_date(reminders).items()},
    }


@router.get("/month", response_model=MonthViewOut)
async def get_month(
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(...),
    city: Optional[str] = Query(None, min_length=1),
    store: EntryStore = Depends(get_store),
):
    """
    Сетка месяца (неделя с воскресенья) с записями и, если передан city,
    прогнозом погоды. Если погода недоступна, сетка отдаётся без неё.

    Raises:
        HTTPException 400: month вне 1..12.
        HTTPException 500: Не удалось прочитать хранилище.
    """
    try:
        if not 1 <= month <= 12:
            raise ValidationError("month must be 1..12")
        entries = await run_in_threadpool(store.list)
    except JournalError as e:
        raise_http(e, "build month view")

    forecast = {}
    if city:
        try:
            forecast = views.forecast_by_date(await fetch_five_day_forecast(city))
        except JournalError as e:
            logger.warning(f"[calendar] Погода для {city!r} недоступна, сетка без прогноза: {e}")

    cells = views.build_month_grid(date(year, month, 1), entries, forecast, views.today_local())
    return {
        "year": year,
        "month": month,
        "weather_available": bool(forecast),
        "cells": [cell.to_dict() for cell in cells],
    }
