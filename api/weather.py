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

from typing import List

from fastapi import APIRouter, Query

from api.helpers import raise_http
from api.schemas.journal import WeatherSummaryOut
from infrastructure.logging.logger import setup_logger
from tools.journal.exceptions import JournalError
from tools.weather.api_utils import fetch_current_weather, fetch_five_day_forecast

logger = setup_logger("weather_api")
router = APIRouter(prefix="/api/weather", tags=["weather"])


@router.get("/forecast", response_model=List[WeatherSummaryOut])
async def get_forecast(city: str = Query(..., min_length=1)):
    """
    Прогноз на ближайшие дни (не больше 5), по одной сводке на дату.

    Raises:
        HTTPException 503: Не задан OPENWEATHER_API_KEY.
        HTTPException 502: OpenWeather недоступен или ответил ошибкой.
    """
    try:
        summaries = await fetch_five_day_forecast(city)
    except JournalError as e:
        raise_http(e, "fetch forecast")
    return [summary.to_dict() for summary in summaries]


@router.get("/current")
async def get_current(city: str = Query(..., min_length=1)) -> dict:
    """Текущая погода в городе, ответ OpenWeather как есть."""
    try:
        return await fetch_current_weather(city)
    except JournalError as e:
        raise_http(e, "fetch current weather")
