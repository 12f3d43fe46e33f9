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

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import aiohttp

from infrastructure.logging.logger import setup_logger
from settings import settings
from tools.journal.exceptions import ConfigurationError, ExternalDependencyError

logger = setup_logger("weather")


@dataclass
class WeatherSummary:
    """Сводка погоды на день для сетки календаря."""
    date: str  # YYYY-MM-DD
    temp_min: float
    temp_max: float
    weather: str
    icon: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "tempMin": self.temp_min,
            "tempMax": self.temp_max,
            "weather": self.weather,
            "icon": self.icon,
        }


def require_api_key(api_key: Optional[str] = None) -> str:
    """Возвращает ключ OpenWeather или падает до любого сетевого запроса."""
    key = api_key or settings.OPENWEATHER_API_KEY
    if not key:
        raise ConfigurationError("Missing OPENWEATHER_API_KEY in environment.")
    return key


def aggregate_forecast(samples: Iterable[Dict[str, Any]], max_days: int = 5) -> List[WeatherSummary]:
    """
    Сворачивает 3-часовой прогноз в сводки по дням.

    Дата берётся из `dt_txt` ("YYYY-MM-DD HH:MM:SS"), min/max температуры —
    по всем отсчётам дня, погода и иконка — из первого отсчёта дня.
    Дни идут в порядке первого появления, не больше max_days.
    """
    daily: Dict[str, WeatherSummary] = {}

    for item in samples:
        day = item["dt_txt"].split(" ")[0]
        temp = item["main"]["temp"]

        summary = daily.get(day)
        if summary is None:
            condition = item["weather"][0]
            daily[day] = WeatherSummary(
                date=day,
                temp_min=temp,
                temp_max=temp,
                weather=condition["main"],
                icon=condition["icon"],
            )
        else:
            summary.temp_min = min(summary.temp_min, temp)
            summary.temp_max = max(summary.temp_max, temp)

    return list(daily.values())[:max_days]


async def _get_json(endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
    url = f"{settings.OPENWEATHER_BASE_URL}/{endpoint}"
    timeout = aiohttp.ClientTimeout(total=settings.WEATHER_TIMEOUT_SECONDS)

    try:
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(url, params=params) as response:
                if response.status != 200:
                    logger.error(f"OpenWeather {endpoint} response status: {response.status}")
                    raise ExternalDependencyError(
                        f"OpenWeather {endpoint} failed with status {response.status}",
                        status=response.status,
                    )
                data = await response.json()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.error(f"Ошибка при запросе к OpenWeather API ({endpoint}): {e}")
        raise ExternalDependencyError(f"OpenWeather is unreachable: {e}")
    except ValueError as e:
        logger.error(f"OpenWeather {endpoint} вернул не JSON: {e}")
        raise ExternalDependencyError(f"OpenWeather {endpoint} returned invalid JSON: {e}")

    if not isinstance(data, dict):
        logger.error(f"OpenWeather {endpoint} вернул {type(data).__name__} вместо объекта")
        raise ExternalDependencyError(f"OpenWeather {endpoint} returned unexpected payload")
    return data


async def fetch_current_weather(city: str, api_key: Optional[str] = None) -> Dict[str, Any]:
    """Текущая погода для города (сырой ответ OpenWeather)."""
    key = require_api_key(api_key)
    return await _get_json("weather", {"q": city, "appid": key, "units": "metric"})


async def fetch_five_day_forecast(city: str, api_key: Optional[str] = None) -> List[WeatherSummary]:
    """Прогноз на 5 дней / 3 часа, свёрнутый в сводки по дням."""
    key = require_api_key(api_key)
    data = await _get_json("forecast", {"q": city, "appid": key, "units": "metric"})

    if not data.get("list"):
        return []

    try:
        return aggregate_forecast(data["list"])
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        logger.error(f"Неожиданный формат прогноза OpenWeather: {e}")
        raise ExternalDependencyError(f"OpenWeather forecast has unexpected shape: {e}")
