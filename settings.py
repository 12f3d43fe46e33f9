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

import os
from pathlib import Path
from typing import List, Literal, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()  # Загружаем .env, если он есть

# Используем переменную окружения или текущую рабочую директорию
BASE_DIR = Path(os.getenv("TSUKI_ROOT", os.getcwd())).resolve()


class Settings(BaseSettings):
    BASE_DIR: Path = BASE_DIR

    # Хранилище записей: json-документ (по умолчанию) или SQL через SQLAlchemy
    JOURNAL_BACKEND: Literal["json", "sql"] = "json"
    JOURNAL_DATA_FILE: Path = BASE_DIR / "journal_data.json"
    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'journal.db'}"
    # Владелец всех записей в SQL-схеме (эндпоинты пользователей не различают)
    JOURNAL_OWNER: str = "local"

    # Фотографии
    UPLOAD_DIR: Path = BASE_DIR / "uploads"
    UPLOAD_URL_PREFIX: str = "/uploads"

    # OpenWeather
    OPENWEATHER_API_KEY: Optional[str] = None
    OPENWEATHER_BASE_URL: str = "https://api.openweathermap.org/data/2.5"
    WEATHER_TIMEOUT_SECONDS: float = 10.0
    DEFAULT_CITY: str = "Scarborough"

    # Адрес API дневника для клиента
    API_BASE_URL: str = "http://localhost:3000"
    PORT: int = 3000

    # IANA-таймзона для вычисления "сегодня"; None = локальное время сервера
    TIMEZONE: Optional[str] = None
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
