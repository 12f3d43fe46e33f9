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

"""Исключения для работы с дневником, хранилищем и внешними сервисами."""

from typing import Optional


class JournalError(Exception):
    """Базовая ошибка дневника."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ValidationError(JournalError):
    """Некорректный запрос: кривой индекс, нет обязательного поля и т.п. (HTTP 400)."""


class NotFoundError(JournalError):
    """Запись не найдена: индекс вне диапазона или неизвестный id (HTTP 404)."""


class StorageError(JournalError):
    """
    Не удалось прочитать или записать коллекцию записей либо файл вложения (HTTP 500).

    Attributes:
        filename: имя файла вложения, на котором упало сохранение (если есть)
        original_error: исходное исключение
    """

    def __init__(
        self,
        message: str,
        filename: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.filename = filename
        self.original_error = original_error
        super().__init__(message)


class ConfigurationError(JournalError):
    """Не задана обязательная настройка (например, OPENWEATHER_API_KEY)."""


class ExternalDependencyError(JournalError):
    """Внешний сервис недоступен или вернул неуспешный статус."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


class JournalApiError(ExternalDependencyError):
    """API дневника ответило ошибкой (используется клиентом)."""
