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

import re
from typing import NoReturn

from fastapi import HTTPException

from infrastructure.logging.logger import setup_logger
from tools.journal.exceptions import (
    ConfigurationError,
    ExternalDependencyError,
    NotFoundError,
    StorageError,
    ValidationError,
)

logger = setup_logger("api")

_INDEX_PATTERN = re.compile(r"-?[0-9]+")


def parse_index(raw: str) -> int:
    """Индекс записи из пути URL: только цифры, допускается ведущий минус."""
    if not isinstance(raw, str) or not _INDEX_PATTERN.fullmatch(raw):
        raise ValidationError("Invalid index")
    return int(raw)


def raise_http(error: Exception, operation: str) -> NoReturn:
    """
    Переводит ошибку дневника в HTTPException.

    ValidationError → 400, NotFoundError → 404, ConfigurationError → 503,
    ExternalDependencyError → 502, всё остальное → 500 с записью в лог.
    """
    if isinstance(error, ValidationError):
        raise HTTPException(status_code=400, detail=error.message)
    if isinstance(error, NotFoundError):
        logger.warning(f"[{operation}] {error.message}")
        raise HTTPException(status_code=404, detail="Entry not found")
    if isinstance(error, ConfigurationError):
        logger.error(f"[{operation}] {error.message}")
        raise HTTPException(status_code=503, detail=error.message)
    if isinstance(error, ExternalDependencyError):
        logger.error(f"[{operation}] {error.message}")
        raise HTTPException(status_code=502, detail=error.message)
    if isinstance(error, StorageError):
        logger.error(f"[{operation}] Ошибка хранилища: {error.message}")
        raise HTTPException(status_code=500, detail=f"Failed to {operation}")

    logger.exception(f"[{operation}] Непредвиденная ошибка: {error}")
    raise HTTPException(status_code=500, detail=f"Failed to {operation}")
