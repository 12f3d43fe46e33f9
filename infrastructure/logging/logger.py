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

import logging
import os
import sys
from pathlib import Path


LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))  # папка для логов
LOG_FILE = LOG_DIR / "journal.log"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

_FORMATTER = logging.Formatter(
    "[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def setup_logger(name: str) -> logging.Logger:
    """Настраивает и возвращает логгер: консоль + общий файл journal.log."""
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    logger.setLevel(LOG_LEVEL)
    logger.propagate = False

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(_FORMATTER)
    logger.addHandler(console_handler)

    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(LOG_FILE, encoding="utf-8")
    except OSError as e:
        # Только консоль, если папка логов недоступна (read-only окружение)
        logger.warning(f"Файловый лог отключён ({LOG_FILE}): {e}")
    else:
        file_handler.setFormatter(_FORMATTER)
        logger.addHandler(file_handler)

    return logger
