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
Сохранение фотографий к записям.

Каждый файл получает уникальное имя `<мс>-<hex8>-<исходное имя>` и кладётся
в папку загрузок, которую раздаёт сервер. Наружу отдаются ссылки вида
`/uploads/<имя>` в том же порядке, в котором пришли файлы.
"""

import os
import re
import secrets
import shutil
import time
from pathlib import Path
from typing import BinaryIO, List, Sequence, Tuple, Union

from infrastructure.logging.logger import setup_logger
from tools.journal.exceptions import StorageError

logger = setup_logger("attachments")

PhotoSource = Union[str, Path, BinaryIO]

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(original_name: str) -> str:
    """Оставляет от имени файла только безопасную базовую часть."""
    name = os.path.basename((original_name or "").replace("\\", "/"))
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "photo"


class AttachmentHandler:
    def __init__(self, upload_dir: Path, url_prefix: str = "/uploads"):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")

    def _unique_name(self, original_name: str) -> str:
        return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}-{safe_filename(original_name)}"

    def _place(self, source: PhotoSource, destination: Path) -> None:
        if isinstance(source, (str, Path)):
            shutil.move(str(source), destination)
        else:
            with open(destination, "wb") as out:
                shutil.copyfileobj(source, out)

    def store(self, files: Sequence[Tuple[str, PhotoSource]]) -> List[str]:
        """
        Сохраняет файлы и возвращает ссылки на них.

        Args:
            files: пары (исходное имя, путь к временному файлу или открытый бинарный поток)

        Returns:
            Ссылки `/uploads/<имя>` в порядке входа

        Raises:
            StorageError: если не удалось сохранить какой-то файл (поле filename —
                его исходное имя). Уже сохранённые файлы не удаляются.
        """
        if not files:
            return []

        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Upload directory is not available: {e}", original_error=e)

        references: List[str] = []
        for original_name, source in files:
            unique_name = self._unique_name(original_name)
            destination = self.upload_dir / unique_name
            try:
                self._place(source, destination)
            except OSError as e:
                logger.error(
                    f"Не удалось сохранить фото {original_name!r} "
                    f"(уже сохранено: {len(references)}): {e}"
                )
                raise StorageError(
                    f"Failed to store photo {original_name!r}: {e}",
                    filename=original_name,
                    original_error=e,
                )
            references.append(f"{self.url_prefix}/{unique_name}")

        logger.info(f"Сохранено фото: {len(references)}")
        return references

    def resolve(self, reference: str) -> Path:
        """Путь на диске для ссылки `/uploads/<имя>`."""
        name = reference.rsplit("/", 1)[-1]
        return self.upload_dir / name
