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

"""Создание записи вместе с фотографиями."""

from typing import Optional, Sequence, Tuple

from infrastructure.logging.logger import setup_logger
from tools.journal.attachments import AttachmentHandler, PhotoSource
from tools.journal.entry_store import EntryStore
from tools.journal.models import JournalEntry

logger = setup_logger("journal_service")


def create_entry_with_photos(
    store: EntryStore,
    attachments: AttachmentHandler,
    date: Optional[str],
    title: Optional[str],
    time: Optional[str] = None,
    text: Optional[str] = None,
    color: Optional[str] = None,
    files: Sequence[Tuple[str, PhotoSource]] = (),
) -> JournalEntry:
    """
    Проверяет поля, сохраняет фото и только потом добавляет запись.

    Если сохранение фото упало, запись не добавляется (StorageError летит дальше).
    Фото, сохранённые до сбоя, остаются на диске.
    """
    entry = JournalEntry.create(date=date, title=title, time=time, text=text, color=color)
    entry.photos = attachments.store(files)
    created = store.append(entry)
    logger.info(f"create_entry: id={created.id}, date={created.date}, photos={len(created.photos)}")
    return created
