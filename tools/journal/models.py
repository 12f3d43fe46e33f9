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

"""Модель записи дневника (воспоминание или напоминание)."""

import re
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from tools.calendar.note_colors import normalize_color
from tools.journal.exceptions import ValidationError

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Поля, которые можно менять частичным обновлением
UPDATABLE_FIELDS = ("title", "time", "text")


def new_entry_id() -> str:
    return uuid.uuid4().hex


@dataclass
class JournalEntry:
    """
    Запись дневника.

    `id` — стабильный идентификатор, выдаётся при создании и не меняется.
    `index` — позиция в хранилище на момент чтения, не сохраняется.
    """
    date: str
    title: str
    time: Optional[str] = None
    text: Optional[str] = None
    color: str = "blue"
    photos: List[str] = field(default_factory=list)
    id: Optional[str] = None
    index: Optional[int] = None

    def __post_init__(self):
        self.color = normalize_color(self.color)
        self.photos = list(self.photos or [])

    @classmethod
    def create(
        cls,
        date: Optional[str],
        title: Optional[str],
        time: Optional[str] = None,
        text: Optional[str] = None,
        color: Optional[str] = None,
        photos: Optional[List[str]] = None,
    ) -> "JournalEntry":
        """Собирает новую запись из полей формы, проверяя обязательные."""
        if not date or not date.strip():
            raise ValidationError("date is required")
        date = date.strip()
        if not DATE_PATTERN.match(date):
            raise ValidationError(f"date must look like YYYY-MM-DD, got {date!r}")
        if not title or not title.strip():
            raise ValidationError("title is required")

        return cls(
            date=date,
            title=title,
            time=time,
            text=text,
            color=color,
            photos=photos or [],
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any], index: Optional[int] = None) -> "JournalEntry":
        """Читает запись из JSON-документа. Лишние ключи игнорируются."""
        return cls(
            date=data.get("date"),
            title=data.get("title"),
            time=data.get("time"),
            text=data.get("text"),
            color=data.get("color"),
            photos=data.get("photos") or [],
            id=data.get("id"),
            index=index,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Форма для хранения: без вычисляемого index."""
        return {
            "id": self.id,
            "date": self.date,
            "title": self.title,
            "time": self.time,
            "text": self.text,
            "color": self.color,
            "photos": list(self.photos),
        }

    def to_public(self) -> Dict[str, Any]:
        """Форма для API: хранимые поля + index."""
        data = self.to_dict()
        data["index"] = self.index
        return data

    def apply_update(self, fields: Dict[str, Any]) -> None:
        """
        Частичное обновление: применяются только title/time/text,
        которые переданы и не равны None. Пустая строка применяется.
        """
        for key in UPDATABLE_FIELDS:
            value = fields.get(key)
            if value is not None:
                setattr(self, key, value)
