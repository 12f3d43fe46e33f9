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
Цвета заметок: единая таблица для моделей, API и представлений календаря.

Каждому цвету соответствуют CSS-классы карточки и hex для маленьких точек.
"""

from enum import Enum
from typing import Any, Dict, List, NamedTuple


class NoteColor(str, Enum):
    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"
    PINK = "pink"
    GRAY = "gray"


class NoteColorConfig(NamedTuple):
    classes: str  # фон/рамка/текст
    hex: str      # сплошной цвет для точек


DEFAULT_COLOR = NoteColor.BLUE

NOTE_COLORS: Dict[NoteColor, NoteColorConfig] = {
    NoteColor.RED: NoteColorConfig("bg-red-100 border-red-200 text-red-900", "#ef4444"),
    NoteColor.ORANGE: NoteColorConfig("bg-orange-100 border-orange-200 text-orange-900", "#f97316"),
    NoteColor.YELLOW: NoteColorConfig("bg-yellow-100 border-yellow-200 text-yellow-900", "#eab308"),
    NoteColor.GREEN: NoteColorConfig("bg-green-100 border-green-200 text-green-900", "#22c55e"),
    NoteColor.BLUE: NoteColorConfig("bg-blue-100 border-blue-200 text-blue-900", "#3b82f6"),
    NoteColor.PURPLE: NoteColorConfig("bg-purple-100 border-purple-200 text-purple-900", "#a855f7"),
    NoteColor.PINK: NoteColorConfig("bg-pink-100 border-pink-200 text-pink-900", "#ec4899"),
    NoteColor.GRAY: NoteColorConfig("bg-gray-100 border-gray-200 text-gray-900", "#9ca3af"),
}

NOTE_COLOR_OPTIONS: List[str] = [c.value for c in NoteColor]


def normalize_color(value: Any) -> str:
    """Возвращает валидное имя цвета; пустое или неизвестное значение → blue."""
    if isinstance(value, NoteColor):
        return value.value
    if isinstance(value, str):
        candidate = value.strip().lower()
        if candidate in NOTE_COLOR_OPTIONS:
            return candidate
    return DEFAULT_COLOR.value


def get_note_color_config(color: Any = None) -> NoteColorConfig:
    return NOTE_COLORS[NoteColor(normalize_color(color))]


def note_classes(color: Any = None) -> str:
    return get_note_color_config(color).classes


def color_to_hex(color: Any = None) -> str:
    return get_note_color_config(color).hex
