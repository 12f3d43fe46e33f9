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
Хранилище записей дневника.

`EntryStore` — узкий интерфейс (list / find_by_date / append / update / remove),
за которым может стоять любой носитель. `JsonEntryStore` хранит всю коллекцию
одним JSON-массивом в файле, порядок — порядок добавления.
"""

import json
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from infrastructure.logging.logger import setup_logger
from tools.journal.exceptions import NotFoundError, StorageError
from tools.journal.models import JournalEntry, new_entry_id

logger = setup_logger("entry_store")


class EntryStore(ABC):
    """Упорядоченная коллекция записей с адресацией по позиции и по id."""

    @abstractmethod
    def list(self) -> List[JournalEntry]:
        """Все записи в порядке хранения, у каждой заполнен index."""

    @abstractmethod
    def append(self, entry: JournalEntry) -> JournalEntry:
        """Добавляет запись в конец, выдаёт ей id."""

    @abstractmethod
    def update_at(self, index: int, fields: Dict[str, Any]) -> JournalEntry:
        ...

    @abstractmethod
    def remove_at(self, index: int) -> JournalEntry:
        ...

    def find_by_date(self, date: str) -> Optional[JournalEntry]:
        """Первая запись с указанной датой или None."""
        for entry in self.list():
            if entry.date == date:
                return entry
        return None

    def index_of(self, entry_id: str) -> int:
        for entry in self.list():
            if entry.id == entry_id:
                return entry.index
        raise NotFoundError(f"Entry {entry_id} not found")

    def get(self, entry_id: str) -> JournalEntry:
        # Один снимок коллекции: id и index берутся из одного чтения
        for entry in self.list():
            if entry.id == entry_id:
                return entry
        raise NotFoundError(f"Entry {entry_id} not found")

    def update(self, entry_id: str, fields: Dict[str, Any]) -> JournalEntry:
        return self.update_at(self.index_of(entry_id), fields)

    def remove(self, entry_id: str) -> JournalEntry:
        return self.remove_at(self.index_of(entry_id))

    @staticmethod
    def _check_index(index: int, size: int) -> None:
        if index < 0 or index >= size:
            raise NotFoundError(f"Entry index {index} is out of range (0..{size - 1})")


# Один лок на файл на весь процесс: list → mutate → save выполняются атомарно
_locks: Dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _locks_guard:
        return _locks.setdefault(path, threading.RLock())


class JsonEntryStore(EntryStore):
    """
    Записи в одном JSON-документе.

    Отсутствующий или пустой файл — пустая коллекция. Битый JSON — StorageError.
    Запись идёт во временный файл рядом и заменяет документ через os.replace.
    Записи без id (старый формат) получают id при следующей записи.

    Note:
        Лок работает в пределах одного процесса. Несколько воркеров
        uvicorn на один файл по-прежнему могут перетереть изменения друг друга.
    """

    def __init__(self, filepath: Path):
        self.filepath = Path(filepath).resolve()
        self._lock = _lock_for(self.filepath)

    # --- helpers ---
    def _load_all(self) -> List[Dict[str, Any]]:
        try:
            with open(self.filepath, "r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.error(f"[store] Не удалось прочитать {self.filepath}: {e}")
            raise StorageError(f"Failed to read journal data: {e}", original_error=e)

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"[store] Битый JSON в {self.filepath}: {e}")
            raise StorageError(f"Journal data is malformed: {e}", original_error=e)

        if data is None:
            return []
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            logger.error(f"[store] {self.filepath} не содержит массив записей")
            raise StorageError("Journal data must be a JSON array of objects")
        return data

    def _save_all(self, items: List[Dict[str, Any]]) -> None:
        for item in items:
            if not item.get("id"):
                item["id"] = new_entry_id()

        tmp_path = None
        try:
            self.filepath.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.filepath.parent, prefix=f".{self.filepath.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.filepath)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            logger.error(f"[store] Не удалось записать {self.filepath}: {e}")
            raise StorageError(f"Failed to write journal data: {e}", original_error=e)

    # --- public API ---
    def list(self) -> List[JournalEntry]:
        with self._lock:
            items = self._load_all()
        return [JournalEntry.from_dict(item, index=i) for i, item in enumerate(items)]

    def append(self, entry: JournalEntry) -> JournalEntry:
        with self._lock:
            items = self._load_all()
            entry.id = entry.id or new_entry_id()
            items.append(entry.to_dict())
            self._save_all(items)
            entry.index = len(items) - 1

        logger.info(f"[store] Добавлена запись id={entry.id}, date={entry.date}, index={entry.index}")
        return entry

    def update_at(self, index: int, fields: Dict[str, Any]) -> JournalEntry:
        with self._lock:
            items = self._load_all()
            self._check_index(index, len(items))

            entry = JournalEntry.from_dict(items[index], index=index)
            entry.apply_update(fields)
            # Сохраняем неизвестные ключи исходного документа
            items[index] = {**items[index], **entry.to_dict()}
            self._save_all(items)
            entry.id = items[index]["id"]

        logger.info(f"[store] Обновлена запись index={index}, id={entry.id}")
        return entry

    def remove_at(self, index: int) -> JournalEntry:
        with self._lock:
            items = self._load_all()
            self._check_index(index, len(items))

            removed = items.pop(index)
            self._save_all(items)

        logger.info(f"[store] Удалена запись index={index}, id={removed.get('id')}")
        return JournalEntry.from_dict(removed, index=index)

    def update(self, entry_id: str, fields: Dict[str, Any]) -> JournalEntry:
        with self._lock:
            return super().update(entry_id, fields)

    def remove(self, entry_id: str) -> JournalEntry:
        with self._lock:
            return super().remove(entry_id)
