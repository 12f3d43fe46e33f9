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

"""Хранилище записей дневника на SQLAlchemy (таблицы users / entries / photos)."""

import secrets
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from infrastructure.database.models import Entry, Photo, User
from infrastructure.database.session import Database
from infrastructure.logging.logger import setup_logger
from tools.journal.entry_store import EntryStore
from tools.journal.exceptions import NotFoundError, StorageError
from tools.journal.models import JournalEntry

logger = setup_logger("journal_repository")


class SqlEntryStore(EntryStore):
    """
    Записи в реляционной БД.

    Порядок хранения — порядок первичного ключа (порядок добавления).
    Все записи принадлежат одному владельцу `owner`, который создаётся
    при первом обращении. `id` записи — строковое представление первичного ключа.
    Каждая операция выполняется в своей транзакции.
    """

    def __init__(self, db: Database, owner: str = "local"):
        self.db = db
        self.owner = owner

    # --- helpers ---
    @staticmethod
    def _to_entry(row: Entry, index: int) -> JournalEntry:
        return JournalEntry(
            id=str(row.id),
            index=index,
            date=row.date,
            title=row.title,
            time=row.time,
            text=row.text,
            color=row.color,
            photos=[p.path for p in row.photos],
        )

    def _owner_id(self, session: Session) -> int:
        user = session.query(User).filter_by(username=self.owner).first()
        if user is None:
            # Пароль не используется ни одним эндпоинтом, храним случайный хеш-заглушку
            user = User(username=self.owner, password_hash=secrets.token_hex(32))
            session.add(user)
            session.flush()
            logger.info(f"Создан владелец записей: {self.owner}")
        return user.id

    def _ordered_rows(self, session: Session) -> List[Entry]:
        return (
            session.query(Entry)
            .options(selectinload(Entry.photos))
            .order_by(Entry.id.asc())
            .all()
        )

    def _run(self, operation: str, func):
        """Выполняет func(session) в транзакции, ошибки БД → StorageError."""
        session = self.db.get_session()
        try:
            result = func(session)
            session.commit()
            return result
        except NotFoundError:
            session.rollback()
            raise
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Ошибка БД при {operation}: {e}")
            raise StorageError(f"Database error during {operation}: {e}", original_error=e)
        finally:
            session.close()

    # --- public API ---
    def list(self) -> List[JournalEntry]:
        def _list(session: Session) -> List[JournalEntry]:
            return [self._to_entry(row, i) for i, row in enumerate(self._ordered_rows(session))]

        return self._run("list", _list)

    def append(self, entry: JournalEntry) -> JournalEntry:
        def _append(session: Session) -> JournalEntry:
            row = Entry(
                user_id=self._owner_id(session),
                date=entry.date,
                title=entry.title,
                time=entry.time,
                text=entry.text,
                color=entry.color,
                photos=[Photo(path=path, position=i) for i, path in enumerate(entry.photos)],
            )
            session.add(row)
            session.flush()
            entry.id = str(row.id)
            entry.index = session.query(Entry).filter(Entry.id < row.id).count()
            return entry

        created = self._run("append", _append)
        logger.info(f"Создана запись: id={created.id}, date={created.date}")
        return created

    def update_at(self, index: int, fields: Dict[str, Any]) -> JournalEntry:
        def _update(session: Session) -> JournalEntry:
            rows = self._ordered_rows(session)
            self._check_index(index, len(rows))
            row = rows[index]

            entry = self._to_entry(row, index)
            entry.apply_update(fields)
            row.title, row.time, row.text = entry.title, entry.time, entry.text
            return entry

        updated = self._run("update", _update)
        logger.info(f"Обновлена запись: id={updated.id}, index={index}")
        return updated

    def remove_at(self, index: int) -> JournalEntry:
        def _remove(session: Session) -> JournalEntry:
            rows = self._ordered_rows(session)
            self._check_index(index, len(rows))
            removed = self._to_entry(rows[index], index)
            session.delete(rows[index])
            return removed

        removed = self._run("delete", _remove)
        logger.info(f"Удалена запись: id={removed.id}, index={index}")
        return removed

    def find_by_date(self, date: str):
        def _find(session: Session):
            row = (
                session.query(Entry)
                .options(selectinload(Entry.photos))
                .filter(Entry.date == date)
                .order_by(Entry.id.asc())
                .first()
            )
            if row is None:
                return None
            index = session.query(Entry).filter(Entry.id < row.id).count()
            return self._to_entry(row, index)

        return self._run("find_by_date", _find)

    def index_of(self, entry_id: str) -> int:
        try:
            pk = int(entry_id)
        except (TypeError, ValueError):
            raise NotFoundError(f"Entry {entry_id} not found")

        def _index(session: Session) -> int:
            if session.get(Entry, pk) is None:
                raise NotFoundError(f"Entry {entry_id} not found")
            return session.query(Entry).filter(Entry.id < pk).count()

        return self._run("index_of", _index)

    def update(self, entry_id: str, fields: Dict[str, Any]) -> JournalEntry:
        # Меняем строку по первичному ключу; index нужен только для ответа
        index = self.index_of(entry_id)

        def _update(session: Session) -> JournalEntry:
            row = session.get(Entry, int(entry_id))
            if row is None:
                raise NotFoundError(f"Entry {entry_id} not found")
            entry = self._to_entry(row, index)
            entry.apply_update(fields)
            row.title, row.time, row.text = entry.title, entry.time, entry.text
            return entry

        updated = self._run("update", _update)
        logger.info(f"Обновлена запись: id={entry_id}")
        return updated

    def remove(self, entry_id: str) -> JournalEntry:
        index = self.index_of(entry_id)

        def _remove(session: Session) -> JournalEntry:
            row = session.get(Entry, int(entry_id))
            if row is None:
                raise NotFoundError(f"Entry {entry_id} not found")
            removed = self._to_entry(row, index)
            session.delete(row)
            return removed

        removed = self._run("delete", _remove)
        logger.info(f"Удалена запись: id={entry_id}")
        return removed
