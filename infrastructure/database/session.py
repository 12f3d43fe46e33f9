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

from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from infrastructure.database.models import Base
from settings import settings


class Database:
    def __init__(self, db_url: Optional[str] = None, **engine_kwargs):
        self.db_url = db_url or settings.DATABASE_URL

        if self.db_url.startswith("sqlite"):
            # SQLite-соединение ходит между потоками FastAPI
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})

        self.engine = create_engine(self.db_url, future=True, **engine_kwargs)

        if self.db_url.startswith("sqlite"):
            # Без этого SQLite игнорирует ON DELETE CASCADE
            @event.listens_for(self.engine, "connect")
            def _enable_foreign_keys(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine
        )

    def get_session(self) -> Session:
        return self.SessionLocal()

    def create_all(self) -> None:
        """Создаёт таблицы без Alembic (локальный SQLite, тесты)."""
        Base.metadata.create_all(self.engine)
