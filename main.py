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

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.middleware.cors import CORSMiddleware

from api import calendar, journal, weather
from infrastructure.database.session import Database
from infrastructure.logging.logger import setup_logger
from settings import settings
from tools.journal.attachments import AttachmentHandler
from tools.journal.entry_store import EntryStore, JsonEntryStore
from tools.journal.repository import SqlEntryStore

logger = setup_logger("app")


def build_store() -> EntryStore:
    """Хранилище записей по JOURNAL_BACKEND."""
    if settings.JOURNAL_BACKEND == "sql":
        db = Database()
        db.create_all()
        logger.info("Хранилище записей: SQL")
        return SqlEntryStore(db, owner=settings.JOURNAL_OWNER)

    logger.info(f"Хранилище записей: {settings.JOURNAL_DATA_FILE}")
    return JsonEntryStore(settings.JOURNAL_DATA_FILE)


def create_app(
    store: Optional[EntryStore] = None,
    attachments: Optional[AttachmentHandler] = None,
) -> FastAPI:
    app = FastAPI(
        title="tsukiCalendar",
        version="0.1.0",
        description="Weather + memories + reminders"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store or build_store()
    app.state.attachments = attachments or AttachmentHandler(
        settings.UPLOAD_DIR, url_prefix=settings.UPLOAD_URL_PREFIX
    )

    # Подключаем эндпоинты
    app.include_router(journal.router)
    app.include_router(calendar.router)
    app.include_router(weather.router)

    upload_dir = app.state.attachments.upload_dir
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(
        app.state.attachments.url_prefix,
        StaticFiles(directory=upload_dir),
        name="uploads",
    )

    @app.get("/")
    def root():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
