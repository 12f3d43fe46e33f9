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

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from api.dependencies.runtime import get_attachments, get_store
from api.helpers import parse_index, raise_http
from api.schemas.journal import JournalEntryOut, JournalEntryUpdate, SuccessResponse
from infrastructure.logging.logger import setup_logger
from tools.journal.attachments import AttachmentHandler
from tools.journal.entry_store import EntryStore
from tools.journal.exceptions import JournalError
from tools.journal.service import create_entry_with_photos

logger = setup_logger("journal")
router = APIRouter(prefix="/api/journal", tags=["journal"])


@router.get("/all", response_model=List[JournalEntryOut])
def list_entries(store: EntryStore = Depends(get_store)):
    """
    Все записи дневника в порядке хранения (порядок добавления, не по дате).

    Raises:
        HTTPException 500: Если не удалось прочитать хранилище.
    """
    try:
        return [entry.to_public() for entry in store.list()]
    except JournalError as e:
        raise_http(e, "fetch journal entries")


@router.get("/{date}", response_model=Optional[JournalEntryOut])
def get_entry_by_date(date: str, store: EntryStore = Depends(get_store)):
    """Первая запись с указанной датой (YYYY-MM-DD) или null."""
    try:
        entry = store.find_by_date(date)
    except JournalError as e:
        raise_http(e, "fetch journal entry")
    return entry.to_public() if entry else None


@router.post("", response_model=SuccessResponse, response_model_exclude_none=True)
def create_entry(
    date: Optional[str] = Form(None),
    title: Optional[str] = Form(None),
    time: Optional[str] = Form(None),
    text: Optional[str] = Form(None),
    color: Optional[str] = Form(None),
    photos: Optional[List[UploadFile]] = File(None),
    store: EntryStore = Depends(get_store),
    attachments: AttachmentHandler = Depends(get_attachments),
):
    """
    Создаёт запись из multipart-формы.

    Сначала сохраняются все фото, потом запись добавляется в конец коллекции.
    Если какое-то фото не сохранилось, запись не создаётся.

    Raises:
        HTTPException 400: Нет title или date.
        HTTPException 500: Не удалось сохранить фото или коллекцию.
    """
    files = [(upload.filename or "photo", upload.file) for upload in (photos or [])]
    try:
        entry = create_entry_with_photos(
            store,
            attachments,
            date=date,
            title=title,
            time=time,
            text=text,
            color=color,
            files=files,
        )
    except JournalError as e:
        raise_http(e, "create journal entry")
    finally:
        for upload in photos or []:
            upload.file.close()

    return SuccessResponse(success=True, id=entry.id)


@router.put("/entry/{index}", response_model=JournalEntryOut)
def update_entry_at(index: str, payload: JournalEntryUpdate, store: EntryStore = Depends(get_store)):
    """
    Частично обновляет запись по позиции.

    Raises:
        HTTPException 400: index не целое число.
        HTTPException 404: index вне коллекции.
        HTTPException 500: Ошибка записи.
    """
    try:
        entry = store.update_at(parse_index(index), payload.model_dump(exclude_unset=True))
    except JournalError as e:
        raise_http(e, "update journal entry")
    return entry.to_public()


@router.delete("/entry/{index}", response_model=SuccessResponse, response_model_exclude_none=True)
def delete_entry_at(index: str, store: EntryStore = Depends(get_store)):
    """Удаляет запись по позиции; все следующие записи сдвигаются на одну назад."""
    try:
        store.remove_at(parse_index(index))
    except JournalError as e:
        raise_http(e, "delete journal entry")
    return SuccessResponse(success=True)


@router.put("/entries/{entry_id}", response_model=JournalEntryOut)
def update_entry(entry_id: str, payload: JournalEntryUpdate, store: EntryStore = Depends(get_store)):
    """Частично обновляет запись по стабильному id (не зависит от удалений)."""
    try:
        entry = store.update(entry_id, payload.model_dump(exclude_unset=True))
    except JournalError as e:
        raise_http(e, "update journal entry")
    return entry.to_public()


@router.delete("/entries/{entry_id}", response_model=SuccessResponse, response_model_exclude_none=True)
def delete_entry(entry_id: str, store: EntryStore = Depends(get_store)):
    """Удаляет запись по стабильному id."""
    try:
        removed = store.remove(entry_id)
    except JournalError as e:
        raise_http(e, "delete journal entry")
    return SuccessResponse(success=True, id=removed.id)
