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

"""Зависимости роутеров: хранилище и обработчик фото лежат в app.state."""

from fastapi import Request

from tools.journal.attachments import AttachmentHandler
from tools.journal.entry_store import EntryStore


def get_store(request: Request) -> EntryStore:
    return request.app.state.store


def get_attachments(request: Request) -> AttachmentHandler:
    return request.app.state.attachments
