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
HTTP-клиент API дневника.

Все URL собираются здесь, чтобы представления не знали про адреса эндпоинтов.
"""

import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import aiohttp

from infrastructure.logging.logger import setup_logger
from settings import settings
from tools.journal.exceptions import JournalApiError
from tools.journal.models import JournalEntry

logger = setup_logger("journal_client")


class JournalApiClient:
    def __init__(self, base_url: Optional[str] = None, timeout: float = 10.0):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.request(method, url, **kwargs) as response:
                    if response.status >= 400:
                        body = await response.text()
                        logger.error(f"{method} {path} → {response.status}: {body}")
                        raise JournalApiError(
                            f"{method} {path} failed with status {response.status}",
                            status=response.status,
                        )
                    return await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"{method} {path} не выполнен: {e}")
            raise JournalApiError(f"Journal API is unreachable: {e}")
        except ValueError as e:
            logger.error(f"{method} {path} вернул не JSON: {e}")
            raise JournalApiError(f"Journal API returned invalid JSON: {e}")

    async def fetch_entries(self) -> List[JournalEntry]:
        data = await self._request("GET", "/api/journal/all")
        return [JournalEntry.from_dict(item, index=item.get("index", i)) for i, item in enumerate(data)]

    async def fetch_entry_by_date(self, date: str) -> Optional[JournalEntry]:
        data = await self._request("GET", f"/api/journal/{date}")
        return JournalEntry.from_dict(data, index=data.get("index")) if data else None

    async def fetch_week(self) -> List[JournalEntry]:
        data = await self._request("GET", "/api/calendar/week")
        return [JournalEntry.from_dict(item, index=item.get("index")) for item in data]

    async def create_entry(self, fields: Dict[str, Optional[str]], photos: Sequence[Path] = ()) -> Dict[str, Any]:
        """Отправляет multipart-форму: поля записи + файлы photos."""
        form = aiohttp.FormData()
        for key, value in fields.items():
            if value is not None:
                form.add_field(key, value)

        handles = []
        try:
            for photo in photos:
                handle = open(photo, "rb")
                handles.append(handle)
                form.add_field("photos", handle, filename=Path(photo).name)
            return await self._request("POST", "/api/journal", data=form)
        finally:
            for handle in handles:
                handle.close()

    async def update_entry(self, index: int, body: Dict[str, Optional[str]]) -> JournalEntry:
        data = await self._request("PUT", f"/api/journal/entry/{index}", json=body)
        return JournalEntry.from_dict(data, index=data.get("index"))

    async def delete_entry(self, index: int) -> None:
        await self._request("DELETE", f"/api/journal/entry/{index}")

    async def update_entry_by_id(self, entry_id: str, body: Dict[str, Optional[str]]) -> JournalEntry:
        data = await self._request("PUT", f"/api/journal/entries/{entry_id}", json=body)
        return JournalEntry.from_dict(data, index=data.get("index"))

    async def delete_entry_by_id(self, entry_id: str) -> None:
        await self._request("DELETE", f"/api/journal/entries/{entry_id}")
