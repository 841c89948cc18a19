"""Recurso: rooms.

- `GET  /rooms`            -> colección paginada (`_embedded`, `_links.next`)
- `GET  /rooms/{id}`       -> el room en sí (con `_links` que se descartan)
- `POST /rooms`            -> solo `ROOM_WRITE_KEYS`
- `PATCH /rooms/{id}`      -> `{"update_options": {...ROOM_WRITE_KEYS}}`
- `GET  /themes/{id}/rooms` -> rooms que usan un theme (misma paginación)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from core.domain.models import DomainItem, ListOptions
from core.pagination import PageCursorWalker
from core.services.resource_client import ResourceClient, ensure_write_keys

# Nombres wire: se aplican después de `snake_case_keys`.
ROOM_WRITE_KEYS: tuple[str, ...] = ensure_write_keys(
    [
        "display_name",
        "metadata",
        "type",
        "expires_at",
        "recording_options",
        "expire_after_use",
        "theme_id",
        "join_approval_level",
        "initial_join_options",
        "callback_urls",
        "available_features",
        "ui_settings",
    ]
)


class RoomsClient(ResourceClient):
    """Rooms de Meetings: listado paginado, lectura, alta y actualización."""

    path = "rooms"
    write_keys = ROOM_WRITE_KEYS
    update_envelope_key = "updateOptions"

    def get_rooms(
        self,
        options: ListOptions | None = None,
        *,
        page_size: int | None = None,
    ) -> PageCursorWalker:
        return self.list(options, page_size=page_size)

    async def get_room(self, room_id: str) -> DomainItem:
        return await self.get_one(room_id)

    async def create_room(self, room: Mapping[str, Any]) -> DomainItem:
        """Crea un room; acepta un room completo y envía solo los campos escribibles."""

        return await self.create(room)

    async def update_room(self, room_id: str, room: Mapping[str, Any]) -> DomainItem:
        return await self.update(room_id, room)

    def get_rooms_by_theme(
        self,
        theme_id: str,
        options: ListOptions | None = None,
        *,
        page_size: int | None = None,
    ) -> PageCursorWalker:
        return self.walk(self.url_for("themes", theme_id, self.path), options, page_size=page_size)
