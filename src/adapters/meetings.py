"""Cliente de alto nivel: un gateway compartido y un acceso por recurso."""

from __future__ import annotations

from types import TracebackType

import httpx

from adapters.http_client import HttpxGateway
from adapters.resources.rooms import RoomsClient
from core.config import AppSettings
from core.interfaces.gateway import HttpGateway


class MeetingsClient:
    """Punto de entrada del SDK.

    Ejemplo:
        async with MeetingsClient() as meetings:
            async for room in meetings.rooms.get_rooms(page_size=50):
                print(room["displayName"])
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        gateway: HttpGateway | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._owned_gateway: HttpxGateway | None = None
        if gateway is None:
            self._owned_gateway = HttpxGateway(self._settings, transport=transport)
            gateway = self._owned_gateway
        self._gateway = gateway
        self.rooms = RoomsClient(gateway, self._settings.api_root)

    async def __aenter__(self) -> MeetingsClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owned_gateway is not None:
            await self._owned_gateway.aclose()
