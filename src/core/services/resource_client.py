"""Fachada genérica por recurso REST (list/get/create/update).

Por qué en `core/services`:
- Compone transformadores, filtro de escritura y walker sin saber de httpx.
- Cada recurso concreto (rooms, ...) solo aporta ruta, write-keys y la clave
  del sobre de actualización.

Flujo de mutaciones:
    dominio -> snake_case_keys(deep) -> pick(write_keys) -> [sobre] -> wire
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, ClassVar

from core.domain.models import DomainItem, ListOptions, WireItem
from core.errors import MalformedEnvelopeError
from core.interfaces.gateway import HttpGateway
from core.pagination import PageCursorWalker
from core.transformers import camel_case_keys, pick, snake_case_keys, snake_key

LINKS_KEY = "_links"


def to_domain_item(raw: WireItem) -> DomainItem:
    """Item wire -> dominio: sin metadata de enlaces y con claves camelCase en profundidad."""

    return camel_case_keys({k: v for k, v in raw.items() if k != LINKS_KEY}, True)


def _expect_item(body: Any, *, method: str, url: str) -> WireItem:
    if not isinstance(body, Mapping):
        raise MalformedEnvelopeError(
            "Malformed item envelope: expected a JSON object",
            body=body,
            method=method,
            url=url,
        )
    return dict(body)


class ResourceClient:
    """Operaciones de un recurso colección sobre un `HttpGateway`.

    Subclases fijan `path`, `write_keys` y `update_envelope_key`.
    """

    path: ClassVar[str] = ""
    write_keys: ClassVar[tuple[str, ...]] = ()
    update_envelope_key: ClassVar[str] = "updateOptions"

    def __init__(self, gateway: HttpGateway, base_url: str) -> None:
        self._gateway = gateway
        self._base_url = base_url.rstrip("/")

    @property
    def collection_url(self) -> str:
        return self.url_for(self.path)

    def url_for(self, *segments: str) -> str:
        tail = "/".join(s.strip("/") for s in segments if s and s.strip("/"))
        return f"{self._base_url}/{tail}" if tail else self._base_url

    def item_url(self, item_id: str) -> str:
        return self.url_for(self.path, str(item_id))

    def write_payload(self, domain_object: Mapping[str, Any]) -> dict[str, Any]:
        """Cuerpo wire de escritura: solo los campos permitidos."""

        return pick(snake_case_keys(domain_object, True), self.write_keys)

    def list(
        self,
        options: ListOptions | None = None,
        *,
        page_size: int | None = None,
    ) -> PageCursorWalker:
        """Walker perezoso sobre la colección; no hace I/O hasta el primer pull."""

        return self.walk(self.collection_url, options, page_size=page_size)

    def walk(
        self,
        url: str,
        options: ListOptions | None = None,
        *,
        page_size: int | None = None,
    ) -> PageCursorWalker:
        if options is not None and page_size is not None:
            raise ValueError("Pass either `options` or `page_size`, not both")
        opts = options or ListOptions(page_size=page_size)
        return PageCursorWalker(
            self._gateway,
            url,
            page_size=opts.page_size,
            item_transform=to_domain_item,
        )

    async def get_one(self, item_id: str) -> DomainItem:
        url = self.item_url(item_id)
        response = await self._gateway.request("GET", url)
        return to_domain_item(_expect_item(response.body, method="GET", url=url))

    async def create(self, domain_object: Mapping[str, Any]) -> DomainItem:
        url = self.collection_url
        response = await self._gateway.request("POST", url, body=self.write_payload(domain_object))
        return to_domain_item(_expect_item(response.body, method="POST", url=url))

    async def update(self, item_id: str, domain_object: Mapping[str, Any]) -> DomainItem:
        url = self.item_url(item_id)
        envelope = {self.update_envelope_key: self.write_payload(domain_object)}
        response = await self._gateway.request("PATCH", url, body=snake_case_keys(envelope))
        return to_domain_item(_expect_item(response.body, method="PATCH", url=url))


def ensure_write_keys(keys: Iterable[str]) -> tuple[str, ...]:
    """Normaliza write-keys a nombres wire, sin duplicados y en el orden dado."""

    return tuple(dict.fromkeys(snake_key(k) for k in keys))
