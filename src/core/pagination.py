"""Paginación perezosa por cursor sobre colecciones HAL.

Por qué un iterador explícito (y no un async generator):
- El estado (URL siguiente, buffer, error) es inspeccionable desde fuera.
- Un walker fallido debe volver a lanzar su error en cada pull; un async
  generator terminado solo devolvería `StopAsyncIteration`.

Reglas:
- Construir el walker no hace I/O; la primera página se pide en el primer pull.
- Una página a la vez, en orden, sin reintentos ni reordenamiento.
- El `page_size` sugerido viaja solo en la primera petición; después se usa
  el `next` del servidor tal cual.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Mapping
from enum import Enum
from functools import partial
from types import TracebackType
from typing import Any, Callable
from urllib.parse import parse_qsl, urlencode, urljoin, urlsplit, urlunsplit

from pydantic import ValidationError

from core.domain.models import DomainItem, PageEnvelope, WireItem
from core.errors import ConcurrentPullError, MalformedEnvelopeError
from core.interfaces.gateway import HttpGateway
from core.transformers import camel_case_keys

logger = logging.getLogger(__name__)

ItemTransform = Callable[[WireItem], DomainItem]

PAGE_SIZE_PARAM = "page_size"


class WalkerState(str, Enum):
    UNINITIALIZED = "uninitialized"
    FETCHING_PAGE = "fetching_page"
    HAS_BUFFERED_ITEMS = "has_buffered_items"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


def with_query_param(url: str, name: str, value: Any) -> str:
    """Añade `name=value` a la query de `url` si no estaba ya."""

    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True)
    if any(key == name for key, _ in query):
        return url
    query.append((name, str(value)))
    return urlunsplit(parts._replace(query=urlencode(query)))


def parse_page(body: Any, *, url: str | None = None) -> PageEnvelope:
    """Valida el sobre de una página; cualquier forma inesperada es `MalformedEnvelopeError`."""

    if not isinstance(body, Mapping):
        raise MalformedEnvelopeError(
            "Malformed page envelope: expected a JSON object",
            body=body,
            method="GET",
            url=url,
        )
    try:
        return PageEnvelope.model_validate(body)
    except ValidationError as exc:
        raise MalformedEnvelopeError(
            f"Malformed page envelope: {exc.error_count()} validation error(s)",
            body=body,
            method="GET",
            url=url,
        ) from exc


class PageCursorWalker:
    """Secuencia perezosa, solo-avance, de items de dominio de una colección.

    Uso:
        async for room in walker:
            ...

    Un walker no admite consumo concurrente: dos `__anext__` solapados lanzan
    `ConcurrentPullError`.
    """

    def __init__(
        self,
        gateway: HttpGateway,
        url: str,
        *,
        page_size: int | None = None,
        item_transform: ItemTransform | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._gateway = gateway
        self._start_url = url
        self._next_url: str | None = url
        self._page_size_hint = page_size
        self._item_transform = item_transform or partial(camel_case_keys, deep=True)
        self._headers = dict(headers) if headers else None

        self._buffer: deque[DomainItem] = deque()
        self._state = WalkerState.UNINITIALIZED
        self._error: Exception | None = None
        self._error_traceback: TracebackType | None = None
        self._last_page: PageEnvelope | None = None
        self._pages_fetched = 0
        self._pulling = False

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(url={self._start_url!r}, state={self._state.value}, "
            f"pages_fetched={self._pages_fetched})"
        )

    @property
    def state(self) -> WalkerState:
        return self._state

    @property
    def next_url(self) -> str | None:
        """URL de la próxima página a pedir (`None` tras la última)."""

        return self._next_url

    @property
    def pages_fetched(self) -> int:
        return self._pages_fetched

    @property
    def page_size(self) -> int | None:
        """`page_size` reportado por la última página recibida."""

        return self._last_page.page_size if self._last_page else None

    @property
    def total_items(self) -> int | None:
        """`total_items` reportado por la última página recibida."""

        return self._last_page.total_items if self._last_page else None

    @property
    def error(self) -> Exception | None:
        return self._error

    def __aiter__(self) -> PageCursorWalker:
        return self

    async def __anext__(self) -> DomainItem:
        if self._pulling:
            raise ConcurrentPullError(f"{self!r} is already being consumed by another task")
        self._pulling = True
        try:
            return await self._pull()
        finally:
            self._pulling = False

    async def to_list(self, limit: int | None = None) -> list[DomainItem]:
        """Consume el walker (o hasta `limit` items) y devuelve los items en orden."""

        items: list[DomainItem] = []
        if limit is not None and limit <= 0:
            return items
        async for item in self:
            items.append(item)
            if limit is not None and len(items) >= limit:
                break
        return items

    async def _pull(self) -> DomainItem:
        while True:
            if self._error is not None:
                # Traceback fijado al fallo original; no crece con cada pull.
                raise self._error.with_traceback(self._error_traceback)

            if self._buffer:
                item = self._buffer.popleft()
                if not self._buffer and self._next_url is None:
                    self._state = WalkerState.EXHAUSTED
                return item

            if self._state is WalkerState.EXHAUSTED or self._next_url is None:
                self._state = WalkerState.EXHAUSTED
                raise StopAsyncIteration

            await self._fetch_page(self._next_url)

    async def _fetch_page(self, url: str) -> None:
        if self._pages_fetched == 0 and self._page_size_hint is not None:
            url = with_query_param(url, PAGE_SIZE_PARAM, self._page_size_hint)

        previous = self._state
        self._state = WalkerState.FETCHING_PAGE
        try:
            logger.debug("Fetching page %d: %s", self._pages_fetched + 1, url)
            response = await self._gateway.request("GET", url, headers=self._headers)
            page = parse_page(response.body, url=url)
            items = [self._item_transform(raw) for raw in page.embedded]
            next_href = page.next_href
            next_url = urljoin(url, next_href) if next_href else None
        except Exception as exc:
            self._state = WalkerState.FAILED
            self._error = exc
            self._error_traceback = exc.__traceback__
            raise
        finally:
            # Cancelación: sin cambios de cursor, el próximo pull reintenta la misma URL.
            if self._state is WalkerState.FETCHING_PAGE:
                self._state = previous

        self._next_url = next_url
        self._last_page = page
        self._pages_fetched += 1
        self._buffer.extend(items)
        self._state = WalkerState.HAS_BUFFERED_ITEMS

        logger.debug(
            "Page %d: %d item(s), next=%s",
            self._pages_fetched,
            len(items),
            self._next_url or "-",
        )
