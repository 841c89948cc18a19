"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers (UA, JSON, Bearer) y el mapeo de errores.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.

Sin reintentos ni caché: una petición por llamada.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import TracebackType
from typing import Any

import httpx

from core.config import AppSettings
from core.errors import MalformedEnvelopeError, RequestFailedError
from core.interfaces.gateway import GatewayResponse, HttpGateway

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todos los recursos se comporten igual.
    - `transport` permite tests sin red.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if settings.api_token:
        headers["Authorization"] = f"Bearer {settings.api_token}"
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class HttpxGateway(HttpGateway):
    """`HttpGateway` sobre `httpx.AsyncClient`.

    Devuelve solo respuestas 2xx. Errores de red y no-2xx se convierten en
    `RequestFailedError` (el Core no interpreta los códigos).
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._owns_client = client is None
        self._client = client or build_async_client(self._settings, transport=transport)

    async def __aenter__(self) -> HttpxGateway:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> GatewayResponse:
        method = method.upper()
        try:
            response = await self._client.request(
                method,
                url,
                json=body,
                headers=dict(headers) if headers else None,
            )
        except httpx.HTTPError as exc:
            raise RequestFailedError(
                f"Request failed: {exc.__class__.__name__}: {exc}",
                method=method,
                url=url,
            ) from exc

        logger.debug("%s %s -> %s", method, url, response.status_code)

        payload = _decode_body(response)
        if not response.is_success:
            raise RequestFailedError.from_status(
                response.status_code,
                body=payload,
                method=method,
                url=url,
            )
        if isinstance(payload, str):
            raise MalformedEnvelopeError(
                "Malformed response: body is not valid JSON",
                status=response.status_code,
                body=payload,
                method=method,
                url=url,
            )
        return GatewayResponse(status=response.status_code, body=payload)
