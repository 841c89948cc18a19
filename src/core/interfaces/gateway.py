"""Contrato del transporte HTTP.

Por qué Protocol:
- El Core (walker, resource client) no sabe de httpx, firmas ni auth.
- Permite sustituir el transporte por un stub en tests o por otro cliente
  sin acoplar el Core a implementaciones concretas.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, runtime_checkable


@dataclass(frozen=True)
class GatewayResponse:
    """Respuesta 2xx ya decodificada (JSON o `None` si no hay cuerpo)."""

    status: int
    body: Any = None


@runtime_checkable
class HttpGateway(Protocol):
    """Contrato mínimo del transporte.

    Reglas de diseño:
    - `request` es asíncrono porque hace I/O; suspende solo a quien lo llama.
    - Devuelve únicamente respuestas 2xx; cualquier otra cosa (red, no-2xx)
      se propaga como `core.errors.RequestFailedError`.
    """

    async def request(
        self,
        method: str,
        url: str,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> GatewayResponse:
        """Ejecuta una petición firmada/autenticada y devuelve el cuerpo decodificado."""

        ...
