"""Modelos del dominio (Pydantic v2).

Por qué Pydantic solo en los sobres (envelopes):
- Los items se exponen como `dict` camelCase planos; su forma la define el
  servicio y el SDK no la congela en clases.
- El sobre de paginación sí es un contrato estable (`_embedded`, `_links`,
  `page_size`, `total_items`) y conviene validarlo en el borde.

Nota:
- Estos modelos describen *qué* llega por el cable, no *cómo* se obtiene.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic.config import ConfigDict

WireItem = dict[str, Any]
DomainItem = dict[str, Any]


class Link(BaseModel):
    """Relación HAL (`{"href": ...}`)."""

    model_config = ConfigDict(extra="ignore")

    href: str | None = Field(
        default=None,
        description="URL absoluta o relativa de la relación.",
    )


class PageEnvelope(BaseModel):
    """Respuesta cruda de una página de colección.

    Invariante: sin relación `next` esta es la última página.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    embedded: list[WireItem] = Field(
        default_factory=list,
        alias="_embedded",
        description="Items en formato wire, en el orden del servidor.",
    )
    links: dict[str, Link] = Field(
        default_factory=dict,
        alias="_links",
        description="Relaciones de navegación (`self`, `next`).",
    )
    page_size: int | None = Field(
        default=None,
        ge=0,
        description="Tamaño de página aplicado por el servidor.",
    )
    total_items: int | None = Field(
        default=None,
        ge=0,
        description="Total de items de la colección según el servidor.",
    )

    @field_validator("embedded", "links", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return [] if info.field_name == "embedded" else {}
        return value

    @property
    def next_href(self) -> str | None:
        link = self.links.get("next")
        if link is None or not link.href:
            return None
        return link.href


class ListOptions(BaseModel):
    """Opciones de listado que acepta `ResourceClient.list`."""

    model_config = ConfigDict(extra="forbid")

    page_size: int | None = Field(
        default=None,
        ge=1,
        le=1000,
        description="Sugerencia de tamaño de página; se envía solo en la primera petición.",
    )
