"""Errores del SDK.

Por qué una jerarquía propia:
- El caller captura `MeetingsError` sin conocer httpx ni el transporte.
- `RequestFailedError` cubre tanto fallos de red como respuestas no-2xx; el
  Core no interpreta códigos de estado, solo los transporta.

Error envelope del servicio:
```json
{"status": 401, "error": "Unauthorized", "message": "Failed"}
```
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ErrorEnvelope(BaseModel):
    """Cuerpo de error que devuelve el servicio en mutaciones/listados."""

    model_config = ConfigDict(extra="ignore")

    status: int | None = Field(default=None, description="Código HTTP reportado por el servicio.")
    error: str | None = Field(default=None, description="Nombre corto del error.")
    message: str | None = Field(default=None, description="Detalle legible del error.")

    @classmethod
    def from_body(cls, body: Any) -> ErrorEnvelope | None:
        """Parsea el cuerpo si tiene forma de error envelope; si no, `None`."""

        if not isinstance(body, dict):
            return None
        try:
            return cls.model_validate(body)
        except ValidationError:
            return None


class MeetingsError(Exception):
    """Base de todos los errores del SDK."""


class RequestFailedError(MeetingsError):
    """Fallo de transporte: error de red o respuesta no-2xx.

    `status` es `None` cuando la petición no llegó a tener respuesta.
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        body: Any = None,
        method: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.body = body
        self.method = method
        self.url = url
        self.error = ErrorEnvelope.from_body(body)

    @classmethod
    def from_status(
        cls,
        status: int,
        *,
        body: Any = None,
        method: str | None = None,
        url: str | None = None,
    ) -> RequestFailedError:
        return cls(
            f"Request failed with status code {status}",
            status=status,
            body=body,
            method=method,
            url=url,
        )


class MalformedEnvelopeError(RequestFailedError):
    """La respuesta no tiene la estructura esperada (sin significado recuperable)."""


class ConcurrentPullError(MeetingsError, RuntimeError):
    """Dos tareas intentaron avanzar el mismo walker a la vez."""
