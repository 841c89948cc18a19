"""Construcción del cliente para los comandos.

Los comandos llaman a `factory.make_client` en tiempo de ejecución para que
los tests puedan sustituirlo (p.ej. con un `httpx.MockTransport`).
"""

from __future__ import annotations

from adapters.meetings import MeetingsClient
from core.config import AppSettings


def make_client(settings: AppSettings) -> MeetingsClient:
    return MeetingsClient(settings)
