"""Recursos concretos de la API de Meetings.

Por qué un paquete:
- Agrupa un módulo por recurso (rooms, ...).
- Cada módulo extiende `core.services.resource_client.ResourceClient` con su
  ruta, write-keys y sobre de actualización.
"""

from adapters.resources.rooms import ROOM_WRITE_KEYS, RoomsClient

__all__ = [
	"ROOM_WRITE_KEYS",
	"RoomsClient",
]
