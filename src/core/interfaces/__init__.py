"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el Core depende de abstracciones.
"""

from core.interfaces.gateway import GatewayResponse, HttpGateway

__all__ = [
    "GatewayResponse",
    "HttpGateway",
]
