"""Normalización de claves wire <-> dominio y filtrado de campos de escritura.

Por qué aquí (Core):
- El servicio habla snake_case y los consumidores del SDK esperan camelCase;
  la conversión es pura y no depende del transporte.
- La regla de nombres es propia y no la de `pydantic.alias_generators`:
  solo `_` separa palabras, así que `v2beta`, `content-type` o `h264Enabled`
  no se tocan más allá de ese criterio y el viaje de ida y vuelta se conserva.

Reglas:
- wire -> dominio: `_` + letra minúscula pasa a la mayúscula (`h264_enabled` -> `h264Enabled`).
- dominio -> wire: cada mayúscula pasa a `_` + su minúscula (`h264Enabled` -> `h264_enabled`).
- Escalares y `None` pasan sin cambios.
- Secuencias se mapean elemento a elemento (mismo orden y longitud).
- Nunca se muta la entrada; siempre se devuelve un contenedor nuevo.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any, Callable

KeyRenamer = Callable[[str], str]

_UNDERSCORE_LOWER = re.compile(r"_([a-z])")
_UPPER = re.compile(r"[A-Z]")


def camel_key(key: str) -> str:
    """`display_name` -> `displayName`. Claves sin `_` quedan igual."""

    return _UNDERSCORE_LOWER.sub(lambda m: m.group(1).upper(), key)


def snake_key(key: str) -> str:
    """`displayName` -> `display_name`. Claves sin mayúsculas quedan igual."""

    return _UPPER.sub(lambda m: "_" + m.group(0).lower(), key)


def _rename(key: Any, renamer: KeyRenamer) -> Any:
    # JSON solo produce claves str; cualquier otra se respeta tal cual.
    if isinstance(key, str):
        return renamer(key)
    return key


def _transform(value: Any, renamer: KeyRenamer, deep: bool) -> Any:
    if isinstance(value, Mapping):
        if deep:
            return {_rename(k, renamer): _transform(v, renamer, deep) for k, v in value.items()}
        return {_rename(k, renamer): v for k, v in value.items()}

    if isinstance(value, (list, tuple)):
        if deep:
            return [_transform(v, renamer, deep) for v in value]
        # Superficial: se renombran las claves del primer nivel de cada elemento.
        return [
            {_rename(k, renamer): v for k, v in item.items()} if isinstance(item, Mapping) else item
            for item in value
        ]

    return value


def camel_case_keys(value: Any, deep: bool = False) -> Any:
    """wire -> dominio (`toDomain`).

    `deep=True` recorre mapas y listas anidados; `deep=False` solo renombra
    el primer nivel y deja los valores anidados tal cual (mismos objetos).
    """

    return _transform(value, camel_key, deep)


def snake_case_keys(value: Any, deep: bool = False) -> Any:
    """dominio -> wire (`toWire`). Misma semántica de `deep` que `camel_case_keys`."""

    return _transform(value, snake_key, deep)


def pick(obj: Mapping[str, Any], allowed_keys: Iterable[str]) -> dict[str, Any]:
    """Subconjunto de `obj` limitado a `allowed_keys`, en el orden de `allowed_keys`.

    Las claves permitidas que no están en `obj` se omiten (no se rellenan con
    `None`). Los campos extra de `obj` se descartan sin error: entrada
    tolerante, salida estricta.
    """

    out: dict[str, Any] = {}
    for key in allowed_keys:
        if key in obj and key not in out:
            out[key] = obj[key]
    return out
