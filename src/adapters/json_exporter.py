"""Exportación JSON de items de dominio.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines (jq, scripts).
- Permite guardar un listado completo sin depender del render de la consola.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from core.domain.models import DomainItem


def dump_items_json(items: Iterable[DomainItem]) -> str:
    """Serializa items a JSON UTF-8 con formato estable."""

    return json.dumps(list(items), ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_items_json(*, items: Iterable[DomainItem], output_path: Path) -> Path:
    """Escribe los items en `output_path` (crea directorios si hace falta)."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dump_items_json(items), encoding="utf-8")
    return output_path
