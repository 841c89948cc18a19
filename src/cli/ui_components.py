"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import DomainItem
from core.errors import MeetingsError, RequestFailedError


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("meetings-sdk", style="bold cyan")
    subtitle = Text("Rooms • Paginación • camelCase", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def build_rooms_table(rooms: Iterable[DomainItem], *, title: str = "Rooms") -> Table:
    """Tabla Rich para rooms ya normalizados (claves camelCase)."""

    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Display name", style="white")
    table.add_column("Type", style="magenta")
    table.add_column("Expires at", style="dim")
    table.add_column("Available", style="green")
    for room in rooms:
        table.add_row(
            _cell(room.get("id")),
            _cell(room.get("displayName")),
            _cell(room.get("type")),
            _cell(room.get("expiresAt")),
            _cell(room.get("isAvailable")),
        )
    return table


def build_room_panel(room: DomainItem) -> Panel:
    """Panel clave/valor para un único room."""

    body = Text()
    for key, value in room.items():
        body.append(f"{key}: ", style="bold")
        body.append(f"{_cell(value)}\n")
    return Panel(body, title=Text(_cell(room.get("displayName")), style="bold cyan"), border_style="cyan")


def build_error_panel(exc: MeetingsError) -> Panel:
    """Panel para errores del SDK (status + error envelope si lo hay)."""

    body = Text(str(exc) + "\n", style="red")
    if isinstance(exc, RequestFailedError):
        if exc.method and exc.url:
            body.append(f"\n{exc.method} {exc.url}", style="dim")
        if exc.error is not None and exc.error.message:
            body.append(f"\n{exc.error.error or 'Error'}: {exc.error.message}")
    return Panel(body, title=Text("Request failed", style="bold red"), border_style="red")
