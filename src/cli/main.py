"""CLI `meetings` (Typer + Rich).

Por qué una CLI encima del SDK:
- Permite inspeccionar rooms sin escribir código (soporte, debugging).
- Ejercita el mismo camino que usan los consumidores: walker, transformadores
  y write-keys.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.json_exporter import dump_items_json, export_items_json
from cli import doctor, factory
from cli.ui_components import build_error_panel, build_room_panel, build_rooms_table
from core.config import AppSettings
from core.domain.models import DomainItem
from core.errors import MeetingsError

app = typer.Typer(no_args_is_help=True, help="Meetings API client: rooms listing and management.")
rooms_app = typer.Typer(no_args_is_help=True, help="List, inspect, create and update rooms.")
app.add_typer(rooms_app, name="rooms")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP requests and page fetches."),
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


def _run(coro: Any) -> Any:
    """Ejecuta una corrutina y traduce errores del SDK a salida + exit code."""

    try:
        return asyncio.run(coro)
    except MeetingsError as exc:
        _console.print(build_error_panel(exc))
        raise typer.Exit(code=1) from exc


def _print_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True))


async def _list_rooms(
    settings: AppSettings,
    *,
    page_size: int | None,
    limit: int | None,
    theme_id: str | None,
) -> list[DomainItem]:
    async with factory.make_client(settings) as client:
        if theme_id:
            walker = client.rooms.get_rooms_by_theme(theme_id, page_size=page_size)
        else:
            walker = client.rooms.get_rooms(page_size=page_size)
        return await walker.to_list(limit=limit)


@rooms_app.command("list")
def list_rooms(
    page_size: Optional[int] = typer.Option(None, "--page-size", min=1, max=1000, help="Page size hint."),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Stop after N rooms."),
    theme_id: Optional[str] = typer.Option(None, "--theme-id", help="Only rooms using this theme."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write rooms to a JSON file."),
) -> None:
    """List rooms, following pagination links until exhausted (or --limit)."""

    settings = AppSettings()
    rooms = _run(
        _list_rooms(
            settings,
            page_size=page_size or settings.default_page_size,
            limit=limit,
            theme_id=theme_id,
        )
    )

    if output is not None:
        path = export_items_json(items=rooms, output_path=output)
        _console.print(f"[green]Saved {len(rooms)} room(s) to:[/green] {path}")
    elif as_json:
        typer.echo(dump_items_json(rooms), nl=False)
    else:
        _console.print(build_rooms_table(rooms))


async def _get_room(settings: AppSettings, room_id: str) -> DomainItem:
    async with factory.make_client(settings) as client:
        return await client.rooms.get_room(room_id)


@rooms_app.command("get")
def get_room(
    room_id: str = typer.Argument(..., help="Room identifier."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a panel."),
) -> None:
    """Show a single room."""

    room = _run(_get_room(AppSettings(), room_id))
    if as_json:
        _print_json(room)
    else:
        _console.print(build_room_panel(room))


def _room_fields(
    *,
    display_name: str | None = None,
    room_type: str | None = None,
    expires_at: str | None = None,
    theme_id: str | None = None,
    metadata: str | None = None,
) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "displayName": display_name,
        "type": room_type,
        "expiresAt": expires_at,
        "themeId": theme_id,
        "metadata": metadata,
    }
    return {k: v for k, v in fields.items() if v is not None}


async def _create_room(settings: AppSettings, room: dict[str, Any]) -> DomainItem:
    async with factory.make_client(settings) as client:
        return await client.rooms.create_room(room)


@rooms_app.command("create")
def create_room(
    display_name: str = typer.Option(..., "--display-name", help="Room display name."),
    room_type: Optional[str] = typer.Option(None, "--type", help="instant | long_term"),
    expires_at: Optional[str] = typer.Option(None, "--expires-at", help="ISO-8601 expiry (long_term rooms)."),
    theme_id: Optional[str] = typer.Option(None, "--theme-id"),
    metadata: Optional[str] = typer.Option(None, "--metadata"),
) -> None:
    """Create a room."""

    room = _room_fields(
        display_name=display_name,
        room_type=room_type,
        expires_at=expires_at,
        theme_id=theme_id,
        metadata=metadata,
    )
    _print_json(_run(_create_room(AppSettings(), room)))


async def _update_room(settings: AppSettings, room_id: str, room: dict[str, Any]) -> DomainItem:
    async with factory.make_client(settings) as client:
        return await client.rooms.update_room(room_id, room)


@rooms_app.command("update")
def update_room(
    room_id: str = typer.Argument(..., help="Room identifier."),
    display_name: Optional[str] = typer.Option(None, "--display-name"),
    expires_at: Optional[str] = typer.Option(None, "--expires-at"),
    theme_id: Optional[str] = typer.Option(None, "--theme-id"),
    metadata: Optional[str] = typer.Option(None, "--metadata"),
) -> None:
    """Update writable fields of an existing room."""

    room = _room_fields(
        display_name=display_name,
        expires_at=expires_at,
        theme_id=theme_id,
        metadata=metadata,
    )
    if not room:
        raise typer.BadParameter("nothing to update: pass at least one field option")
    _print_json(_run(_update_room(AppSettings(), room_id, room)))


def run() -> None:
    app()
