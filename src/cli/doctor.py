"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from cli import factory
from cli.ui_components import print_banner
from core.config import AppSettings, write_user_env_vars
from core.errors import MeetingsError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    """Pide una página mínima de rooms para validar URL + token."""

    try:
        async with factory.make_client(settings) as client:
            walker = client.rooms.get_rooms(page_size=1)
            rooms = await walker.to_list(limit=1)
        total = walker.total_items
        return True, f"{len(rooms)} room(s) on first page, total_items={total if total is not None else '?'}"
    except MeetingsError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    print_banner(_console)

    table = Table(title="meetings-sdk Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("API root", "OK", settings.api_root)
    if settings.api_token:
        table.add_row("API token", "OK", "Bearer token configured")
    else:
        table.add_row("API token", "MISSING", "Set MEETINGS_API_TOKEN or run `meetings doctor setup`")
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    ok_api, detail_api = asyncio.run(_check_api(settings))
    table.add_row("Rooms endpoint", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    base_url = typer.prompt("API base URL", default=AppSettings().api_base_url, show_default=True).strip()
    token = typer.prompt("API token (JWT)", hide_input=True, confirmation_prompt=False).strip()

    if not base_url or not token:
        raise typer.BadParameter("base_url and token are required")

    env_path = write_user_env_vars(
        {
            "MEETINGS_API_BASE_URL": base_url,
            "MEETINGS_API_TOKEN": token,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
