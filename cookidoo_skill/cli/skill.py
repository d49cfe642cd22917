"""Operator commands: check credentials, add items and replay Alexa requests."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from cookidoo_skill.adapters.cookidoo_http import CookidooError
from cookidoo_skill.bootstrap import build_cookidoo_adapters, build_default_service_container
from cookidoo_skill.services.skill_handler import SkillIdMismatchError

console = Console()


async def _login() -> float:
    adapters = build_cookidoo_adapters()
    try:
        await adapters.auth.get_valid_token()
        token = adapters.cache.get()
        return token.remaining_seconds() if token is not None else 0.0
    finally:
        await adapters.client.aclose()


def login() -> None:
    """Authenticate against Cookidoo with the configured credentials."""
    try:
        remaining = asyncio.run(_login())
    except CookidooError as e:
        console.print(f"[red]Login failed:[/red] {e}")
        raise typer.Exit(1) from e

    table = Table(title="Cookidoo login")
    table.add_column("Status")
    table.add_column("Token valid for")
    table.add_row("[green]ok[/green]", f"{int(remaining)} s")
    console.print(table)


async def _add_item(item: str) -> tuple[bool, str]:
    services = build_default_service_container()
    try:
        if services.add_item is None:
            raise RuntimeError("AddItemService has not been configured.")
        result = await services.add_item.execute(item)
        return result.succeeded, result.message
    finally:
        await services.aclose()


def add_item(item: str = typer.Argument(..., help="Item to put on the shopping list")) -> None:
    """Add ITEM to the shopping list and print what Alexa would say."""
    succeeded, message = asyncio.run(_add_item(item))
    if not succeeded:
        console.print(f"[red]{message}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]{message}[/green]")


async def _invoke(payload: object) -> dict:
    services = build_default_service_container()
    try:
        return await services.require_skill_handler().handle_event(payload)
    finally:
        await services.aclose()


def invoke(
    request_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Saved Alexa request JSON"
    ),
) -> None:
    """Run a saved Alexa request through the skill and print the response JSON."""
    try:
        payload = json.loads(request_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]Error:[/red] {request_file} is not valid JSON: {e}")
        raise typer.Exit(1) from e

    try:
        response = asyncio.run(_invoke(payload))
    except SkillIdMismatchError as e:
        console.print(f"[red]Rejected:[/red] {e}")
        raise typer.Exit(1) from e
    console.print_json(data=response)


__all__ = ["add_item", "invoke", "login"]
