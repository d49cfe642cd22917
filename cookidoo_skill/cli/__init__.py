"""CLI commands for the Cookidoo skill."""

import typer

from cookidoo_skill.cli.skill import add_item, invoke, login

main_app = typer.Typer(
    name="cookidoo-skill",
    help="Cookidoo shopping list skill CLI",
    no_args_is_help=True,
)
main_app.command("login")(login)
main_app.command("add")(add_item)
main_app.command("invoke")(invoke)


def main() -> None:
    """Entry point for the CLI."""
    main_app()


__all__ = ["main", "main_app"]
