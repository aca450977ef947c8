"""Settings command: validate and display general preferences."""

from typing import Optional

import click
import typer
from rich.table import Table

from ..exceptions import ProjectDashError
from . import app
from ._common import build_dashboard, console, fail, print_json, wants_json


@app.command()
def settings(
    ctx: typer.Context,
    theme: Optional[str] = typer.Option(
        None,
        "--theme",
        help="Colour theme",
        click_type=click.Choice(["light", "dark", "system"], case_sensitive=False),
    ),
    language: Optional[str] = typer.Option(
        None,
        "--language",
        help="Interface language",
        click_type=click.Choice(["es", "en", "pt"], case_sensitive=False),
    ),
    email_notifications: Optional[bool] = typer.Option(
        None,
        "--email-notifications/--no-email-notifications",
        help="Send email notifications",
    ),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="Backend API URL (https only)"),
):
    """
    Validate settings changes and show the resulting preferences.

    [bold cyan]Examples:[/bold cyan]

      projectdash settings

      projectdash settings --theme dark --api-url https://api.example.com/v2
    """
    dashboard = build_dashboard(ctx)

    changes = {}
    if theme is not None:
        changes["theme"] = theme.lower()
    if language is not None:
        changes["default_language"] = language.lower()
    if email_notifications is not None:
        changes["email_notifications"] = email_notifications
    if api_url is not None:
        changes["api_url"] = api_url

    try:
        config = dashboard.save_settings(**changes) if changes else dashboard.config
    except ProjectDashError as e:
        fail(e, wants_json(ctx))

    current = vars(config.settings)
    if wants_json(ctx):
        print_json(current)
        return

    table = Table(show_header=True, show_lines=False, pad_edge=True)
    table.add_column("Setting", min_width=20)
    table.add_column("Value")
    for key, value in current.items():
        table.add_row(key, str(value))

    if changes:
        console.print("[green]Settings saved.[/green]")
    console.print(table)
