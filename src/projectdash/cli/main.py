"""Global options callback."""

from pathlib import Path
from typing import Optional

import typer

from ..config import load_config
from ..exceptions import ProjectDashError
from ..logging_config import setup_logging
from . import app
from ._common import console, fail


@app.callback(invoke_without_command=True, no_args_is_help=False)
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log store activity, including cascades",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append logs to this file",
        hidden=True,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Manage projects, team members and tasks from the terminal.

    Every run starts from the built-in seed data; changes are not saved.

    [bold cyan]Examples:[/bold cyan]

      projectdash summary

      projectdash tasks --page 1

      projectdash --verbose delete-project p-001

      projectdash --json team
    """
    from .. import __version__

    if version:
        console.print(f"[bold cyan]ProjectDash[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    try:
        resolved = load_config(config_file=config, verbose=verbose, quiet=quiet)
    except ProjectDashError as e:
        fail(e, json_output)

    setup_logging(resolved, log_file=str(log_file) if log_file else None)

    ctx.ensure_object(dict)
    ctx.obj["config"] = resolved
    ctx.obj["json"] = json_output

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
