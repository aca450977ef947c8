"""Read-only dashboard tabs: summary, projects, team and tasks."""

from datetime import datetime
from typing import Optional

import typer
from rich.table import Table

from ..exceptions import ProjectDashError
from . import app
from ._common import (
    build_dashboard,
    console,
    fail,
    member_table,
    print_json,
    project_table,
    task_table,
    to_plain,
    wants_json,
)


@app.command()
def summary(
    ctx: typer.Context,
    today: Optional[datetime] = typer.Option(
        None,
        "--today",
        help="Reference date for the 'since last month' figures",
        formats=["%Y-%m-%d"],
    ),
):
    """
    Show the overview stat cards.

    [bold cyan]Examples:[/bold cyan]

      projectdash summary

      projectdash summary --today 2025-10-15
    """
    dashboard = build_dashboard(ctx)
    result = dashboard.summary(today.date() if today else None)

    if wants_json(ctx):
        print_json(
            {
                "summary": vars(result),
                "cards": [vars(card) for card in result.cards()],
            }
        )
        return

    table = Table(show_header=True, show_lines=False, pad_edge=True)
    table.add_column("Metric", min_width=16)
    table.add_column("Value", justify="right")
    table.add_column("Change", style="dim")
    for card in result.cards():
        table.add_row(card.title, card.value, card.change)

    console.print()
    console.print("[bold cyan]PROJECT DASHBOARD[/bold cyan]")
    console.print(table)


@app.command()
def projects(ctx: typer.Context):
    """List projects with status, progress and team size."""
    dashboard = build_dashboard(ctx)
    items = dashboard.store.list_projects()

    if wants_json(ctx):
        print_json(items)
        return

    console.print(f"[bold cyan]PROJECTS[/bold cyan] -- {len(items)} total")
    console.print(project_table(items))


@app.command()
def team(ctx: typer.Context):
    """List team members with role, position and project."""
    dashboard = build_dashboard(ctx)

    if wants_json(ctx):
        print_json(dashboard.store.list_members())
        return

    console.print(f"[bold cyan]TEAM[/bold cyan] -- {len(dashboard.store.list_members())} members")
    console.print(member_table(dashboard.store))


@app.command()
def tasks(
    ctx: typer.Context,
    page: int = typer.Option(1, "--page", "-p", help="Page number (1-based)", min=1),
):
    """
    Show one page of the task table.

    [bold cyan]Examples:[/bold cyan]

      projectdash tasks

      projectdash tasks --page 2
    """
    dashboard = build_dashboard(ctx)
    try:
        result = dashboard.task_page(page)
    except ProjectDashError as e:
        fail(e, wants_json(ctx))

    if wants_json(ctx):
        print_json(
            {
                "page": result.number,
                "total_pages": result.total_pages,
                "total_items": result.total_items,
                "tasks": [
                    {**to_plain(t), "assignee_name": dashboard.store.resolve_assignee_name(t.assignee_id)}
                    for t in result.items
                ],
            }
        )
        return

    console.print(
        f"[bold cyan]TASKS[/bold cyan] -- page {result.number} of {result.total_pages}"
        f" ({result.total_items} total)"
    )
    console.print(task_table(dashboard.store, list(result.items)))
