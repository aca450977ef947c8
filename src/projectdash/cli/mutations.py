"""Delete commands: run a cascade against the seed data and show the result."""

import typer
from rich.markup import escape

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
    wants_json,
)


@app.command("delete-project")
def delete_project(
    ctx: typer.Context,
    project_id: str = typer.Argument(..., help="Id of the project to delete"),
):
    """
    Delete a project, its tasks, and unassign its members.

    [bold cyan]Examples:[/bold cyan]

      projectdash delete-project p-001
    """
    dashboard = build_dashboard(ctx)
    events = []
    dashboard.store.subscribe(events.append)

    try:
        removed = dashboard.remove_project(project_id)
    except ProjectDashError as e:
        fail(e, wants_json(ctx))

    event = events[-1]
    if wants_json(ctx):
        print_json(
            {
                "deleted": removed,
                "deleted_task_ids": event.deleted_task_ids,
                "unassigned_member_ids": event.unassigned_member_ids,
                "snapshot": vars(dashboard.store.snapshot()),
            }
        )
        return

    console.print(
        f"[bold red]Deleted[/bold red] {escape(removed.name)} ({removed.id}): "
        f"{len(event.deleted_task_ids)} task(s) removed, "
        f"{len(event.unassigned_member_ids)} member(s) unassigned"
    )
    _print_collections(dashboard)


@app.command("delete-member")
def delete_member(
    ctx: typer.Context,
    user_id: str = typer.Argument(..., help="Id of the member to delete"),
):
    """
    Delete a team member and unassign their tasks.

    [bold cyan]Examples:[/bold cyan]

      projectdash delete-member u-002
    """
    dashboard = build_dashboard(ctx)
    events = []
    dashboard.store.subscribe(events.append)

    try:
        removed = dashboard.remove_member(user_id)
    except ProjectDashError as e:
        fail(e, wants_json(ctx))

    event = events[-1]
    if wants_json(ctx):
        print_json(
            {
                "deleted": removed,
                "unassigned_task_ids": event.unassigned_task_ids,
                "pruned_project_ids": event.pruned_project_ids,
                "snapshot": vars(dashboard.store.snapshot()),
            }
        )
        return

    console.print(
        f"[bold red]Deleted[/bold red] {escape(removed.name)} ({removed.user_id}): "
        f"{len(event.unassigned_task_ids)} task(s) unassigned"
    )
    _print_collections(dashboard)


def _print_collections(dashboard) -> None:
    store = dashboard.store
    console.print()
    console.print("[bold cyan]PROJECTS[/bold cyan]")
    console.print(project_table(store.list_projects()))
    console.print("[bold cyan]TEAM[/bold cyan]")
    console.print(member_table(store))
    console.print("[bold cyan]TASKS[/bold cyan]")
    console.print(task_table(store, store.list_tasks()))
