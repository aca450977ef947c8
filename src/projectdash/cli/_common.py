"""Shared CLI helpers."""

import json
from dataclasses import asdict
from datetime import date
from enum import Enum
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import DashboardConfig
from ..dashboard import Dashboard
from ..exceptions import ProjectDashError
from ..store import Member, Project, RelationalStore, Task

console = Console()


def build_dashboard(ctx: typer.Context) -> Dashboard:
    """Fresh seeded dashboard for this invocation; nothing persists between runs."""
    config = ctx.obj.get("config") or DashboardConfig()
    return Dashboard(RelationalStore.seeded(), config)


def wants_json(ctx: typer.Context) -> bool:
    return bool(ctx.obj.get("json", False))


def to_plain(value: Any) -> Any:
    """Convert records, enums and dates into JSON-ready values."""
    if isinstance(value, (Project, Member, Task)):
        return to_plain(asdict(value))
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    return value


def print_json(payload: Any) -> None:
    print(json.dumps(to_plain(payload), indent=2, ensure_ascii=False))


def fail(error: ProjectDashError, as_json: bool = False) -> NoReturn:
    """Report ``error`` (red line, or a JSON object on stdout) and exit 1."""
    if as_json:
        print_json(error.to_dict())
    else:
        console.print(f"[red]Error:[/red] {escape(str(error))}")
    raise typer.Exit(1)


def project_table(projects: list[Project]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=True)
    table.add_column("ID", style="dim")
    table.add_column("Name", min_width=16)
    table.add_column("Status")
    table.add_column("Progress", justify="right")
    table.add_column("Team", justify="right")
    table.add_column("Category")
    table.add_column("Priority")
    table.add_column("Created")
    for p in projects:
        table.add_row(
            p.id,
            p.name,
            p.status.label,
            f"{p.progress}%",
            str(len(p.team_member_ids)),
            p.category.value,
            p.priority.value,
            p.created_at.isoformat(),
        )
    return table


def member_table(store: RelationalStore) -> Table:
    projects = {p.id: p.name for p in store.list_projects()}
    table = Table(show_header=True, show_lines=False, pad_edge=True)
    table.add_column("ID", style="dim")
    table.add_column("Name", min_width=14)
    table.add_column("Role")
    table.add_column("Position")
    table.add_column("Email")
    table.add_column("Project")
    table.add_column("Status")
    for m in store.list_members():
        table.add_row(
            m.user_id,
            m.name,
            m.role.label,
            m.position,
            m.email,
            projects.get(m.project_id, "-") if m.project_id else "-",
            "[green]Active[/green]" if m.is_active else "[dim]Away[/dim]",
        )
    return table


def task_table(store: RelationalStore, tasks: list[Task]) -> Table:
    projects = {p.id: p.name for p in store.list_projects()}
    table = Table(show_header=True, show_lines=False, pad_edge=True)
    table.add_column("ID", style="dim")
    table.add_column("Description", min_width=18)
    table.add_column("Project")
    table.add_column("Assignee")
    table.add_column("Status")
    table.add_column("Priority")
    table.add_column("Deadline")
    for t in tasks:
        table.add_row(
            t.id,
            t.description,
            projects.get(t.project_id, t.project_id),
            store.resolve_assignee_name(t.assignee_id),
            t.status.label,
            t.priority.label,
            t.deadline.isoformat(),
        )
    return table
