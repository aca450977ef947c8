"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="projectdash",
    help="ProjectDash - projects, team and tasks dashboard",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .main import main as _main_callback  # noqa: F401, E402
from .views import summary as _summary, projects as _projects, team as _team, tasks as _tasks  # noqa: F401, E402
from .mutations import delete_project as _delete_project, delete_member as _delete_member  # noqa: F401, E402
from .settings import settings as _settings  # noqa: F401, E402
