"""
ProjectDash - In-Memory Project Management Dashboard

Projects, team members and tasks held in a process-local relational store
that keeps references consistent: deleting a project removes its tasks and
unassigns its members, deleting a member unassigns its tasks.
"""

__version__ = "0.1.0"

from .config import DashboardConfig, SettingsConfig, load_config
from .dashboard import Dashboard
from .exceptions import NotFoundError, ProjectDashError, ValidationError
from .store import RelationalStore

__all__ = [
    "RelationalStore",  # Core store
    "Dashboard",  # Presentation-layer controller
    "DashboardConfig",
    "SettingsConfig",
    "load_config",
    "ProjectDashError",
    "ValidationError",
    "NotFoundError",
]
