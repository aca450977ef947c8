"""Dashboard controller: the presentation layer's single door into the store.

The dashboard shows a loading state for a fixed delay before a mutation is
reflected. That latency lives here, not in the store. Mutations are
serialized by a lock held across the delay and the store call, so two
mutations can never interleave against the same record.
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import date
from typing import Any, Callable, Optional, TypeVar

from .config import DashboardConfig
from .metrics import DashboardSummary, StatCard, summarize
from .pagination import Page, paginate
from .store import (
    Member,
    MemberInput,
    Project,
    ProjectInput,
    RelationalStore,
    Task,
    TaskInput,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")


class Dashboard:
    """Wraps a :class:`RelationalStore` with the dashboard's UI behaviour.

    Args:
        store:  The backing store.
        config: Dashboard configuration (page size, delay, card factors).
        sleep:  Delay function; tests pass a no-op or a recorder.
    """

    def __init__(
        self,
        store: RelationalStore,
        config: Optional[DashboardConfig] = None,
        sleep: Callable[[float], Any] = time.sleep,
    ) -> None:
        self.store = store
        self.config = config or DashboardConfig()
        self._sleep = sleep
        self._mutation_lock = threading.Lock()
        self._loading = False

    @property
    def loading(self) -> bool:
        """True while a mutation is pending behind the simulated delay."""
        return self._loading

    # -- mutations ---------------------------------------------------------

    def add_project(self, data: ProjectInput) -> Project:
        return self._mutate("create project", self.store.create_project, data)

    def edit_project(self, project_id: str, data: ProjectInput) -> Project:
        return self._mutate("update project", self.store.update_project, project_id, data)

    def remove_project(self, project_id: str) -> Project:
        return self._mutate("delete project", self.store.delete_project, project_id)

    def add_member(self, data: MemberInput) -> Member:
        return self._mutate("create member", self.store.create_member, data)

    def edit_member(self, user_id: str, data: MemberInput) -> Member:
        return self._mutate("update member", self.store.update_member, user_id, data)

    def remove_member(self, user_id: str) -> Member:
        return self._mutate("delete member", self.store.delete_member, user_id)

    def add_task(self, data: TaskInput) -> Task:
        return self._mutate("create task", self.store.create_task, data)

    def edit_task(self, task_id: str, data: TaskInput) -> Task:
        return self._mutate("update task", self.store.update_task, task_id, data)

    def remove_task(self, task_id: str) -> Task:
        return self._mutate("delete task", self.store.delete_task, task_id)

    def save_settings(self, **changes: Any) -> DashboardConfig:
        """Validate and apply settings form values.

        Raises:
            InvalidConfigError: If a value is rejected; current settings are kept.
        """
        self.config = self.config.with_settings(**changes)
        logger.info("Settings saved: %s", self.config.settings)
        return self.config

    # -- views ---------------------------------------------------------------

    def summary(self, today: Optional[date] = None) -> DashboardSummary:
        return summarize(self.store, self.config, today=today)

    def stat_cards(self, today: Optional[date] = None) -> list[StatCard]:
        return self.summary(today).cards()

    def task_page(self, page: int = 1) -> Page[Task]:
        return paginate(self.store.list_tasks(), page, self.config.page_size)

    def _mutate(self, action: str, operation: Callable[..., R], *args: Any) -> R:
        with self._mutation_lock:
            self._loading = True
            try:
                delay = self.config.mutation_delay_seconds
                if delay:
                    logger.debug("Delaying %s by %.3fs", action, delay)
                    self._sleep(delay)
                return operation(*args)
            finally:
                self._loading = False
