"""RelationalStore: projects, members and tasks with referential integrity.

The store is the single source of truth for dashboard data. It holds three
insertion-ordered collections and enforces the reference rules between them
on every mutation:

    - Task.project_id always names an existing project. Deleting a project
      deletes its tasks.
    - Task.assignee_id is absent or names an existing member. Deleting a
      member unassigns its tasks.
    - Member.project_id is absent or names an existing project. Deleting a
      project unassigns its members.
    - Project.team_member_ids only names existing members. Deleting a
      member drops it from every team list.

Every mutation computes the complete next state before swapping it in under
the store lock, so a cascade is never observable half-applied and a failed
operation leaves nothing behind. Events are published before the lock is
released, so listeners see them in commit order.

Usage:
    from projectdash.store import RelationalStore, TaskInput

    store = RelationalStore.seeded()
    store.delete_project("p-001")
    store.create_task(TaskInput(description="Review PR", project_id="p-002",
                                deadline="2025-12-01", priority="Alta"))
    store.count_active_members()
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Callable, Iterable, Optional

from ..exceptions import NotFoundError, ValidationError
from .entities import (
    Member,
    MemberInput,
    MemberRole,
    Project,
    ProjectCategory,
    ProjectInput,
    ProjectPriority,
    ProjectStatus,
    Task,
    TaskInput,
    TaskPriority,
    TaskStatus,
)
from .events import ChangeVerb, EntityKind, EventBus, Listener, StoreEvent
from .validation import (
    optional_ref,
    require_date,
    require_enum,
    require_progress,
    require_text,
)

logger = logging.getLogger(__name__)

UNASSIGNED = "Unassigned"


def generate_id(prefix: str) -> str:
    """Collision-resistant id that keeps the ``p-``/``u-``/``t-`` convention."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class StoreSnapshot:
    """Immutable view of all three collections, in listing order."""

    projects: tuple[Project, ...]
    members: tuple[Member, ...]
    tasks: tuple[Task, ...]


class RelationalStore:
    """In-memory store for projects, members and tasks.

    Args:
        projects, members, tasks: Initial records. Ids must be unique and
            references must resolve.
        clock:       Returns "today"; used for ``Project.created_at``.
        id_factory:  Maps a prefix to a fresh id.
    """

    def __init__(
        self,
        projects: Iterable[Project] = (),
        members: Iterable[Member] = (),
        tasks: Iterable[Task] = (),
        clock: Callable[[], date] = date.today,
        id_factory: Callable[[str], str] = generate_id,
    ) -> None:
        self._lock = threading.RLock()
        self._clock = clock
        self._id_factory = id_factory
        self._events = EventBus()

        self._projects: dict[str, Project] = _index(projects, "project", lambda p: p.id)
        self._members: dict[str, Member] = _index(members, "member", lambda m: m.user_id)
        self._tasks: dict[str, Task] = _index(tasks, "task", lambda t: t.id)

        problems = self.integrity_violations()
        if problems:
            raise ValidationError("store", "initial data", "; ".join(problems))

    @classmethod
    def seeded(cls, **kwargs: Any) -> "RelationalStore":
        """A store loaded with the fixed seed dataset."""
        from .seed import SEED_MEMBERS, SEED_PROJECTS, SEED_TASKS

        return cls(SEED_PROJECTS, SEED_MEMBERS, SEED_TASKS, **kwargs)

    # -----------------------------------------------------------------
    # Subscriptions
    # -----------------------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        """Call ``listener`` with a StoreEvent after each committed mutation."""
        self._events.subscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._events.unsubscribe(listener)

    # -----------------------------------------------------------------
    # Projects
    # -----------------------------------------------------------------

    def create_project(self, data: ProjectInput) -> Project:
        """Add a project. It always starts Planned at 0% progress."""
        with self._lock:
            fields = self._project_fields(data)
            project = Project(
                id=self._fresh_id("p", self._projects),
                status=ProjectStatus.PLANNED,
                progress=0,
                created_at=self._clock(),
                **fields,
            )
            self._projects = {**self._projects, project.id: project}
            logger.debug("Created project %s (%s)", project.id, project.name)
            self._events.publish(StoreEvent(EntityKind.PROJECT, ChangeVerb.CREATED, project.id))
        return project

    def update_project(self, project_id: str, data: ProjectInput) -> Project:
        """Replace a project's editable fields; id and created_at are kept."""
        with self._lock:
            current = self.get_project(project_id)
            fields = self._project_fields(data)
            project = replace(
                current,
                status=require_enum(ProjectStatus, data.status, "project", "status"),
                progress=require_progress(data.progress),
                **fields,
            )
            self._projects = {**self._projects, project_id: project}
            logger.debug("Updated project %s", project_id)
            self._events.publish(StoreEvent(EntityKind.PROJECT, ChangeVerb.UPDATED, project_id))
        return project

    def delete_project(self, project_id: str) -> Project:
        """Remove a project, delete its tasks and unassign its members."""
        with self._lock:
            removed = self.get_project(project_id)

            projects = {k: p for k, p in self._projects.items() if k != project_id}
            tasks = {k: t for k, t in self._tasks.items() if t.project_id != project_id}
            deleted_tasks = tuple(k for k in self._tasks if k not in tasks)

            members: dict[str, Member] = {}
            unassigned: list[str] = []
            for k, m in self._members.items():
                if m.project_id == project_id:
                    m = replace(m, project_id=None)
                    unassigned.append(k)
                members[k] = m

            self._projects, self._tasks, self._members = projects, tasks, members
            logger.info(
                "Deleted project %s: removed %d task(s), unassigned %d member(s)",
                project_id,
                len(deleted_tasks),
                len(unassigned),
            )
            self._events.publish(
                StoreEvent(
                    EntityKind.PROJECT,
                    ChangeVerb.DELETED,
                    project_id,
                    deleted_task_ids=deleted_tasks,
                    unassigned_member_ids=tuple(unassigned),
                )
            )
        return removed

    def _project_fields(self, data: ProjectInput) -> dict[str, Any]:
        team: list[str] = []
        for user_id in data.team_member_ids or ():
            if user_id not in self._members:
                raise ValidationError(
                    "project", "team_member_ids", f"references unknown member {user_id!r}"
                )
            if user_id not in team:
                team.append(user_id)

        return {
            "name": require_text(data.name, "project", "name"),
            "description": data.description or "",
            "category": require_enum(ProjectCategory, data.category, "project", "category"),
            "priority": require_enum(ProjectPriority, data.priority, "project", "priority"),
            "team_member_ids": tuple(team),
        }

    # -----------------------------------------------------------------
    # Members
    # -----------------------------------------------------------------

    def create_member(self, data: MemberInput) -> Member:
        with self._lock:
            member = self._build_member(self._fresh_id("u", self._members), data)
            self._members = {**self._members, member.user_id: member}
            logger.debug("Created member %s (%s)", member.user_id, member.name)
            self._events.publish(StoreEvent(EntityKind.MEMBER, ChangeVerb.CREATED, member.user_id))
        return member

    def update_member(self, user_id: str, data: MemberInput) -> Member:
        """Replace the full member record stored under ``user_id``."""
        with self._lock:
            self.get_member(user_id)
            member = self._build_member(user_id, data)
            self._members = {**self._members, user_id: member}
            logger.debug("Updated member %s", user_id)
            self._events.publish(StoreEvent(EntityKind.MEMBER, ChangeVerb.UPDATED, user_id))
        return member

    def delete_member(self, user_id: str) -> Member:
        """Remove a member, unassign its tasks and drop it from team lists."""
        with self._lock:
            removed = self.get_member(user_id)

            members = {k: m for k, m in self._members.items() if k != user_id}

            tasks: dict[str, Task] = {}
            unassigned: list[str] = []
            for k, t in self._tasks.items():
                if t.assignee_id == user_id:
                    t = replace(t, assignee_id=None)
                    unassigned.append(k)
                tasks[k] = t

            projects: dict[str, Project] = {}
            pruned: list[str] = []
            for k, p in self._projects.items():
                if user_id in p.team_member_ids:
                    p = replace(
                        p, team_member_ids=tuple(u for u in p.team_member_ids if u != user_id)
                    )
                    pruned.append(k)
                projects[k] = p

            self._members, self._tasks, self._projects = members, tasks, projects
            logger.info(
                "Deleted member %s: unassigned %d task(s), left %d team(s)",
                user_id,
                len(unassigned),
                len(pruned),
            )
            self._events.publish(
                StoreEvent(
                    EntityKind.MEMBER,
                    ChangeVerb.DELETED,
                    user_id,
                    unassigned_task_ids=tuple(unassigned),
                    pruned_project_ids=tuple(pruned),
                )
            )
        return removed

    def _build_member(self, user_id: str, data: MemberInput) -> Member:
        project_id = optional_ref(data.project_id)
        if project_id is not None and project_id not in self._projects:
            raise ValidationError("member", "project_id", f"references unknown project {project_id!r}")

        return Member(
            user_id=user_id,
            name=require_text(data.name, "member", "name"),
            email=require_text(data.email, "member", "email"),
            position=require_text(data.position, "member", "position"),
            birthdate=require_date(data.birthdate, "member", "birthdate"),
            phone=data.phone or "",
            role=require_enum(MemberRole, data.role, "member", "role"),
            project_id=project_id,
            is_active=bool(data.is_active),
        )

    # -----------------------------------------------------------------
    # Tasks
    # -----------------------------------------------------------------

    def create_task(self, data: TaskInput) -> Task:
        with self._lock:
            task = self._build_task(self._fresh_id("t", self._tasks), data)
            self._tasks = {**self._tasks, task.id: task}
            logger.debug("Created task %s in project %s", task.id, task.project_id)
            self._events.publish(StoreEvent(EntityKind.TASK, ChangeVerb.CREATED, task.id))
        return task

    def update_task(self, task_id: str, data: TaskInput) -> Task:
        """Replace the full task record stored under ``task_id``."""
        with self._lock:
            self.get_task(task_id)
            task = self._build_task(task_id, data)
            self._tasks = {**self._tasks, task_id: task}
            logger.debug("Updated task %s", task_id)
            self._events.publish(StoreEvent(EntityKind.TASK, ChangeVerb.UPDATED, task_id))
        return task

    def delete_task(self, task_id: str) -> Task:
        # Tasks are leaves: nothing else references them
        with self._lock:
            removed = self.get_task(task_id)
            self._tasks = {k: t for k, t in self._tasks.items() if k != task_id}
            logger.debug("Deleted task %s", task_id)
            self._events.publish(StoreEvent(EntityKind.TASK, ChangeVerb.DELETED, task_id))
        return removed

    def _build_task(self, task_id: str, data: TaskInput) -> Task:
        description = require_text(data.description, "task", "description")
        project_id = require_text(data.project_id, "task", "project_id")
        if project_id not in self._projects:
            raise ValidationError("task", "project_id", f"references unknown project {project_id!r}")

        assignee_id = optional_ref(data.assignee_id)
        if assignee_id is not None and assignee_id not in self._members:
            raise ValidationError("task", "assignee_id", f"references unknown member {assignee_id!r}")

        return Task(
            id=task_id,
            description=description,
            project_id=project_id,
            status=require_enum(TaskStatus, data.status, "task", "status"),
            priority=require_enum(TaskPriority, data.priority, "task", "priority"),
            deadline=require_date(data.deadline, "task", "deadline"),
            assignee_id=assignee_id,
        )

    # -----------------------------------------------------------------
    # Lookups and listings
    # -----------------------------------------------------------------

    def get_project(self, project_id: str) -> Project:
        try:
            return self._projects[project_id]
        except KeyError:
            raise NotFoundError("project", project_id)

    def get_member(self, user_id: str) -> Member:
        try:
            return self._members[user_id]
        except KeyError:
            raise NotFoundError("member", user_id)

    def get_task(self, task_id: str) -> Task:
        try:
            return self._tasks[task_id]
        except KeyError:
            raise NotFoundError("task", task_id)

    def list_projects(self) -> list[Project]:
        return list(self._projects.values())

    def list_members(self) -> list[Member]:
        return list(self._members.values())

    def list_tasks(self) -> list[Task]:
        return list(self._tasks.values())

    def snapshot(self) -> StoreSnapshot:
        with self._lock:
            return StoreSnapshot(
                projects=tuple(self._projects.values()),
                members=tuple(self._members.values()),
                tasks=tuple(self._tasks.values()),
            )

    # -----------------------------------------------------------------
    # Derived queries (pure, recomputed on every call)
    # -----------------------------------------------------------------

    def count_tasks_by_status(self, status: Any) -> int:
        wanted = require_enum(TaskStatus, status, "task", "status")
        return sum(1 for t in self._tasks.values() if t.status == wanted)

    def count_active_members(self) -> int:
        return sum(1 for m in self._members.values() if m.is_active)

    def count_projects_created_since(self, since: date) -> int:
        """Projects whose ``created_at`` is on or after ``since``."""
        return sum(1 for p in self._projects.values() if p.created_at >= since)

    def list_tasks_for_project(self, project_id: str) -> list[Task]:
        return [t for t in self._tasks.values() if t.project_id == project_id]

    def list_members_for_project(self, project_id: str) -> list[Member]:
        """Members whose own ``project_id`` points at the project."""
        return [m for m in self._members.values() if m.project_id == project_id]

    def team_for_project(self, project_id: str) -> list[Member]:
        """Members listed in the project's ``team_member_ids``, in list order."""
        with self._lock:
            project = self.get_project(project_id)
            return [self._members[u] for u in project.team_member_ids if u in self._members]

    def resolve_assignee_name(self, user_id: Optional[str]) -> str:
        """Member name, or ``"Unassigned"`` when absent or unknown."""
        if user_id is None:
            return UNASSIGNED
        member = self._members.get(user_id)
        return member.name if member else UNASSIGNED

    def integrity_violations(self) -> list[str]:
        """Describe every dangling reference; empty when the store is consistent."""
        problems: list[str] = []
        with self._lock:
            for t in self._tasks.values():
                if t.project_id not in self._projects:
                    problems.append(f"task {t.id} references missing project {t.project_id}")
                if t.assignee_id is not None and t.assignee_id not in self._members:
                    problems.append(f"task {t.id} references missing member {t.assignee_id}")
            for m in self._members.values():
                if m.project_id is not None and m.project_id not in self._projects:
                    problems.append(f"member {m.user_id} references missing project {m.project_id}")
            for p in self._projects.values():
                for u in p.team_member_ids:
                    if u not in self._members:
                        problems.append(f"project {p.id} team references missing member {u}")
            return problems

    # -----------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------

    def _fresh_id(self, prefix: str, existing: dict[str, Any]) -> str:
        new_id = self._id_factory(prefix)
        while new_id in existing:
            new_id = self._id_factory(prefix)
        return new_id


def _index(records: Iterable[Any], entity: str, key: Callable[[Any], str]) -> dict[str, Any]:
    indexed: dict[str, Any] = {}
    for record in records:
        record_id = key(record)
        if record_id in indexed:
            raise ValidationError(entity, "id", f"is duplicated: {record_id!r}")
        indexed[record_id] = record
    return indexed
