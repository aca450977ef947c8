"""In-memory relational store for projects, members and tasks."""

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
from .events import ChangeVerb, EntityKind, StoreEvent
from .store import UNASSIGNED, RelationalStore, StoreSnapshot, generate_id

__all__ = [
    "RelationalStore",
    "StoreSnapshot",
    "StoreEvent",
    "EntityKind",
    "ChangeVerb",
    "UNASSIGNED",
    "generate_id",
    "Project",
    "ProjectInput",
    "ProjectStatus",
    "ProjectCategory",
    "ProjectPriority",
    "Member",
    "MemberInput",
    "MemberRole",
    "Task",
    "TaskInput",
    "TaskStatus",
    "TaskPriority",
]
