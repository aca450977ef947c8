"""Entity model for the dashboard store.

Three kinds of record live in the store:

    Project  <──project_id──  Task  ──assignee_id──>  Member
       ^                                                 │
       └──────────────────project_id─────────────────────┘

Projects also carry a ``team_member_ids`` list that is kept alongside (not
derived from) ``Member.project_id``.

Records are frozen: every mutation in the store builds a replacement
instance, so a record handed to a caller never changes underneath it.
Input records (``ProjectInput`` etc.) are the loose, mutable shape that forms
and callers fill in; the store validates and normalizes them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional


def _normalize(label: str) -> str:
    return re.sub(r"[\s_/\-]+", "", label.strip().lower())


class LabeledEnum(str, Enum):
    """String enum that also accepts display labels and legacy aliases."""

    @property
    def label(self) -> str:
        """Human-readable label, e.g. ``In Progress``."""
        return _LABELS.get(type(self).__name__, {}).get(self.value, self.value)

    @classmethod
    def parse(cls, value: Any) -> "LabeledEnum":
        """Resolve ``value`` to a member.

        Matches, case- and separator-insensitively, the member name, its
        value, its label, or one of its Spanish display labels.

        Raises:
            ValueError: If nothing matches.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{value!r} is not a valid {cls.__name__}")

        key = _normalize(value)
        aliases = _ALIASES.get(cls.__name__, {})
        if key in aliases:
            return cls(aliases[key])
        for member in cls:
            if key in (_normalize(member.name), _normalize(member.value), _normalize(member.label)):
                return member
        raise ValueError(f"{value!r} is not a valid {cls.__name__}")


class ProjectStatus(LabeledEnum):
    PLANNED = "Planned"
    IN_PROGRESS = "InProgress"
    IN_REVIEW = "InReview"
    COMPLETED = "Completed"


class ProjectCategory(LabeledEnum):
    WEB = "web"
    MOBILE = "mobile"
    DESIGN = "design"
    MARKETING = "marketing"
    OTHER = "other"


class ProjectPriority(LabeledEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class MemberRole(LabeledEnum):
    FRONTEND_DEVELOPER = "FrontendDeveloper"
    BACKEND_DEVELOPER = "BackendDeveloper"
    UIUX_DESIGNER = "UIUXDesigner"
    DEVOPS_ENGINEER = "DevOpsEngineer"
    PROJECT_MANAGER = "ProjectManager"


class TaskStatus(LabeledEnum):
    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    BLOCKED = "Blocked"


class TaskPriority(LabeledEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


# Display labels keyed by enum class name, then member value.
_LABELS: dict[str, dict[str, str]] = {
    "ProjectStatus": {
        "InProgress": "In Progress",
        "InReview": "In Review",
    },
    "MemberRole": {
        "FrontendDeveloper": "Frontend Developer",
        "BackendDeveloper": "Backend Developer",
        "UIUXDesigner": "UI/UX Designer",
        "DevOpsEngineer": "DevOps Engineer",
        "ProjectManager": "Project Manager",
    },
    "TaskStatus": {
        "InProgress": "In Progress",
    },
}

# Spanish display labels, normalized.
_ALIASES: dict[str, dict[str, str]] = {
    "ProjectStatus": {
        "planificado": "Planned",
        "enprogreso": "InProgress",
        "enrevisión": "InReview",
        "enrevision": "InReview",
        "completado": "Completed",
    },
    "TaskStatus": {
        "pendiente": "Pending",
        "enprogreso": "InProgress",
        "completado": "Completed",
        "bloqueado": "Blocked",
    },
    "TaskPriority": {
        "baja": "Low",
        "media": "Medium",
        "alta": "High",
        "urgente": "Urgent",
    },
}


@dataclass(frozen=True)
class Project:
    """A project. ``status`` and ``progress`` start at Planned / 0."""

    id: str
    name: str
    description: str
    status: ProjectStatus
    progress: int
    team_member_ids: tuple[str, ...]
    category: ProjectCategory
    priority: ProjectPriority
    created_at: date


@dataclass(frozen=True)
class Member:
    """A team member, optionally assigned to one project."""

    user_id: str
    name: str
    email: str
    position: str
    phone: str
    role: MemberRole
    birthdate: date
    project_id: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class Task:
    """A task. Always belongs to a project; optionally assigned to a member."""

    id: str
    description: str
    project_id: str
    status: TaskStatus
    priority: TaskPriority
    deadline: date
    assignee_id: Optional[str] = None


@dataclass
class ProjectInput:
    """Caller-supplied project fields (everything except id and created_at).

    ``status`` and ``progress`` are ignored on create and honoured on update.
    """

    name: str = ""
    description: str = ""
    category: Any = ""
    priority: Any = ""
    team_member_ids: list[str] = field(default_factory=list)
    status: Any = ProjectStatus.PLANNED
    progress: int = 0


@dataclass
class MemberInput:
    name: str = ""
    email: str = ""
    position: str = ""
    birthdate: Any = ""
    phone: str = ""
    role: Any = MemberRole.FRONTEND_DEVELOPER
    project_id: Optional[str] = None
    is_active: bool = True


@dataclass
class TaskInput:
    description: str = ""
    project_id: str = ""
    deadline: Any = ""
    status: Any = TaskStatus.PENDING
    priority: Any = TaskPriority.MEDIUM
    assignee_id: Optional[str] = None
