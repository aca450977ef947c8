"""Copy-on-edit form state.

A form works on a :class:`Draft`, a plain dict copy of the record's editable
fields. Edits never touch the store; ``commit`` hands the copy to the
matching create/update operation and ``discard`` throws it away.
"""

from __future__ import annotations

import copy
from dataclasses import asdict, fields
from typing import Any, Optional, Union

from .exceptions import ProjectDashError, StoreError
from .store import (
    EntityKind,
    Member,
    MemberInput,
    Project,
    ProjectInput,
    RelationalStore,
    Task,
    TaskInput,
)

Entity = Union[Project, Member, Task]

_INPUTS = {
    EntityKind.PROJECT: ProjectInput,
    EntityKind.MEMBER: MemberInput,
    EntityKind.TASK: TaskInput,
}


class DraftClosedError(ProjectDashError):
    """Raised when a committed or discarded draft is used again."""

    def __init__(self, kind: EntityKind):
        super().__init__(f"{kind.value} draft is closed", details={"entity": kind.value})


class Draft:
    """Editable copy of one record, committed to the store on save.

    Attributes:
        kind:      Which collection the record belongs to.
        entity_id: Id of the record being edited; None for a new record.
        error:     Message from the last failed commit, for display.
    """

    def __init__(self, kind: EntityKind, values: dict[str, Any], entity_id: Optional[str] = None):
        self.kind = kind
        self.entity_id = entity_id
        self.error: Optional[str] = None
        self._values = copy.deepcopy(values)
        self._open = True

    @classmethod
    def for_new(cls, kind: EntityKind) -> "Draft":
        """Blank draft with the form defaults for ``kind``."""
        return cls(kind, asdict(_INPUTS[kind]()))

    @classmethod
    def for_existing(cls, entity: Entity) -> "Draft":
        if isinstance(entity, Project):
            kind, entity_id = EntityKind.PROJECT, entity.id
        elif isinstance(entity, Member):
            kind, entity_id = EntityKind.MEMBER, entity.user_id
        else:
            kind, entity_id = EntityKind.TASK, entity.id

        editable = [f.name for f in fields(_INPUTS[kind])]
        values = {name: getattr(entity, name) for name in editable}
        if kind is EntityKind.PROJECT:
            values["team_member_ids"] = list(entity.team_member_ids)
        return cls(kind, values, entity_id)

    @property
    def is_new(self) -> bool:
        return self.entity_id is None

    @property
    def is_open(self) -> bool:
        return self._open

    def values(self) -> dict[str, Any]:
        return copy.deepcopy(self._values)

    def get(self, name: str) -> Any:
        return self._values[name]

    def set(self, name: str, value: Any) -> None:
        self._ensure_open()
        if name not in self._values:
            raise KeyError(f"{self.kind.value} has no editable field {name!r}")
        self._values[name] = value

    def toggle_team_member(self, user_id: str) -> None:
        """Add ``user_id`` to a project draft's team, or remove it if present."""
        self._ensure_open()
        if self.kind is not EntityKind.PROJECT:
            raise KeyError(f"{self.kind.value} has no team")
        team: list[str] = self._values["team_member_ids"]
        if user_id in team:
            team.remove(user_id)
        else:
            team.append(user_id)

    def commit(self, store: RelationalStore) -> Entity:
        """Create or update the record from this draft.

        On failure the draft stays open, keeps ``error`` for display and the
        store error is re-raised.
        """
        self._ensure_open()
        data = _INPUTS[self.kind](**copy.deepcopy(self._values))
        try:
            entity = self._apply(store, data)
        except StoreError as e:
            self.error = str(e)
            raise

        self.error = None
        self._open = False
        return entity

    def discard(self) -> None:
        self._open = False

    def _apply(self, store: RelationalStore, data: Any) -> Entity:
        if self.kind is EntityKind.PROJECT:
            if self.is_new:
                return store.create_project(data)
            return store.update_project(self.entity_id, data)
        if self.kind is EntityKind.MEMBER:
            if self.is_new:
                return store.create_member(data)
            return store.update_member(self.entity_id, data)
        if self.is_new:
            return store.create_task(data)
        return store.update_task(self.entity_id, data)

    def _ensure_open(self) -> None:
        if not self._open:
            raise DraftClosedError(self.kind)
