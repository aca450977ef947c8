"""Change notifications for store subscribers.

The store publishes one :class:`StoreEvent` per committed mutation. Failed
operations publish nothing. Events are delivered while the store lock is held,
in commit order. The presentation layer subscribes to know when
to re-render; cascade fields say which other records a delete touched.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class EntityKind(str, Enum):
    PROJECT = "project"
    MEMBER = "member"
    TASK = "task"


class ChangeVerb(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


@dataclass(frozen=True)
class StoreEvent:
    """One committed mutation.

    Attributes:
        kind:                  Which collection the primary record lives in.
        verb:                  What happened to it.
        entity_id:             The primary record's id.
        deleted_task_ids:      Tasks removed by a project delete.
        unassigned_member_ids: Members whose ``project_id`` was cleared.
        unassigned_task_ids:   Tasks whose ``assignee_id`` was cleared.
        pruned_project_ids:    Projects whose team list dropped the member.
    """

    kind: EntityKind
    verb: ChangeVerb
    entity_id: str
    deleted_task_ids: tuple[str, ...] = ()
    unassigned_member_ids: tuple[str, ...] = ()
    unassigned_task_ids: tuple[str, ...] = ()
    pruned_project_ids: tuple[str, ...] = ()


Listener = Callable[[StoreEvent], None]


class EventBus:
    """Fan-out of store events to registered listeners."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

    def publish(self, event: StoreEvent) -> None:
        """Deliver ``event`` to every listener.

        A failing listener is logged and skipped; the mutation that produced
        the event stays committed.
        """
        with self._lock:
            # Copy so listeners can unsubscribe while being notified
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception(
                    "Store listener %r failed on %s %s %s",
                    listener,
                    event.kind.value,
                    event.verb.value,
                    event.entity_id,
                )
