"""Store exceptions: rejected input and missing records."""

from typing import Optional

from .base import ProjectDashError


class StoreError(ProjectDashError):
    """Base class for errors raised by store operations.

    A store operation that raises never leaves a partial mutation behind.
    """

    pass


class ValidationError(StoreError):
    """Raised when a required field is missing or malformed."""

    def __init__(self, entity: str, field: str, reason: str):
        super().__init__(
            f"Invalid {entity}: {field} {reason}",
            details={"entity": entity, "field": field},
        )
        self.entity = entity
        self.field = field
        self.reason = reason


class NotFoundError(StoreError):
    """Raised when an update, delete or lookup names an unknown id."""

    def __init__(self, entity: str, entity_id: Optional[str]):
        super().__init__(
            f"{entity.capitalize()} not found: {entity_id}",
            details={"entity": entity, "id": str(entity_id)},
        )
        self.entity = entity
        self.entity_id = entity_id
