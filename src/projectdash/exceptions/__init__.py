"""Exception hierarchy for ProjectDash."""

from .base import ProjectDashError
from .config import ConfigurationError, InvalidConfigError
from .store import NotFoundError, StoreError, ValidationError

__all__ = [
    "ProjectDashError",
    "StoreError",
    "ValidationError",
    "NotFoundError",
    "ConfigurationError",
    "InvalidConfigError",
]
