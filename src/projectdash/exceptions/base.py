"""Base exception for ProjectDash."""

from typing import Any, Dict, List, Optional, Tuple

# Context keys rendered first, in this order, whatever order they were given in.
_LEADING_KEYS = ("entity", "id", "field", "key")


class ProjectDashError(Exception):
    """Base exception for all ProjectDash errors.

    ``details`` carries the record or setting the error is about (entity,
    id, field, config key) so the CLI can print it and ``--json`` can emit it.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def ordered_details(self) -> List[Tuple[str, str]]:
        leading = [(k, self.details[k]) for k in _LEADING_KEYS if k in self.details]
        rest = sorted((k, v) for k, v in self.details.items() if k not in _LEADING_KEYS)
        return leading + rest

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": dict(self.ordered_details()),
        }

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.ordered_details())
            return f"{self.message} ({details_str})"
        return self.message
