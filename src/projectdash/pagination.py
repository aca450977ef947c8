"""Fixed-size pagination for the task table."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from .exceptions import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of items.

    Attributes:
        items:       Items on this page, in listing order.
        number:      1-based page number.
        total_pages: Always at least 1, so an empty table still has a page.
        total_items: Size of the full listing.
    """

    items: tuple[T, ...]
    number: int
    total_pages: int
    total_items: int

    @property
    def has_previous(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages


def page_count(total_items: int, page_size: int) -> int:
    return max(1, math.ceil(total_items / page_size))


def paginate(items: Sequence[T], page: int = 1, page_size: int = 5) -> Page[T]:
    """Slice ``items`` into the requested 1-based page.

    Raises:
        ValidationError: If ``page_size`` is below 1 or ``page`` is out of range.
    """
    if page_size < 1:
        raise ValidationError("page", "page_size", "must be at least 1")

    total_pages = page_count(len(items), page_size)
    if not 1 <= page <= total_pages:
        raise ValidationError("page", "number", f"must be between 1 and {total_pages}, got {page}")

    start = (page - 1) * page_size
    return Page(
        items=tuple(items[start : start + page_size]),
        number=page,
        total_pages=total_pages,
        total_items=len(items),
    )
