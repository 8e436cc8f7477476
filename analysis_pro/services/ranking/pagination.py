"""
Fixed-size pagination with clamped page bounds.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from ...core.exceptions import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One window of a list."""

    items: list[T]
    page: int
    total_pages: int
    total_items: int
    page_size: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def first_rank(self) -> int:
        """1-based position of the first item on this page."""
        return (self.page - 1) * self.page_size + 1


def total_pages(item_count: int, page_size: int) -> int:
    """Number of pages; an empty list still has one (empty) page."""
    return max(1, math.ceil(item_count / page_size))


def clamp_page(page: int, item_count: int, page_size: int) -> int:
    """Clamp page into [1, total_pages]."""
    return max(1, min(page, total_pages(item_count, page_size)))


def paginate(items: Sequence[T], page_size: int, page: int) -> Page[T]:
    """
    Slice out one page.

    Out-of-range pages are clamped to the nearest valid page rather than
    raising.

    Args:
        items: Full (already filtered and sorted) list
        page_size: Items per page, must be positive
        page: Requested 1-based page

    Returns:
        Page with the clamped page number and its items

    Raises:
        ValidationError: If page_size < 1
    """
    if page_size < 1:
        raise ValidationError("Page size must be >= 1", page_size=page_size)

    count = len(items)
    current = clamp_page(page, count, page_size)
    start = (current - 1) * page_size
    return Page(
        items=list(items[start : start + page_size]),
        page=current,
        total_pages=total_pages(count, page_size),
        total_items=count,
        page_size=page_size,
    )
