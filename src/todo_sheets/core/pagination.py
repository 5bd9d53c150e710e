# src/todo_sheets/core/pagination.py

"""
Pagination view: a pure slice of the task collection.

Pages are 1-based. There is always at least one page, even for an empty
collection. Out-of-range page numbers clamp to the nearest valid page.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


def total_pages(count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    return max(1, math.ceil(max(0, count) / page_size))


def clamp_page(page: int, count: int, page_size: int) -> int:
    return min(max(1, int(page)), total_pages(count, page_size))


@dataclass(slots=True, frozen=True)
class Page(Generic[T]):
    items: list[T]
    number: int
    total_pages: int
    page_size: int
    total_items: int

    @property
    def has_prev(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages

    @property
    def first_index(self) -> int:
        """0-based index of the first item of this page in the full collection."""
        return (self.number - 1) * self.page_size


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    number = clamp_page(page, len(items), page_size)
    start = (number - 1) * page_size
    return Page(
        items=list(items[start : start + page_size]),
        number=number,
        total_pages=total_pages(len(items), page_size),
        page_size=page_size,
        total_items=len(items),
    )
