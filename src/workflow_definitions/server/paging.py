"""Slice ordered sequences into pages for list endpoints."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class PageRequest:
    page: int = 0
    size: int = 20

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("page must be >= 0")
        if self.size < 1:
            raise ValueError("size must be >= 1")

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    elements: list[T]
    size: int
    total_elements: int
    number: int

    @property
    def total_pages(self) -> int:
        return (self.total_elements + self.size - 1) // self.size


def get_page(items: Sequence[T], request: PageRequest) -> Page[T]:
    """Return the requested slice of `items`, keeping their order.

    A page past the end is empty but still reports the real totals.
    """

    start = request.offset
    return Page(
        elements=list(items[start : start + request.size]),
        size=request.size,
        total_elements=len(items),
        number=request.page,
    )
