"""Pagination DTOs shared by list operations."""

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 100

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = DEFAULT_PAGE_LIMIT

    @classmethod
    def clamped(cls, page: int | None, limit: int | None) -> "PageRequest":
        """Page is at least 1; limit is clamped to [1, MAX_PAGE_LIMIT]."""
        page = max(1, page or 1)
        limit = DEFAULT_PAGE_LIMIT if limit is None else max(1, min(MAX_PAGE_LIMIT, limit))
        return cls(page=page, limit=limit)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0
