"""
Paging types shared by repository ports.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import math
from typing import Generic, TypeVar

from chat_storage.domain.exceptions.validation_error import DomainValidationError

T = TypeVar("T")


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class PageRequest:
    page: int = 0  # 0-based
    size: int = 20
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self):
        if self.page < 0:
            raise DomainValidationError("Page number cannot be negative", "page")
        if self.size < 1:
            raise DomainValidationError("Page size must be at least 1", "size")

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    size: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.size) if self.size else 0

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @property
    def is_first(self) -> bool:
        return not self.has_previous

    @property
    def is_last(self) -> bool:
        return not self.has_next

    @classmethod
    def of(cls, items: list[T], request: PageRequest, total_items: int) -> Page[T]:
        return cls(
            items=items,
            page=request.page,
            size=request.size,
            total_items=total_items,
        )
