"""Paginated response envelope."""

from typing import Callable, Generic, TypeVar

from pydantic import BaseModel

from chat_storage.domain.ports.repositories.pagination import Page

T = TypeVar("T")
E = TypeVar("E")


class PageDTO(BaseModel, Generic[T]):
    content: list[T]
    current_page: int
    total_items: int
    total_pages: int
    page_size: int
    has_next: bool
    has_previous: bool
    is_first: bool
    is_last: bool

    @classmethod
    def from_page(cls, page: Page[E], convert: Callable[[E], T]) -> "PageDTO[T]":
        return cls(
            content=[convert(item) for item in page.items],
            current_page=page.page,
            total_items=page.total_items,
            total_pages=page.total_pages,
            page_size=page.size,
            has_next=page.has_next,
            has_previous=page.has_previous,
            is_first=page.is_first,
            is_last=page.is_last,
        )
