from collections.abc import Sequence
from typing import Generic, TypeVar

from library_api.schemas.base import CamelModel

T = TypeVar("T")


class PagedResponse(CamelModel, Generic[T]):
    """Page of results plus position metadata."""

    content: list[T]
    page_number: int
    page_size: int
    total_elements: int
    total_pages: int
    is_first: bool
    is_last: bool
    is_empty: bool

    @classmethod
    def of(
        cls,
        content: Sequence[T],
        page_number: int,
        page_size: int,
        total_elements: int,
    ) -> "PagedResponse[T]":
        total_pages = 0 if page_size == 0 else -(-total_elements // page_size)
        return cls(
            content=list(content),
            page_number=page_number,
            page_size=page_size,
            total_elements=total_elements,
            total_pages=total_pages,
            is_first=page_number == 0,
            is_last=page_number >= total_pages - 1,
            is_empty=len(content) == 0,
        )
