from pydantic import Field, field_validator
from datetime import datetime
from decimal import Decimal

from library_api.domain.book import Book
from library_api.domain.publication_status import PublicationStatus
from library_api.schemas.author import AuthorRead
from library_api.schemas.base import CamelModel

# Book base schema
class BookBase(CamelModel):
    title: str
    # matches the numeric(10, 2) column
    price: Decimal = Field(max_digits=10, decimal_places=2)
    author_ids: list[int] = Field(min_length=1)

    @field_validator("title", mode="before")
    @classmethod
    def trim_and_check(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("title cannot be empty")
        return v

    @field_validator("price")
    @classmethod
    def non_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("price must be >= 0")
        return v

    @field_validator("author_ids")
    @classmethod
    def distinct_ids(cls, v: list[int]) -> list[int]:
        # keep first occurrence order
        return list(dict.fromkeys(v))

# Book create schema
class BookCreate(BookBase):
    publication_status: PublicationStatus = PublicationStatus.UNPUBLISHED

# Book update schema
class BookUpdate(BookBase):
    # None leaves the status unchanged
    publication_status: PublicationStatus | None = None

# Book read schema
class BookRead(CamelModel):
    id: int
    title: str
    price: Decimal
    formatted_price: str
    publication_status: PublicationStatus
    is_published: bool
    authors: list[AuthorRead]
    author_names: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, book: Book) -> "BookRead":
        if book.id is None:
            raise ValueError("book has not been persisted")
        return cls(
            id=book.id,
            title=book.title,
            price=book.price,
            formatted_price=book.formatted_price,
            publication_status=book.publication_status,
            is_published=book.is_published,
            authors=[AuthorRead.from_domain(a) for a in book.authors],
            author_names=book.author_names,
            created_at=book.created_at,
            updated_at=book.updated_at,
        )
