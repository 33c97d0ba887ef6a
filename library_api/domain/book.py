"""
Book entity.

Business rules:
- title is required and may not be blank
- price must be >= 0
- a book always has at least one author
- a published book can never go back to unpublished
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal

from .author import Author, utcnow
from .errors import InvalidArgumentError, InvalidStateError
from .publication_status import PublicationStatus


@dataclass(frozen=True)
class Book:
    title: str
    price: Decimal
    authors: tuple[Author, ...]
    publication_status: PublicationStatus = PublicationStatus.UNPUBLISHED
    id: int | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        # Accept any iterable of authors but store an immutable tuple.
        object.__setattr__(self, "authors", tuple(self.authors))

        if not self.title or not self.title.strip():
            raise InvalidArgumentError("Book title is required")
        if self.price < 0:
            raise InvalidArgumentError(
                f"Price must be >= 0, got {self.price}",
                details={"price": str(self.price)},
            )
        if not self.authors:
            raise InvalidArgumentError("A book needs at least one author")

    def update(self, title: str, price: Decimal, authors: tuple[Author, ...] | list[Author]) -> "Book":
        """Replace title, price and authors. Publication status is left as is."""
        return replace(self, title=title, price=price, authors=tuple(authors), updated_at=utcnow())

    def update_publication_status(self, new_status: PublicationStatus) -> "Book":
        if not self.publication_status.can_transition_to(new_status):
            raise InvalidStateError(
                f"Cannot change publication status from {self.publication_status.value} "
                f"to {new_status.value}; a published book cannot be unpublished",
                details={
                    "current_status": self.publication_status.value,
                    "requested_status": new_status.value,
                },
            )
        return replace(self, publication_status=new_status, updated_at=utcnow())

    def add_author(self, author: Author) -> "Book":
        if any(a.id == author.id for a in self.authors):
            raise InvalidArgumentError(
                f"Author '{author.name}' is already associated with this book",
                details={"author_id": author.id},
            )
        return replace(self, authors=self.authors + (author,), updated_at=utcnow())

    def remove_author(self, author_id: int) -> "Book":
        if len(self.authors) <= 1:
            raise InvalidStateError(
                "A book must keep at least one author",
                details={"author_id": author_id},
            )

        remaining = tuple(a for a in self.authors if a.id != author_id)
        if len(remaining) == len(self.authors):
            raise InvalidArgumentError(
                f"Author id={author_id} is not associated with this book",
                details={"author_id": author_id},
            )
        return replace(self, authors=remaining, updated_at=utcnow())

    @property
    def is_published(self) -> bool:
        return self.publication_status is PublicationStatus.PUBLISHED

    @property
    def display_title(self) -> str:
        return self.title.strip()

    @property
    def author_names(self) -> str:
        return ", ".join(a.display_name for a in self.authors)

    @property
    def formatted_price(self) -> str:
        return f"¥{self.price:f}"
