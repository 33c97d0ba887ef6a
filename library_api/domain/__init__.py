from .author import Author
from .book import Book
from .publication_status import PublicationStatus
from .errors import (
    DuplicateResourceError,
    InvalidArgumentError,
    InvalidStateError,
    LibraryError,
    ResourceNotFoundError,
)

__all__ = [
    "Author",
    "Book",
    "PublicationStatus",
    "LibraryError",
    "InvalidArgumentError",
    "InvalidStateError",
    "ResourceNotFoundError",
    "DuplicateResourceError",
]
