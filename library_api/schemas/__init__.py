from .author import AuthorCreate, AuthorRead, AuthorUpdate
from .book import BookCreate, BookRead, BookUpdate
from .pagination import PagedResponse

__all__ = [
    "AuthorCreate",
    "AuthorRead",
    "AuthorUpdate",
    "BookCreate",
    "BookRead",
    "BookUpdate",
    "PagedResponse",
]
