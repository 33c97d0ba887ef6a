from .base import Base
from .author import AuthorModel
from .book import BookModel, book_authors

__all__ = ["Base", "AuthorModel", "BookModel", "book_authors"]
