from collections.abc import Sequence
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from library_api.core.config import settings
from library_api.core.errors import is_unique_violation
from library_api.core.logging import get_logger
from library_api.db.session import transaction
from library_api.domain.author import Author
from library_api.domain.book import Book
from library_api.domain.errors import (
    DuplicateResourceError,
    InvalidArgumentError,
    ResourceNotFoundError,
)
from library_api.domain.publication_status import PublicationStatus
from library_api.repos.author_repo import AuthorRepository
from library_api.repos.book_repo import BookRepository
from library_api.schemas.book import BookCreate, BookRead, BookUpdate
from library_api.schemas.pagination import PagedResponse
from library_api.utils.pagination import page_to_offset

logger = get_logger(__name__)


def _book_not_found(book_id: int) -> ResourceNotFoundError:
    return ResourceNotFoundError(f"Book id={book_id} not found", details={"book_id": book_id})


def _author_not_found(author_id: int) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        f"Author id={author_id} not found", details={"author_id": author_id}
    )


def _duplicate_title(title: str) -> DuplicateResourceError:
    return DuplicateResourceError(f"Book '{title}' already exists", details={"title": title})


def _page(books: Sequence[Book], page_number: int, page_size: int, total: int) -> PagedResponse[BookRead]:
    return PagedResponse[BookRead].of(
        [BookRead.from_domain(b) for b in books], page_number, page_size, total
    )


class BookService:
    @staticmethod
    def _get_book(db: Session, book_id: int) -> Book:
        book = BookRepository.find_by_id(db, book_id)
        if book is None:
            raise _book_not_found(book_id)
        return book

    @staticmethod
    def _get_authors(db: Session, author_ids: Sequence[int]) -> list[Author]:
        authors: list[Author] = []
        for author_id in author_ids:
            author = AuthorRepository.find_by_id(db, author_id)
            if author is None:
                raise _author_not_found(author_id)
            authors.append(author)
        return authors

    @staticmethod
    def _save_changes(db: Session, book: Book) -> Book:
        try:
            with transaction(db):
                return BookRepository.update(db, book)
        except IntegrityError as e:
            if not is_unique_violation(e):
                raise
            raise _duplicate_title(book.title) from e

    @staticmethod
    # List books
    def find_all(
        db: Session,
        page_number: int = 0,
        page_size: int = settings.DEFAULT_PAGE_SIZE,
    ) -> PagedResponse[BookRead]:
        limit, offset = page_to_offset(page_number, page_size)
        books = BookRepository.find_all(db, offset, limit)
        return _page(books, page_number, page_size, BookRepository.count_all(db))

    @staticmethod
    # Search books by title
    def search_by_title(
        db: Session,
        title: str,
        page_number: int = 0,
        page_size: int = settings.DEFAULT_PAGE_SIZE,
    ) -> PagedResponse[BookRead]:
        if not title or not title.strip():
            raise InvalidArgumentError("Search title is required")
        limit, offset = page_to_offset(page_number, page_size)
        books = BookRepository.find_by_title_containing(db, title, offset, limit)
        total = BookRepository.count_by_title_containing(db, title)
        return _page(books, page_number, page_size, total)

    @staticmethod
    # Filter books by publication status
    def find_by_publication_status(
        db: Session,
        status: PublicationStatus,
        page_number: int = 0,
        page_size: int = settings.DEFAULT_PAGE_SIZE,
    ) -> PagedResponse[BookRead]:
        limit, offset = page_to_offset(page_number, page_size)
        books = BookRepository.find_by_publication_status(db, status, offset, limit)
        total = BookRepository.count_by_publication_status(db, status)
        return _page(books, page_number, page_size, total)

    @staticmethod
    # Books by author
    def find_by_author_id(
        db: Session,
        author_id: int,
        page_number: int = 0,
        page_size: int = settings.DEFAULT_PAGE_SIZE,
    ) -> PagedResponse[BookRead]:
        limit, offset = page_to_offset(page_number, page_size)
        if not AuthorRepository.exists_by_id(db, author_id):
            raise _author_not_found(author_id)
        books = BookRepository.find_by_author_id(db, author_id, offset, limit)
        total = BookRepository.count_by_author_id(db, author_id)
        return _page(books, page_number, page_size, total)

    @staticmethod
    def find_published_books(
        db: Session, page_number: int = 0, page_size: int = settings.DEFAULT_PAGE_SIZE
    ) -> PagedResponse[BookRead]:
        return BookService.find_by_publication_status(
            db, PublicationStatus.PUBLISHED, page_number, page_size
        )

    @staticmethod
    def find_unpublished_books(
        db: Session, page_number: int = 0, page_size: int = settings.DEFAULT_PAGE_SIZE
    ) -> PagedResponse[BookRead]:
        return BookService.find_by_publication_status(
            db, PublicationStatus.UNPUBLISHED, page_number, page_size
        )

    @staticmethod
    # Get book
    def find_by_id(db: Session, book_id: int) -> BookRead:
        return BookRead.from_domain(BookService._get_book(db, book_id))

    @staticmethod
    def exists_by_id(db: Session, book_id: int) -> bool:
        return BookRepository.exists_by_id(db, book_id)

    @staticmethod
    # Create book
    def create(db: Session, data: BookCreate) -> BookRead:
        if BookRepository.exists_by_title(db, data.title):
            raise _duplicate_title(data.title)

        authors = BookService._get_authors(db, data.author_ids)
        book = Book(
            title=data.title,
            price=data.price,
            publication_status=data.publication_status,
            authors=tuple(authors),
        )
        try:
            with transaction(db):
                saved = BookRepository.save(db, book)
        except IntegrityError as e:
            if not is_unique_violation(e):
                raise
            raise _duplicate_title(data.title) from e

        logger.info("Created book", extra={"book_id": saved.id})
        return BookRead.from_domain(saved)

    @staticmethod
    # Update book (title, price, authors and optionally status)
    def update(db: Session, book_id: int, data: BookUpdate) -> BookRead:
        existing = BookService._get_book(db, book_id)

        if BookRepository.exists_by_title_and_id_not(db, data.title, book_id):
            raise _duplicate_title(data.title)

        authors = BookService._get_authors(db, data.author_ids)
        updated = existing.update(data.title, data.price, authors)
        if data.publication_status is not None:
            updated = updated.update_publication_status(data.publication_status)

        saved = BookService._save_changes(db, updated)
        logger.info("Updated book", extra={"book_id": book_id})
        return BookRead.from_domain(saved)

    @staticmethod
    # Change publication status
    def update_publication_status(
        db: Session, book_id: int, new_status: PublicationStatus
    ) -> BookRead:
        existing = BookService._get_book(db, book_id)
        updated = existing.update_publication_status(new_status)
        saved = BookService._save_changes(db, updated)
        logger.info(
            "Publication status changed",
            extra={
                "book_id": book_id,
                "from_status": existing.publication_status.value,
                "to_status": new_status.value,
            },
        )
        return BookRead.from_domain(saved)

    @staticmethod
    # Attach an author to a book
    def add_author(db: Session, book_id: int, author_id: int) -> BookRead:
        existing = BookService._get_book(db, book_id)
        author = AuthorRepository.find_by_id(db, author_id)
        if author is None:
            raise _author_not_found(author_id)

        saved = BookService._save_changes(db, existing.add_author(author))
        logger.info("Added author to book", extra={"book_id": book_id, "author_id": author_id})
        return BookRead.from_domain(saved)

    @staticmethod
    # Detach an author from a book
    def remove_author(db: Session, book_id: int, author_id: int) -> BookRead:
        existing = BookService._get_book(db, book_id)
        saved = BookService._save_changes(db, existing.remove_author(author_id))
        logger.info("Removed author from book", extra={"book_id": book_id, "author_id": author_id})
        return BookRead.from_domain(saved)

    @staticmethod
    # Delete book
    def delete_by_id(db: Session, book_id: int) -> None:
        if not BookRepository.exists_by_id(db, book_id):
            raise _book_not_found(book_id)

        with transaction(db):
            deleted = BookRepository.delete_by_id(db, book_id)
        if not deleted:
            raise _book_not_found(book_id)

        logger.info("Deleted book", extra={"book_id": book_id})
