from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from library_api.core.config import settings
from library_api.core.errors import is_unique_violation
from library_api.core.logging import get_logger
from library_api.db.session import transaction
from library_api.domain.author import Author
from library_api.domain.errors import (
    DuplicateResourceError,
    InvalidArgumentError,
    InvalidStateError,
    ResourceNotFoundError,
)
from library_api.repos.author_repo import AuthorRepository
from library_api.repos.book_repo import BookRepository
from library_api.schemas.author import AuthorCreate, AuthorRead, AuthorUpdate
from library_api.schemas.pagination import PagedResponse
from library_api.utils.pagination import page_to_offset

logger = get_logger(__name__)


def _not_found(author_id: int) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        f"Author id={author_id} not found", details={"author_id": author_id}
    )


class AuthorService:
    @staticmethod
    # List authors
    def find_all(
        db: Session,
        page_number: int = 0,
        page_size: int = settings.DEFAULT_PAGE_SIZE,
    ) -> PagedResponse[AuthorRead]:
        limit, offset = page_to_offset(page_number, page_size)
        authors = AuthorRepository.find_all(db, offset, limit)
        total = AuthorRepository.count_all(db)
        return PagedResponse[AuthorRead].of(
            [AuthorRead.from_domain(a) for a in authors], page_number, page_size, total
        )

    @staticmethod
    # Search authors by name
    def search_by_name(
        db: Session,
        name: str,
        page_number: int = 0,
        page_size: int = settings.DEFAULT_PAGE_SIZE,
    ) -> PagedResponse[AuthorRead]:
        if not name or not name.strip():
            raise InvalidArgumentError("Search name is required")
        limit, offset = page_to_offset(page_number, page_size)
        authors = AuthorRepository.find_by_name_containing(db, name, offset, limit)
        total = AuthorRepository.count_by_name_containing(db, name)
        return PagedResponse[AuthorRead].of(
            [AuthorRead.from_domain(a) for a in authors], page_number, page_size, total
        )

    @staticmethod
    # Get author
    def find_by_id(db: Session, author_id: int) -> AuthorRead:
        author = AuthorRepository.find_by_id(db, author_id)
        if author is None:
            raise _not_found(author_id)
        return AuthorRead.from_domain(author)

    @staticmethod
    # Create author
    def create(db: Session, data: AuthorCreate) -> AuthorRead:
        if AuthorRepository.exists_by_name(db, data.name):
            raise DuplicateResourceError(
                f"Author '{data.name}' already exists", details={"name": data.name}
            )

        author = Author(name=data.name, birth_date=data.birth_date)
        try:
            with transaction(db):
                saved = AuthorRepository.save(db, author)
        except IntegrityError as e:
            if not is_unique_violation(e):
                raise
            # lost a race with a concurrent create
            raise DuplicateResourceError(
                f"Author '{data.name}' already exists", details={"name": data.name}
            ) from e

        logger.info("Created author", extra={"author_id": saved.id})
        return AuthorRead.from_domain(saved)

    @staticmethod
    # Update author
    def update(db: Session, author_id: int, data: AuthorUpdate) -> AuthorRead:
        existing = AuthorRepository.find_by_id(db, author_id)
        if existing is None:
            raise _not_found(author_id)

        if AuthorRepository.exists_by_name_and_id_not(db, data.name, author_id):
            raise DuplicateResourceError(
                f"Author '{data.name}' is already registered by another author",
                details={"name": data.name},
            )

        updated = existing.update(data.name, data.birth_date)
        try:
            with transaction(db):
                saved = AuthorRepository.update(db, updated)
        except IntegrityError as e:
            if not is_unique_violation(e):
                raise
            raise DuplicateResourceError(
                f"Author '{data.name}' is already registered by another author",
                details={"name": data.name},
            ) from e

        logger.info("Updated author", extra={"author_id": author_id})
        return AuthorRead.from_domain(saved)

    @staticmethod
    # Delete author
    def delete_by_id(db: Session, author_id: int) -> None:
        if not AuthorRepository.exists_by_id(db, author_id):
            raise _not_found(author_id)

        # Deleting a sole author would leave books without any author.
        orphaned = BookRepository.find_titles_solely_authored_by(db, author_id)
        if orphaned:
            raise InvalidStateError(
                f"Author id={author_id} is the only author of {len(orphaned)} book(s)",
                details={"author_id": author_id, "books": orphaned},
            )

        with transaction(db):
            deleted = AuthorRepository.delete_by_id(db, author_id)
        if not deleted:
            raise _not_found(author_id)

        logger.info("Deleted author", extra={"author_id": author_id})

    @staticmethod
    def exists_by_id(db: Session, author_id: int) -> bool:
        return AuthorRepository.exists_by_id(db, author_id)
