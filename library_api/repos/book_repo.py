from collections.abc import Sequence
from sqlalchemy import exists, func, select, Select
from sqlalchemy.orm import Session, selectinload

from library_api.domain.book import Book
from library_api.domain.publication_status import PublicationStatus
from library_api.models.author import AuthorModel
from library_api.models.book import BookModel, book_authors
from library_api.repos.author_repo import to_domain as author_to_domain


def to_domain(row: BookModel) -> Book:
    return Book(
        id=row.id,
        title=row.title,
        price=row.price,
        publication_status=row.publication_status,
        # by name, also for collections assigned in this session and not yet reloaded
        authors=tuple(author_to_domain(a) for a in sorted(row.authors, key=lambda a: a.name)),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _with_authors(stmt: Select[tuple[BookModel]]) -> Select[tuple[BookModel]]:
    return stmt.options(selectinload(BookModel.authors))


class BookRepository:
    """Book persistence, including the book_authors association."""

    @staticmethod
    def _fetch(db: Session, stmt: Select[tuple[BookModel]]) -> list[Book]:
        return [to_domain(row) for row in db.scalars(_with_authors(stmt))]

    @staticmethod
    def _author_rows(db: Session, author_ids: Sequence[int]) -> list[AuthorModel]:
        if not author_ids:
            return []
        stmt = select(AuthorModel).where(AuthorModel.id.in_(author_ids)).order_by(AuthorModel.id)
        return list(db.scalars(stmt))

    @staticmethod
    # List books ordered by id
    def find_all(db: Session, offset: int, limit: int) -> list[Book]:
        stmt = select(BookModel).order_by(BookModel.id).limit(limit).offset(offset)
        return BookRepository._fetch(db, stmt)

    @staticmethod
    def count_all(db: Session) -> int:
        return db.scalar(select(func.count()).select_from(BookModel)) or 0

    @staticmethod
    # Get a book (with authors) by ID
    def find_by_id(db: Session, book_id: int) -> Book | None:
        stmt = select(BookModel).where(BookModel.id == book_id)
        row = db.scalars(_with_authors(stmt)).first()
        return to_domain(row) if row else None

    @staticmethod
    # Search books by title (case-insensitive substring)
    def find_by_title_containing(db: Session, title: str, offset: int, limit: int) -> list[Book]:
        stmt = (
            select(BookModel)
            .where(BookModel.title.icontains(title.strip(), autoescape=True))
            .order_by(BookModel.title, BookModel.id)
            .limit(limit)
            .offset(offset)
        )
        return BookRepository._fetch(db, stmt)

    @staticmethod
    def count_by_title_containing(db: Session, title: str) -> int:
        stmt = (
            select(func.count())
            .select_from(BookModel)
            .where(BookModel.title.icontains(title.strip(), autoescape=True))
        )
        return db.scalar(stmt) or 0

    @staticmethod
    # Filter books by publication status
    def find_by_publication_status(
        db: Session, status: PublicationStatus, offset: int, limit: int
    ) -> list[Book]:
        stmt = (
            select(BookModel)
            .where(BookModel.publication_status == status)
            .order_by(BookModel.title, BookModel.id)
            .limit(limit)
            .offset(offset)
        )
        return BookRepository._fetch(db, stmt)

    @staticmethod
    def count_by_publication_status(db: Session, status: PublicationStatus) -> int:
        stmt = (
            select(func.count())
            .select_from(BookModel)
            .where(BookModel.publication_status == status)
        )
        return db.scalar(stmt) or 0

    @staticmethod
    # Books written (or co-written) by an author
    def find_by_author_id(db: Session, author_id: int, offset: int, limit: int) -> list[Book]:
        stmt = (
            select(BookModel)
            .join(book_authors, book_authors.c.book_id == BookModel.id)
            .where(book_authors.c.author_id == author_id)
            .order_by(BookModel.title, BookModel.id)
            .limit(limit)
            .offset(offset)
        )
        return BookRepository._fetch(db, stmt)

    @staticmethod
    def count_by_author_id(db: Session, author_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(book_authors)
            .where(book_authors.c.author_id == author_id)
        )
        return db.scalar(stmt) or 0

    @staticmethod
    # Titles of books whose only author is `author_id`
    def find_titles_solely_authored_by(db: Session, author_id: int) -> list[str]:
        single_author_books = (
            select(book_authors.c.book_id)
            .group_by(book_authors.c.book_id)
            .having(func.count(book_authors.c.author_id) == 1)
        )
        stmt = (
            select(BookModel.title)
            .join(book_authors, book_authors.c.book_id == BookModel.id)
            .where(
                book_authors.c.author_id == author_id,
                BookModel.id.in_(single_author_books),
            )
            .order_by(BookModel.title)
        )
        return list(db.scalars(stmt))

    @staticmethod
    def exists_by_title(db: Session, title: str) -> bool:
        return bool(db.scalar(select(exists().where(BookModel.title == title))))

    @staticmethod
    def exists_by_title_and_id_not(db: Session, title: str, book_id: int) -> bool:
        stmt = select(exists().where(BookModel.title == title, BookModel.id != book_id))
        return bool(db.scalar(stmt))

    @staticmethod
    def exists_by_id(db: Session, book_id: int) -> bool:
        return bool(db.scalar(select(exists().where(BookModel.id == book_id))))

    @staticmethod
    # Create a new book together with its author associations
    def save(db: Session, book: Book) -> Book:
        author_ids = [a.id for a in book.authors if a.id is not None]
        if len(author_ids) != len(book.authors):
            raise ValueError("every author must be persisted before the book")

        row = BookModel(
            title=book.title,
            price=book.price,
            publication_status=book.publication_status,
            created_at=book.created_at,
            updated_at=book.updated_at,
        )
        row.authors = BookRepository._author_rows(db, author_ids)
        db.add(row)
        db.flush()
        return to_domain(row)

    @staticmethod
    # Update a book; its association rows are replaced wholesale
    def update(db: Session, book: Book) -> Book:
        if book.id is None:
            raise ValueError("cannot update a book without an id")
        row = db.get(BookModel, book.id)
        if row is None:
            raise LookupError(f"book id={book.id} vanished during update")

        row.title = book.title
        row.price = book.price
        row.publication_status = book.publication_status
        row.updated_at = book.updated_at
        row.authors = BookRepository._author_rows(db, [a.id for a in book.authors if a.id is not None])
        db.flush()
        return to_domain(row)

    @staticmethod
    # Delete a book by ID (association rows cascade)
    def delete_by_id(db: Session, book_id: int) -> bool:
        row = db.get(BookModel, book_id)
        if row is None:
            return False
        db.delete(row)
        db.flush()
        return True
