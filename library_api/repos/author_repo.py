from sqlalchemy import exists, func, select
from sqlalchemy.orm import Session

from library_api.domain.author import Author
from library_api.models.author import AuthorModel


def to_domain(row: AuthorModel) -> Author:
    return Author(
        id=row.id,
        name=row.name,
        birth_date=row.birth_date,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class AuthorRepository:
    """Author persistence. Writes flush only; the service owns the commit."""

    @staticmethod
    # List authors ordered by id
    def find_all(db: Session, offset: int, limit: int) -> list[Author]:
        stmt = select(AuthorModel).order_by(AuthorModel.id).limit(limit).offset(offset)
        return [to_domain(row) for row in db.scalars(stmt)]

    @staticmethod
    # Count all authors
    def count_all(db: Session) -> int:
        return db.scalar(select(func.count()).select_from(AuthorModel)) or 0

    @staticmethod
    # Get an author by ID
    def find_by_id(db: Session, author_id: int) -> Author | None:
        row = db.get(AuthorModel, author_id)
        return to_domain(row) if row else None

    @staticmethod
    # Search authors by name (case-insensitive substring)
    def find_by_name_containing(db: Session, name: str, offset: int, limit: int) -> list[Author]:
        stmt = (
            select(AuthorModel)
            .where(AuthorModel.name.icontains(name.strip(), autoescape=True))
            .order_by(AuthorModel.name, AuthorModel.id)
            .limit(limit)
            .offset(offset)
        )
        return [to_domain(row) for row in db.scalars(stmt)]

    @staticmethod
    # Count authors matching a name search
    def count_by_name_containing(db: Session, name: str) -> int:
        stmt = (
            select(func.count())
            .select_from(AuthorModel)
            .where(AuthorModel.name.icontains(name.strip(), autoescape=True))
        )
        return db.scalar(stmt) or 0

    @staticmethod
    # Check if an author with this exact name exists
    def exists_by_name(db: Session, name: str) -> bool:
        return bool(db.scalar(select(exists().where(AuthorModel.name == name))))

    @staticmethod
    # Same check, ignoring the author being updated
    def exists_by_name_and_id_not(db: Session, name: str, author_id: int) -> bool:
        stmt = select(
            exists().where(AuthorModel.name == name, AuthorModel.id != author_id)
        )
        return bool(db.scalar(stmt))

    @staticmethod
    # Check if an author exists
    def exists_by_id(db: Session, author_id: int) -> bool:
        return bool(db.scalar(select(exists().where(AuthorModel.id == author_id))))

    @staticmethod
    # Create a new author
    def save(db: Session, author: Author) -> Author:
        row = AuthorModel(
            name=author.name,
            birth_date=author.birth_date,
            created_at=author.created_at,
            updated_at=author.updated_at,
        )
        db.add(row)
        db.flush()
        return to_domain(row)

    @staticmethod
    # Update an existing author
    def update(db: Session, author: Author) -> Author:
        if author.id is None:
            raise ValueError("cannot update an author without an id")
        row = db.get(AuthorModel, author.id)
        if row is None:
            raise LookupError(f"author id={author.id} vanished during update")
        row.name = author.name
        row.birth_date = author.birth_date
        row.updated_at = author.updated_at
        db.flush()
        return to_domain(row)

    @staticmethod
    # Delete an author by ID (association rows cascade)
    def delete_by_id(db: Session, author_id: int) -> bool:
        row = db.get(AuthorModel, author_id)
        if row is None:
            return False
        db.delete(row)
        db.flush()
        return True
