from __future__ import annotations
import datetime
from typing import TYPE_CHECKING
from sqlalchemy import BigInteger, Date, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from library_api.models.base import Base

if TYPE_CHECKING:
    from library_api.models.book import BookModel

# BIGSERIAL on PostgreSQL, INTEGER PRIMARY KEY (rowid alias) on SQLite
PrimaryKey = BigInteger().with_variant(Integer(), "sqlite")

#Author
class AuthorModel(Base):
    __tablename__: str = "authors"

    id: Mapped[int] = mapped_column(PrimaryKey, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    birth_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    books: Mapped[list[BookModel]] = relationship(
        secondary="book_authors",
        back_populates="authors",
    )
