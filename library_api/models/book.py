from __future__ import annotations
import datetime
from decimal import Decimal
from sqlalchemy import (
    CheckConstraint,
    Column,
    Constraint,
    DateTime,
    Enum,
    ForeignKey,
    Numeric,
    String,
    Table,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.domain.publication_status import PublicationStatus
from library_api.models.author import AuthorModel, PrimaryKey
from library_api.models.base import Base

#Book <-> Author association
book_authors = Table(
    "book_authors",
    Base.metadata,
    Column("book_id", PrimaryKey, ForeignKey("books.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "author_id",
        PrimaryKey,
        ForeignKey("authors.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
)

#Book
class BookModel(Base):
    __tablename__: str = "books"

    id: Mapped[int] = mapped_column(PrimaryKey, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    publication_status: Mapped[PublicationStatus] = mapped_column(
        Enum(PublicationStatus, name="publication_status"),
        nullable=False,
        default=PublicationStatus.UNPUBLISHED,
        index=True,
    )
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

    authors: Mapped[list[AuthorModel]] = relationship(
        secondary=book_authors,
        back_populates="books",
        order_by=AuthorModel.name,
    )

    __table_args__: tuple[Constraint, ...] = (
        CheckConstraint("price >= 0", name="price_non_negative"),
    )
