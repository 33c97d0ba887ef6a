from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from library_api.core.config import settings


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Create the engine for `url`.
    SQLite gets foreign key enforcement so ON DELETE CASCADE behaves
    like PostgreSQL; in-memory SQLite shares a single connection.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True, echo=echo)

    kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in url or url.rstrip("/").endswith("sqlite:"):
        kwargs["poolclass"] = StaticPool
    sqlite_engine = create_engine(url, echo=echo, **kwargs)

    @event.listens_for(sqlite_engine, "connect")
    def _enable_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return sqlite_engine


engine = build_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db() -> Generator[Session, None, None]:
    """
    Request-scoped session (FastAPI dependency).
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Unit of work: commit on success, roll back on any exception.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
