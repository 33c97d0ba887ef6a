from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from library_api.core.config import settings
from library_api.db.session import get_db
from library_api.domain.publication_status import PublicationStatus
from library_api.services.book_service import BookService
from library_api.schemas.book import BookCreate, BookRead, BookUpdate
from library_api.schemas.pagination import PagedResponse
from typing import Annotated
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
)
router = APIRouter(prefix="/books", tags=["books"])

DbSession = Annotated[Session, Depends(get_db)]
Page = Annotated[int, Query(description="zero-based page number")]
Size = Annotated[int, Query(description="page size")]


@router.get("", response_model=PagedResponse[BookRead])
def list_books(
    db: DbSession,
    page: Page = 0,
    size: Size = settings.DEFAULT_PAGE_SIZE,
    title: Annotated[str | None, Query()] = None,
    status: Annotated[PublicationStatus | None, Query()] = None,
    author_id: Annotated[int | None, Query(alias="authorId")] = None,
):
    # filters are exclusive: title > status > authorId
    if title is not None and title.strip():
        return BookService.search_by_title(db, title, page, size)
    if status is not None:
        return BookService.find_by_publication_status(db, status, page, size)
    if author_id is not None:
        return BookService.find_by_author_id(db, author_id, page, size)
    return BookService.find_all(db, page, size)


@router.get("/published", response_model=PagedResponse[BookRead])
def list_published_books(db: DbSession, page: Page = 0, size: Size = settings.DEFAULT_PAGE_SIZE):
    return BookService.find_published_books(db, page, size)


@router.get("/unpublished", response_model=PagedResponse[BookRead])
def list_unpublished_books(db: DbSession, page: Page = 0, size: Size = settings.DEFAULT_PAGE_SIZE):
    return BookService.find_unpublished_books(db, page, size)


@router.get("/{book_id}", response_model=BookRead)
def get_book(book_id: int, db: DbSession):
    return BookService.find_by_id(db, book_id)


@router.post("", response_model=BookRead, status_code=HTTP_201_CREATED)
def create_book(data: BookCreate, db: DbSession):
    return BookService.create(db, data)


@router.put("/{book_id}", response_model=BookRead)
def update_book(book_id: int, data: BookUpdate, db: DbSession):
    return BookService.update(db, book_id, data)


@router.patch("/{book_id}/publication-status", response_model=BookRead)
def update_publication_status(
    book_id: int,
    status: Annotated[PublicationStatus, Query()],
    db: DbSession,
):
    return BookService.update_publication_status(db, book_id, status)


@router.post("/{book_id}/authors/{author_id}", response_model=BookRead)
def add_author_to_book(book_id: int, author_id: int, db: DbSession):
    return BookService.add_author(db, book_id, author_id)


@router.delete("/{book_id}/authors/{author_id}", response_model=BookRead)
def remove_author_from_book(book_id: int, author_id: int, db: DbSession):
    return BookService.remove_author(db, book_id, author_id)


@router.delete("/{book_id}", status_code=HTTP_204_NO_CONTENT)
def delete_book(book_id: int, db: DbSession) -> Response:
    BookService.delete_by_id(db, book_id)
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.get("/{book_id}/exists")
def book_exists(book_id: int, db: DbSession) -> dict[str, bool]:
    return {"exists": BookService.exists_by_id(db, book_id)}
