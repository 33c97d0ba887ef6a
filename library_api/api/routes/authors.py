from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from library_api.core.config import settings
from library_api.db.session import get_db
from library_api.services.author_service import AuthorService
from library_api.schemas.author import AuthorCreate, AuthorRead, AuthorUpdate
from library_api.schemas.pagination import PagedResponse
from typing import Annotated
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
)
router = APIRouter(prefix="/authors", tags=["authors"])

DbSession = Annotated[Session, Depends(get_db)]


@router.get("", response_model=PagedResponse[AuthorRead])
def list_authors(
    db: DbSession,
    page: Annotated[int, Query(description="zero-based page number")] = 0,
    size: Annotated[int, Query(description="page size")] = settings.DEFAULT_PAGE_SIZE,
    name: Annotated[str | None, Query(description="case-insensitive name filter")] = None,
):
    if name is None or not name.strip():
        return AuthorService.find_all(db, page, size)
    return AuthorService.search_by_name(db, name, page, size)


@router.get("/{author_id}", response_model=AuthorRead)
def get_author(author_id: int, db: DbSession):
    return AuthorService.find_by_id(db, author_id)


@router.post("", response_model=AuthorRead, status_code=HTTP_201_CREATED)
def create_author(data: AuthorCreate, db: DbSession):
    return AuthorService.create(db, data)


@router.put("/{author_id}", response_model=AuthorRead)
def update_author(author_id: int, data: AuthorUpdate, db: DbSession):
    return AuthorService.update(db, author_id, data)


@router.delete("/{author_id}", status_code=HTTP_204_NO_CONTENT)
def delete_author(author_id: int, db: DbSession) -> Response:
    AuthorService.delete_by_id(db, author_id)
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.get("/{author_id}/exists")
def author_exists(author_id: int, db: DbSession) -> dict[str, bool]:
    return {"exists": AuthorService.exists_by_id(db, author_id)}
