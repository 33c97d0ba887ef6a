from pydantic import field_validator
from datetime import date, datetime

from library_api.domain.author import Author
from library_api.schemas.base import CamelModel

# Author base schema
class AuthorBase(CamelModel):
    name: str
    birth_date: date

    @field_validator("name", mode="before")
    @classmethod
    def trim_and_check(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("name cannot be empty")
        return v

    @field_validator("birth_date")
    @classmethod
    def in_the_past(cls, v: date) -> date:
        if v >= date.today():
            raise ValueError("birth date must be in the past")
        return v

# Author create schema
class AuthorCreate(AuthorBase):
    pass

# Author update schema
class AuthorUpdate(AuthorBase):
    pass

# Author read schema
class AuthorRead(CamelModel):
    id: int
    name: str
    birth_date: date
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, author: Author) -> "AuthorRead":
        if author.id is None:
            raise ValueError("author has not been persisted")
        return cls(
            id=author.id,
            name=author.name,
            birth_date=author.birth_date,
            created_at=author.created_at,
            updated_at=author.updated_at,
        )
