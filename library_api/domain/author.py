"""
Author entity.

Business rules:
- name is required and may not be blank
- birth date must lie strictly before today
"""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime

from .errors import InvalidArgumentError


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class Author:
    name: str
    birth_date: date
    id: int | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidArgumentError("Author name is required")
        if self.birth_date >= date.today():
            raise InvalidArgumentError(
                f"Birth date must be in the past, got {self.birth_date.isoformat()}",
                details={"birth_date": self.birth_date.isoformat()},
            )

    def update(self, name: str, birth_date: date) -> "Author":
        """Replace name and birth date; invariants are re-checked."""
        return replace(self, name=name, birth_date=birth_date, updated_at=utcnow())

    @property
    def age(self) -> int:
        today = date.today()
        had_birthday = (today.month, today.day) >= (self.birth_date.month, self.birth_date.day)
        return today.year - self.birth_date.year - (0 if had_birthday else 1)

    @property
    def display_name(self) -> str:
        return self.name.strip()
