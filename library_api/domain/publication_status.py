from enum import Enum


class PublicationStatus(str, Enum):
    """
    Publication lifecycle of a book.

    UNPUBLISHED may move to either state; PUBLISHED is terminal.
    """

    UNPUBLISHED = "UNPUBLISHED"
    PUBLISHED = "PUBLISHED"

    @classmethod
    def _missing_(cls, value: object) -> "PublicationStatus | None":
        # Accept "Published", "published", ...
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None

    def can_transition_to(self, new_status: "PublicationStatus") -> bool:
        if self is PublicationStatus.UNPUBLISHED:
            return True
        return new_status is PublicationStatus.PUBLISHED
