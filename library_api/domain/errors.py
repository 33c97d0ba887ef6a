"""
Error taxonomy raised by the domain and service layers.

Each error carries a stable ``code`` that the HTTP boundary maps onto a
status code and a structured response body.
"""

from typing import ClassVar


class LibraryError(Exception):
    """Base class for expected, client-facing failures."""

    code: ClassVar[str] = "LIBRARY_ERROR"

    def __init__(self, message: str, details: dict[str, object] | None = None):
        super().__init__(message)
        self.message: str = message
        self.details: dict[str, object] | None = details


class InvalidArgumentError(LibraryError):
    """An entity invariant was violated on construction or mutation."""

    code: ClassVar[str] = "INVALID_ARGUMENT"


class InvalidStateError(LibraryError):
    """The requested change is illegal for the entity's current state."""

    code: ClassVar[str] = "INVALID_STATE"


class ResourceNotFoundError(LibraryError):
    code: ClassVar[str] = "RESOURCE_NOT_FOUND"


class DuplicateResourceError(LibraryError):
    code: ClassVar[str] = "DUPLICATE_RESOURCE"
