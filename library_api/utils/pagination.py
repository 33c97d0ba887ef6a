from library_api.domain.errors import InvalidArgumentError


def page_to_offset(page_number: int, page_size: int) -> tuple[int, int]:
    """Validate zero-based page arguments and return (limit, offset)."""
    if page_number < 0:
        raise InvalidArgumentError(
            "Page number must be >= 0", details={"page": page_number}
        )
    if page_size <= 0:
        raise InvalidArgumentError(
            "Page size must be >= 1", details={"size": page_size}
        )
    return page_size, page_number * page_size
