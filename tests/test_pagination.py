import pytest

from library_api.domain.errors import InvalidArgumentError
from library_api.schemas.pagination import PagedResponse
from library_api.utils.pagination import page_to_offset


class TestPagedResponse:
    """Envelope derivation."""

    @pytest.mark.parametrize(
        "total,size,expected_pages",
        [(0, 20, 0), (1, 20, 1), (20, 20, 1), (21, 20, 2), (100, 7, 15)],
    )
    def test_total_pages_is_ceiling(self, total, size, expected_pages):
        page = PagedResponse[int].of([], 0, size, total)
        assert page.total_pages == expected_pages

    def test_zero_page_size(self):
        assert PagedResponse[int].of([], 0, 0, 10).total_pages == 0

    def test_first_middle_last(self):
        first = PagedResponse[int].of([1, 2], 0, 2, 5)
        middle = PagedResponse[int].of([3, 4], 1, 2, 5)
        last = PagedResponse[int].of([5], 2, 2, 5)

        assert (first.is_first, first.is_last) == (True, False)
        assert (middle.is_first, middle.is_last) == (False, False)
        assert (last.is_first, last.is_last) == (False, True)

    def test_empty_result(self):
        page = PagedResponse[int].of([], 0, 20, 0)
        assert page.is_empty is True
        assert page.is_first is True
        assert page.is_last is True

    def test_camel_case_serialization(self):
        body = PagedResponse[int].of([1], 0, 10, 1).model_dump(by_alias=True)
        assert body == {
            "content": [1],
            "pageNumber": 0,
            "pageSize": 10,
            "totalElements": 1,
            "totalPages": 1,
            "isFirst": True,
            "isLast": True,
            "isEmpty": False,
        }


class TestPageToOffset:
    """Page argument validation."""

    def test_offset(self):
        assert page_to_offset(3, 20) == (20, 60)

    def test_negative_page(self):
        with pytest.raises(InvalidArgumentError, match="Page number"):
            page_to_offset(-1, 20)

    @pytest.mark.parametrize("size", [0, -5])
    def test_non_positive_size(self, size):
        with pytest.raises(InvalidArgumentError, match="Page size must be >= 1"):
            page_to_offset(0, size)

    def test_large_size_accepted(self):
        assert page_to_offset(2, 150) == (150, 300)
