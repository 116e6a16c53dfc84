"""Tests for pagination helpers."""

import pytest

from helpers.pagination import page_offset, total_pages


class TestTotalPages:
    @pytest.mark.parametrize(
        "total,page_size,expected",
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 5, 5)],
    )
    def test_ceiling(self, total, page_size, expected):
        assert total_pages(total, page_size) == expected

    def test_rejects_zero_page_size(self):
        with pytest.raises(ValueError):
            total_pages(5, 0)


class TestPageOffset:
    def test_first_page_starts_at_zero(self):
        assert page_offset(1, 10) == 0

    def test_second_page(self):
        assert page_offset(2, 10) == 10

    def test_page_below_one_is_first_page(self):
        assert page_offset(0, 10) == 0
