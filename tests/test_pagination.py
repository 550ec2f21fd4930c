"""Tests for the page window helpers."""

import pytest

from app.utils import build_page_info, get_page_window


@pytest.mark.parametrize(
    ("page", "page_size", "expected"),
    [
        (None, None, (1, 10, 0)),
        (3, 20, (3, 20, 40)),
        (0, 0, (1, 1, 0)),
        (-5, 500, (1, 100, 0)),
        ("2", "abc", (2, 10, 10)),
    ],
)
def test_get_page_window_clamps_values(page, page_size, expected):
    window = get_page_window(page, page_size)

    assert (window.page, window.page_size, window.offset) == expected


def test_build_page_info_middle_page():
    info = build_page_info(25, get_page_window(2, 10))

    assert info == {
        "current_page": 2,
        "total_pages": 3,
        "total_items": 25,
        "items_per_page": 10,
        "has_next_page": True,
        "has_previous_page": True,
        "next_page": 3,
        "previous_page": 1,
    }


def test_build_page_info_empty_result():
    info = build_page_info(0, get_page_window(1, 10))

    assert info["total_pages"] == 0
    assert info["has_next_page"] is False
    assert info["next_page"] is None
