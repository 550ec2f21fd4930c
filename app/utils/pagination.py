"""Page window helpers shared by listing endpoints."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class PageWindow:
    """Clamped pagination parameters for a single listing call."""

    page: int
    page_size: int
    offset: int


def _coerce_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def get_page_window(
    page: Any = None,
    page_size: Any = None,
    *,
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> PageWindow:
    """Return a :class:`PageWindow` with ``page >= 1`` and ``1 <= page_size <= 100``."""

    resolved_page = max(1, _coerce_int(page, 1))
    resolved_size = min(MAX_PAGE_SIZE, max(1, _coerce_int(page_size, default_page_size)))
    return PageWindow(
        page=resolved_page,
        page_size=resolved_size,
        offset=(resolved_page - 1) * resolved_size,
    )


def build_page_info(total: int, window: PageWindow) -> dict[str, Any]:
    """Describe the position of ``window`` within ``total`` items."""

    total_pages = math.ceil(total / window.page_size) if total else 0
    has_next = window.page < total_pages
    has_previous = window.page > 1
    return {
        "current_page": window.page,
        "total_pages": total_pages,
        "total_items": total,
        "items_per_page": window.page_size,
        "has_next_page": has_next,
        "has_previous_page": has_previous,
        "next_page": window.page + 1 if has_next else None,
        "previous_page": window.page - 1 if has_previous else None,
    }


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "PageWindow",
    "build_page_info",
    "get_page_window",
]
