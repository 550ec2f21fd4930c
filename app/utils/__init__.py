"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    now_in_app_timezone,
    parse_app_datetime,
)
from .pagination import PageWindow, build_page_info, get_page_window

__all__ = [
    "PageWindow",
    "build_page_info",
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "get_app_timezone",
    "get_page_window",
    "now_in_app_timezone",
    "parse_app_datetime",
]
