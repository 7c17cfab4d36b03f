"""Paginator: page arithmetic over the sorted records."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence

DEFAULT_PAGE_SIZE = 5


def coerce_page_size(value: Any, default: int = DEFAULT_PAGE_SIZE) -> int:
    """Turn user input into a page size.

    Numeric strings and numbers are truncated to an integer; anything
    non-numeric, zero or negative falls back to *default*.
    """
    if isinstance(value, bool):
        return default
    try:
        size = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    return size if size > 0 else default


@dataclass(frozen=True)
class PageState:
    page_size: int = DEFAULT_PAGE_SIZE
    current_page: int = 1


class Paginator:
    """Pure page computations. Pages are 1-based."""

    @staticmethod
    def total_pages(row_count: int, page_size: int) -> int:
        return max(1, math.ceil(row_count / page_size))

    @staticmethod
    def page(records: Sequence[Any], page: PageState) -> list:
        start = (page.current_page - 1) * page.page_size
        return list(records[start:start + page.page_size])

    @staticmethod
    def is_valid_page(value: Any, total_pages: int) -> bool:
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return 1 <= value <= total_pages
