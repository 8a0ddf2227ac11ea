"""Fixed-size pagination over the filtered product list."""

import math
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel


class Page(BaseModel):
    items: list[Any]
    total: int
    page: int
    page_size: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def total_pages(count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, pages: int) -> int:
    return min(max(1, page), max(1, pages))


def paginate(items: Sequence[Any], page: int, page_size: int) -> Page:
    """Slice one page out of ``items``; out of range pages clamp to the nearest valid one."""
    pages = total_pages(len(items), page_size)
    current = clamp_page(page, pages)
    start = (current - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        total=len(items),
        page=current,
        page_size=page_size,
        total_pages=pages,
    )


def page_window(current: int, pages: int, radius: int = 2) -> list[int | None]:
    """Page numbers to render as buttons: first, last and ``radius`` around current.

    ``None`` marks a gap between non-adjacent numbers.
    """
    shown = [p for p in range(1, pages + 1) if p in (1, pages) or abs(p - current) <= radius]
    window: list[int | None] = []
    for number in shown:
        if window and number - window[-1] > 1:
            window.append(None)
        window.append(number)
    return window
