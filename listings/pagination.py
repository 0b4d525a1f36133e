import math
from dataclasses import dataclass

from .constants import PAGE_SIZE


@dataclass(frozen=True)
class Page:
    items: list
    page: int
    page_size: int
    total_count: int
    total_pages: int

    @property
    def has_previous(self):
        return self.page > 1

    @property
    def has_next(self):
        return self.page < self.total_pages


def paginate(rows, page, page_size=PAGE_SIZE):
    """
    Slice `rows` for a 1-based page number.

    The page is not clamped: a page past the end yields no items,
    callers decide whether to offer navigation back.
    """
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    rows = list(rows)
    total_count = len(rows)
    start = (page - 1) * page_size
    items = rows[start:start + page_size] if start >= 0 else []
    return Page(
        items=items,
        page=page,
        page_size=page_size,
        total_count=total_count,
        total_pages=math.ceil(total_count / page_size),
    )
