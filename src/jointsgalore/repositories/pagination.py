"""Page slicing for sorted post listings."""
from __future__ import annotations

import math
import re
from collections.abc import Sequence
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class Page(BaseModel, Generic[T]):
    """One page of a listing plus the metadata needed to render pagers."""

    items: list[T]
    page: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=1)


def _parse_page(page: int | str | None) -> int:
    # "2.5" and "3abc" read as 2 and 3, like a query string parser would
    if page is None:
        return 1
    if isinstance(page, int):
        return page
    match = _LEADING_INT.match(str(page))
    return int(match.group(1)) if match else 1


def paginate(items: Sequence[T], page: int | str | None, page_size: int) -> Page[T]:
    """Return page ``page`` of ``items``.

    The page number is clamped into ``[1, total_pages]``. Only the leading
    integer of a string counts; unparsable or missing values mean page 1.
    ``total_pages`` is at least 1 even when ``items`` is empty.
    """
    if page_size < 1:
        raise ValueError("page_size must be positive")
    number = _parse_page(page)

    total_pages = max(1, math.ceil(len(items) / page_size))
    number = min(max(number, 1), total_pages)
    start = (number - 1) * page_size
    return Page(items=list(items[start:start + page_size]), page=number, total_pages=total_pages)
