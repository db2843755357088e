"""Page windows over ordered sequences."""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

from loan_finance.config import DEFAULT_CONFIG, LoanFinanceConfig
from loan_finance.exceptions import InvalidInputError
from loan_finance.models.results import Page

T = TypeVar("T")


def paginate(items: Sequence[T], page: int, page_size: int) -> tuple[list[T], int]:
    """Slice one page out of ``items``.

    Parameters
    ----------
    items : Sequence[T]
        Ordered items.
    page : int
        1-based page number. Pages past the end yield no items.
    page_size : int
        Rows per page.

    Returns
    -------
    tuple[list[T], int]
        The page's items and the total page count (0 for no items).

    Raises
    ------
    InvalidInputError
        If ``page`` or ``page_size`` is below 1.
    """
    if page < 1:
        raise InvalidInputError(f"page must be at least 1, got {page}")
    if page_size < 1:
        raise InvalidInputError(f"page_size must be positive, got {page_size}")

    total_pages = math.ceil(len(items) / page_size)
    start = (page - 1) * page_size
    return list(items[start : start + page_size]), total_pages


def get_page(
    items: Sequence[T],
    page: int,
    page_size: int | None = None,
    *,
    config: LoanFinanceConfig | None = None,
) -> Page[T]:
    """Like ``paginate`` but returns a ``Page`` with navigation flags.

    ``page_size`` defaults to the configured ``rows_per_page``.
    """
    if page_size is None:
        page_size = (config or DEFAULT_CONFIG).display.rows_per_page
    page_items, total_pages = paginate(items, page, page_size)
    return Page(
        items=page_items,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        total_items=len(items),
    )
