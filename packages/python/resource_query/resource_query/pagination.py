"""Page and limit parsing plus page metadata arithmetic."""

from __future__ import annotations

import math
from typing import Any, Optional

from .errors import ClientInputError

# BSON integers are signed 64-bit
MAX_STORE_INT = 2**63 - 1


def _as_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def parse_page(value: Any) -> int:
    """Return the 1-based page number.

    Absent or non-numeric input falls back to the first page; a numeric value
    below 1 is rejected.
    """

    page = _as_int(value)
    if page is None:
        return 1
    if page < 1:
        raise ClientInputError(f"page must be >= 1, got {page}")
    if page > MAX_STORE_INT:
        raise ClientInputError(f"page is too large: {page}")
    return page


def parse_limit(value: Any, default: Optional[int]) -> Optional[int]:
    """Return the page size, or ``None`` for unbounded listing.

    Absent or non-numeric input falls back to ``default``. ``0`` selects
    unbounded mode explicitly.
    """

    limit = _as_int(value)
    if limit is None:
        return default
    if limit < 0:
        raise ClientInputError(f"limit must be >= 0, got {limit}")
    if limit > MAX_STORE_INT:
        raise ClientInputError(f"limit is too large: {limit}")
    if limit == 0:
        return None
    return limit


def skip_for(page: int, limit: Optional[int]) -> int:
    if not limit:
        return 0
    skip = (page - 1) * limit
    if skip > MAX_STORE_INT:
        raise ClientInputError(f"page {page} is out of range for limit {limit}")
    return skip


def total_pages(total_count: int, limit: int) -> int:
    return math.ceil(total_count / limit)
