"""Counted pagination.

The total and the page are both read from the same filtered query, so the
count can never disagree with the rows it describes.
"""

import math
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from sqlalchemy.orm import Query

import config
from schemas.common import Pagination


# Upper bound for page and limit; keeps OFFSET = (page - 1) * limit inside a
# signed 64-bit integer
MAX_PAGE_VALUE = 2**31 - 1


def _coerce_positive_int(raw: Any, default: int) -> int:
    if raw is None or (isinstance(raw, str) and raw.strip() == ""):
        return default
    try:
        value = int(float(raw))
    except (TypeError, ValueError, OverflowError):
        # Garbage is clamped, not rejected
        return 1
    return min(max(1, value), MAX_PAGE_VALUE)


@dataclass(frozen=True)
class PageParams:
    """Validated page and limit."""

    page: int = config.DEFAULT_PAGE
    limit: int = config.DEFAULT_PAGE_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_query(
        cls, page: Optional[Any] = None, limit: Optional[Any] = None
    ) -> "PageParams":
        """Coerce raw query values.

        Values are converted to integers and clamped to a minimum of 1.
        Non-numeric values become 1, absent values take the defaults.

        Args:
            page: Raw ``page`` query value.
            limit: Raw ``limit`` query value.

        Returns:
            PageParams instance.
        """
        return cls(
            page=_coerce_positive_int(page, config.DEFAULT_PAGE),
            limit=_coerce_positive_int(limit, config.DEFAULT_PAGE_LIMIT),
        )


def build_pagination(params: PageParams, total: int) -> Pagination:
    return Pagination(
        page=params.page,
        limit=params.limit,
        total=total,
        total_pages=math.ceil(total / params.limit),
    )


def paginate(query: Query, params: PageParams) -> Tuple[List[Any], Pagination]:
    """Count and fetch one page of a filtered query.

    Args:
        query: Filtered, joined and ordered query. Grouped queries are counted
            per group.
        params: Page parameters.

    Returns:
        Tuple of (rows on the page, pagination metadata).
    """
    total = query.order_by(None).count()
    rows = query.limit(params.limit).offset(params.offset).all()
    return rows, build_pagination(params, total)
