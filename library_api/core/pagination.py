"""Pagination — offset arithmetic and the pagination block returned by list endpoints.

Invariants:
    - page and limit are >= 1 (enforced at the route boundary)
    - limit is clamped to MAX_LIMIT; page to MAX_PAGE, so the offset always
      fits a 64-bit store integer
    - total_pages == ceil(total / limit); a page beyond range is empty, not an error
"""

import math
from dataclasses import dataclass

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
MAX_PAGE = 2**31


@dataclass(frozen=True)
class PageRequest:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def build(cls, page: int, limit: int) -> "PageRequest":
        return cls(
            page=min(max(page, 1), MAX_PAGE),
            limit=min(max(limit, 1), MAX_LIMIT),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def build_pagination(request: PageRequest, total: int) -> dict:
    """Pagination block: {page, limit, total, totalPages}."""
    return {
        "page": request.page,
        "limit": request.limit,
        "total": total,
        "totalPages": math.ceil(total / request.limit),
    }
