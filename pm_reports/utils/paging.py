# pm_reports/utils/paging.py
from __future__ import annotations

from pm_reports.core.config import settings
from pm_reports.core.exceptions import InvalidArgumentError

__all__ = [
    "MAX_OFFSET",
    "limit_and_offset",
]

# OFFSET is bound as a signed 64-bit integer by every supported driver
MAX_OFFSET = 2**63 - 1


def limit_and_offset(
    page: int | None,
    limit: int | None,
    *,
    default_limit: int | None = None,
    max_limit: int | None = None,
) -> tuple[int, int]:
    """Translate page / limit into (limit, offset).

    - page defaults to 1, limit to ``settings.fetch_limit_default``
    - page < 1 or a limit outside 1..max raises InvalidArgumentError
    - offset = (page - 1) * limit, and must fit in a signed 64-bit integer
    """
    default_limit = default_limit if default_limit is not None else settings.fetch_limit_default
    max_limit = max_limit if max_limit is not None else settings.fetch_limit_max

    if page is None:
        page = 1
    elif page < 1:
        raise InvalidArgumentError("page must be >= 1")

    if limit is None:
        limit = default_limit
    elif not 1 <= limit <= max_limit:
        raise InvalidArgumentError(f"limit must be between 1 and {max_limit}")

    offset = (page - 1) * limit
    if offset > MAX_OFFSET:
        raise InvalidArgumentError("page is too large")
    return limit, offset
