"""Shared router dependencies."""

from dataclasses import dataclass
from typing import Optional

from fastapi import Query

from rbac_admin.core.config import settings
from rbac_admin.schemas.schemas import MAX_SQL_INT


@dataclass
class Pagination:
    page: int
    page_size: int


def get_pagination(
    page: int = Query(1),
    page_size: Optional[int] = Query(None, alias="pageSize"),
) -> Pagination:
    """Read page/pageSize, clamping out-of-range values instead of rejecting them."""
    if page_size is None:
        page_size = settings.DEFAULT_PAGE_SIZE
    page_size = min(max(page_size, 1), settings.MAX_PAGE_SIZE)
    # keep the row offset inside SQLite's integer range
    page = min(max(page, 1), MAX_SQL_INT // page_size)
    return Pagination(page=page, page_size=page_size)
