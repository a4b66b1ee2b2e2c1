from typing import Any, List, Optional, Tuple

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.dependencies.pagination import Pagination
from tripplanner.schemas.common import PaginationMeta


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_condition(term: Optional[str], *columns):
    """Case-insensitive substring match of ``term`` against any of ``columns``.

    Returns None for an empty term so callers can skip it.
    """
    if term is None or not term.strip():
        return None
    pattern = f"%{_escape_like(term.strip())}%"
    return or_(*(column.ilike(pattern, escape="\\") for column in columns))


def apply_conditions(stmt: Select, *conditions) -> Select:
    for condition in conditions:
        if condition is not None:
            stmt = stmt.where(condition)
    return stmt


async def count_rows(db: AsyncSession, stmt: Select) -> int:
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    return await db.scalar(count_stmt) or 0


async def paginate(db: AsyncSession, stmt: Select, pagination: Pagination, *options) -> Tuple[List[Any], PaginationMeta]:
    """Run ``stmt`` for one page and return (rows, pagination meta).

    Loader ``options`` are applied to the page query only, never to the count.
    """
    total = await count_rows(db, stmt)
    page_stmt = stmt.offset(pagination.offset).limit(pagination.limit)
    if options:
        page_stmt = page_stmt.options(*options)
    result = await db.execute(page_stmt)
    return list(result.scalars().unique().all()), pagination.meta(total)


def currency_flags(currencies) -> Tuple[List[str], bool]:
    distinct = sorted({c.upper() for c in currencies if c})
    return distinct, len(distinct) > 1
