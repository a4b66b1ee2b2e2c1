import math

from fastapi import Query
from pydantic import BaseModel

from tripplanner.core.config import settings
from tripplanner.schemas.common import PaginationMeta


class Pagination(BaseModel):
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def meta(self, total: int) -> PaginationMeta:
        return PaginationMeta(
            page=self.page,
            limit=self.limit,
            total=total,
            pages=math.ceil(total / self.limit) if total else 0,
        )


# Non-numeric or non-positive values fail validation (400) instead of defaulting
def pagination_params(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> Pagination:
    return Pagination(page=page, limit=limit)


def trip_pagination_params(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.TRIP_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> Pagination:
    return Pagination(page=page, limit=limit)
