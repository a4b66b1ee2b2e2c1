"""Consistency checks run before anything is written.

Each check either returns quietly or raises the matching error from
``tripplanner.core.exceptions``. Callers run them before staging any
change on the session, so a failed check never leaves a partial write.
"""
from datetime import date, datetime
from typing import Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.exceptions import BusinessRuleError, NotFoundError
from tripplanner.core.logger import logger
from tripplanner.models.trips.trip_model import Trip
from tripplanner.utils.dates import utcnow


def _as_day(value) -> date:
    return value.date() if isinstance(value, datetime) else value


def ensure_within_trip(trip: Trip, start, end=None, label: str = "Date") -> None:
    """``start``..``end`` (dates or datetimes, compared by calendar day) must sit inside the trip."""
    first = _as_day(start)
    last = _as_day(end) if end is not None else first
    if first < trip.start_date or last > trip.end_date:
        logger.warning(f"{label} {first}..{last} outside trip {trip.id} ({trip.start_date}..{trip.end_date})")
        raise BusinessRuleError(
            f"{label} must fall within the trip dates ({trip.start_date.isoformat()} to {trip.end_date.isoformat()})"
        )


def ensure_ordered(start, end, message: str) -> None:
    if start is not None and end is not None and end <= start:
        raise BusinessRuleError(message)


def ensure_future(moment: Optional[datetime], label: str = "Expiry date") -> None:
    if moment is not None and moment <= utcnow():
        raise BusinessRuleError(f"{label} must be in the future")


def overlap_condition(start_column, end_column, start, end):
    """SQL predicate: stored ``[start_column, end_column)`` intersects ``[start, end)``.

    Covers the new start falling inside a stored range, the new end falling
    inside one, and the new range swallowing one. Touching endpoints do not
    overlap.
    """
    return or_(
        and_(start_column <= start, end_column > start),
        and_(start_column < end, end_column >= end),
        and_(start_column >= start, end_column <= end),
    )


async def ensure_no_overlap(
    db: AsyncSession,
    model,
    trip_id: int,
    start_column,
    end_column,
    start,
    end,
    message: str,
    exclude_id: Optional[int] = None,
) -> None:
    stmt = select(model.id).where(
        model.trip_id == trip_id,
        overlap_condition(start_column, end_column, start, end),
    )
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)
    clash = await db.scalar(stmt.limit(1))
    if clash is not None:
        logger.warning(f"{model.__name__} {start}..{end} overlaps id {clash} on trip {trip_id}")
        raise BusinessRuleError(message)


async def ensure_unique(
    db: AsyncSession,
    model,
    trip_id: int,
    condition,
    message: str,
    exclude_id: Optional[int] = None,
) -> None:
    """No other row of ``model`` in the trip may satisfy ``condition``."""
    stmt = select(model.id).where(model.trip_id == trip_id, condition)
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)
    if await db.scalar(stmt.limit(1)) is not None:
        logger.warning(f"Duplicate {model.__name__} on trip {trip_id}: {message}")
        raise BusinessRuleError(message)


def apply_changes(obj, changes: dict) -> None:
    """Copy a partial update onto ``obj``.

    An explicit null clears nullable columns and is ignored for required ones.
    """
    columns = type(obj).__table__.columns
    for field, value in changes.items():
        if value is None and field in columns and not columns[field].nullable:
            continue
        setattr(obj, field, value)


def merged(obj, changes: dict, field: str):
    """Value ``field`` will have once ``changes`` are applied."""
    if field in changes:
        value = changes[field]
        if value is not None or type(obj).__table__.columns[field].nullable:
            return value
    return getattr(obj, field)


async def get_in_trip(db: AsyncSession, model, trip_id: int, obj_id: int, label: str):
    """Load ``model`` row ``obj_id`` only if it belongs to ``trip_id``."""
    obj = await db.scalar(select(model).where(model.id == obj_id, model.trip_id == trip_id))
    if obj is None:
        raise NotFoundError(f"{label} not found")
    return obj
