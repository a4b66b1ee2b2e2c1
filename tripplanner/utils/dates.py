from datetime import date, datetime, timezone
from typing import Any, Optional


def utcnow() -> datetime:
    """Naive UTC timestamp; every DateTime column stores naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def coerce_calendar_date(value: Any) -> Any:
    """Reduce datetimes and ISO timestamps to their calendar day.

    Used as a ``mode="before"`` validator so that ``2025-06-02T15:30:00Z``
    and ``2025-06-02`` land on the same date. Anything else is left for
    pydantic to validate.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10 and value[10] in ("T", " "):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError:
            return value
    return value


def day_bounds(day: date) -> tuple:
    """[start, end) datetimes covering one calendar day."""
    start = datetime(day.year, day.month, day.day)
    return start, datetime.fromordinal(day.toordinal() + 1)
