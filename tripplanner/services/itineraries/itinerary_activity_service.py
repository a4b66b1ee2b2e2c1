from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tripplanner.core.exceptions import BusinessRuleError, NotFoundError
from tripplanner.core.logger import logger
from tripplanner.dependencies.auth import Identity
from tripplanner.models.itinerary.activity import Activity
from tripplanner.models.itinerary.itinerary_model import Itinerary, ItineraryActivity
from tripplanner.schemas.itineraries.itinerary import (
    ItineraryActivityCreate, ItineraryActivityReorder, ItineraryActivityUpdate
)
from tripplanner.services.common.rules import apply_changes, ensure_ordered, get_in_trip, merged
from tripplanner.services.trips.ownership import get_owned_trip


async def _owned_itinerary(db: AsyncSession, identity: Identity, trip_id: int, itinerary_id: int) -> Itinerary:
    trip = await get_owned_trip(db, identity, trip_id)
    return await get_in_trip(db, Itinerary, trip.id, itinerary_id, "Itinerary")


async def _scheduled(db: AsyncSession, itinerary_id: int) -> List[ItineraryActivity]:
    result = await db.execute(
        select(ItineraryActivity)
        .options(selectinload(ItineraryActivity.activity))
        .where(ItineraryActivity.itinerary_id == itinerary_id)
        .order_by(ItineraryActivity.order.asc(), ItineraryActivity.id.asc())
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def _fetch_slot(db: AsyncSession, itinerary_id: int, item_id: int) -> ItineraryActivity:
    slot = await db.scalar(
        select(ItineraryActivity)
        .options(selectinload(ItineraryActivity.activity))
        .where(ItineraryActivity.id == item_id, ItineraryActivity.itinerary_id == itinerary_id)
        .execution_options(populate_existing=True)
    )
    if slot is None:
        raise NotFoundError("Itinerary activity not found")
    return slot


async def resequence(
    db: AsyncSession,
    itinerary_id: int,
    requested: Optional[Dict[int, int]] = None
) -> List[ItineraryActivity]:
    """Rewrite ``order`` as 1..n for every activity of the itinerary.

    Rows keep their current relative sequence unless ``requested`` maps an
    id to a new position; on ties a requested row goes first. All rows
    are flushed together, so the caller's single commit covers every write.
    """
    requested = requested or {}
    slots = await _scheduled(db, itinerary_id)
    ranked = sorted(
        enumerate(slots),
        key=lambda pair: (
            requested.get(pair[1].id, pair[1].order),
            0 if pair[1].id in requested else 1,
            pair[0],
        ),
    )
    ordered = []
    for position, (_, slot) in enumerate(ranked, start=1):
        if slot.order != position:
            slot.order = position
        ordered.append(slot)
    await db.flush()
    return ordered


async def list_itinerary_activities(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    itinerary_id: int
) -> List[ItineraryActivity]:
    itinerary = await _owned_itinerary(db, identity, trip_id, itinerary_id)
    return await _scheduled(db, itinerary.id)


async def get_itinerary_activity(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    itinerary_id: int,
    item_id: int
) -> ItineraryActivity:
    itinerary = await _owned_itinerary(db, identity, trip_id, itinerary_id)
    return await _fetch_slot(db, itinerary.id, item_id)


async def add_itinerary_activity(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    itinerary_id: int,
    data: ItineraryActivityCreate
) -> ItineraryActivity:
    """Schedule an activity at the end of the day."""
    itinerary = await _owned_itinerary(db, identity, trip_id, itinerary_id)
    activity = await get_in_trip(db, Activity, itinerary.trip_id, data.activity_id, "Activity")

    already = await db.scalar(
        select(ItineraryActivity.id).where(
            ItineraryActivity.itinerary_id == itinerary.id,
            ItineraryActivity.activity_id == activity.id,
        )
    )
    if already is not None:
        logger.warning(f"Activity {activity.id} already scheduled in itinerary {itinerary.id}")
        raise BusinessRuleError("Activity is already scheduled in this itinerary")

    last = await db.scalar(
        select(func.max(ItineraryActivity.order)).where(ItineraryActivity.itinerary_id == itinerary.id)
    )
    slot = ItineraryActivity(
        itinerary_id=itinerary.id,
        activity_id=activity.id,
        start_time=data.start_time,
        end_time=data.end_time,
        notes=data.notes,
        order=(last or 0) + 1,
    )
    db.add(slot)
    await db.commit()
    logger.info(f"Activity {activity.id} scheduled at position {slot.order} in itinerary {itinerary.id}")
    return await _fetch_slot(db, itinerary.id, slot.id)


async def update_itinerary_activity(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    itinerary_id: int,
    item_id: int,
    data: ItineraryActivityUpdate
) -> ItineraryActivity:
    itinerary = await _owned_itinerary(db, identity, trip_id, itinerary_id)
    slot = await _fetch_slot(db, itinerary.id, item_id)
    changes = data.model_dump(exclude_unset=True)

    ensure_ordered(
        merged(slot, changes, "start_time"),
        merged(slot, changes, "end_time"),
        "End time must be after start time",
    )

    apply_changes(slot, changes)
    await db.commit()
    logger.info(f"Itinerary activity {item_id} updated in itinerary {itinerary.id}")
    return await _fetch_slot(db, itinerary.id, item_id)


async def reorder_itinerary_activities(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    itinerary_id: int,
    data: ItineraryActivityReorder
) -> List[ItineraryActivity]:
    itinerary = await _owned_itinerary(db, identity, trip_id, itinerary_id)
    known = set(
        (await db.execute(
            select(ItineraryActivity.id).where(ItineraryActivity.itinerary_id == itinerary.id)
        )).scalars().all()
    )
    missing = [item.id for item in data.items if item.id not in known]
    if missing:
        logger.warning(f"Reorder of itinerary {itinerary.id} referenced unknown ids {missing}")
        raise NotFoundError("Itinerary activity not found")

    ordered = await resequence(db, itinerary.id, {item.id: item.order for item in data.items})
    await db.commit()
    logger.info(f"Itinerary {itinerary.id} reordered ({len(ordered)} activities)")
    return ordered


async def remove_itinerary_activity(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    itinerary_id: int,
    item_id: int
) -> dict:
    itinerary = await _owned_itinerary(db, identity, trip_id, itinerary_id)
    slot = await _fetch_slot(db, itinerary.id, item_id)

    await db.delete(slot)
    await db.flush()
    remaining = await resequence(db, itinerary.id)
    await db.commit()
    logger.info(f"Itinerary activity {item_id} removed; {len(remaining)} left in itinerary {itinerary.id}")
    return {"message": "Activity removed from itinerary"}
