from typing import List

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tripplanner.core.exceptions import BusinessRuleError, NotFoundError
from tripplanner.core.logger import logger
from tripplanner.dependencies.auth import Identity
from tripplanner.dependencies.pagination import Pagination
from tripplanner.models.itinerary.activity import Activity
from tripplanner.models.itinerary.itinerary_model import Itinerary, ItineraryActivity
from tripplanner.models.media.photo import Photo
from tripplanner.models.trips.trip_model import Trip
from tripplanner.schemas.itineraries.itinerary import (
    CategoryCount, ItineraryCreate, ItineraryFilters, ItineraryListResponse, ItineraryResponse,
    ItineraryStatistics, ItineraryUpdate
)
from tripplanner.services.common.deletion import delete_with_policies
from tripplanner.services.common.query import apply_conditions, paginate
from tripplanner.services.common.rules import apply_changes, ensure_unique, ensure_within_trip, get_in_trip
from tripplanner.services.trips.ownership import get_owned_trip

DAY_TAKEN_MESSAGE = "An itinerary already exists for this date"


def _with_activities():
    return selectinload(Itinerary.activities).selectinload(ItineraryActivity.activity)


async def _attach_photo_counts(db: AsyncSession, itineraries: List[Itinerary]) -> List[Itinerary]:
    ids = [i.id for i in itineraries]
    if not ids:
        return itineraries
    counts = dict((await db.execute(
        select(Photo.itinerary_id, func.count(Photo.id))
        .where(Photo.itinerary_id.in_(ids))
        .group_by(Photo.itinerary_id)
    )).all())
    for itinerary in itineraries:
        itinerary.photo_count = counts.get(itinerary.id, 0)
    return itineraries


async def fetch_itinerary(db: AsyncSession, trip_id: int, itinerary_id: int) -> Itinerary:
    itinerary = await db.scalar(
        select(Itinerary)
        .options(_with_activities())
        .where(Itinerary.id == itinerary_id, Itinerary.trip_id == trip_id)
        .execution_options(populate_existing=True)
    )
    if itinerary is None:
        raise NotFoundError("Itinerary not found")
    await _attach_photo_counts(db, [itinerary])
    return itinerary


async def itinerary_statistics(db: AsyncSession, trip_id: int) -> ItineraryStatistics:
    total_days = await db.scalar(select(func.count(Itinerary.id)).where(Itinerary.trip_id == trip_id))
    rows = (await db.execute(
        select(Activity.category, func.count(distinct(Activity.id)), func.count(ItineraryActivity.id))
        .select_from(ItineraryActivity)
        .join(Itinerary, ItineraryActivity.itinerary_id == Itinerary.id)
        .join(Activity, ItineraryActivity.activity_id == Activity.id)
        .where(Itinerary.trip_id == trip_id)
        .group_by(Activity.category)
        .order_by(func.count(distinct(Activity.id)).desc())
    )).all()
    # Each used activity counts once per category; slots are totalled separately
    distribution = [CategoryCount(category=category, count=n) for category, n, _ in rows]
    return ItineraryStatistics(
        total_days=total_days or 0,
        total_activities=sum(slots for _, _, slots in rows),
        category_distribution=distribution,
    )


async def list_itineraries(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    filters: ItineraryFilters,
    pagination: Pagination
) -> ItineraryListResponse:
    trip = await get_owned_trip(db, identity, trip_id)
    stmt = apply_conditions(
        select(Itinerary).where(Itinerary.trip_id == trip.id),
        Itinerary.date == filters.date if filters.date else None,
    ).order_by(Itinerary.date.asc())

    itineraries, meta = await paginate(db, stmt, pagination, _with_activities())
    await _attach_photo_counts(db, itineraries)
    return ItineraryListResponse(
        items=[ItineraryResponse.model_validate(i) for i in itineraries],
        pagination=meta,
        statistics=await itinerary_statistics(db, trip.id),
    )


async def get_itinerary(db: AsyncSession, identity: Identity, trip_id: int, itinerary_id: int) -> Itinerary:
    trip = await get_owned_trip(db, identity, trip_id)
    return await fetch_itinerary(db, trip.id, itinerary_id)


async def _check_day(db: AsyncSession, trip: Trip, day, exclude_id=None) -> None:
    ensure_within_trip(trip, day, label="Itinerary date")
    await ensure_unique(db, Itinerary, trip.id, Itinerary.date == day, DAY_TAKEN_MESSAGE, exclude_id=exclude_id)


async def create_itinerary(db: AsyncSession, identity: Identity, trip_id: int, data: ItineraryCreate) -> Itinerary:
    """Create a day plan, optionally scheduling activities in the order given."""
    trip = await get_owned_trip(db, identity, trip_id)
    await _check_day(db, trip, data.date)

    activity_ids = [item.activity_id for item in data.activities]
    if len(set(activity_ids)) != len(activity_ids):
        raise BusinessRuleError("An activity can only be scheduled once per itinerary")
    for activity_id in activity_ids:
        await get_in_trip(db, Activity, trip.id, activity_id, "Activity")

    itinerary = Itinerary(trip_id=trip.id, date=data.date, notes=data.notes)
    db.add(itinerary)
    await db.flush()

    for position, item in enumerate(data.activities, start=1):
        db.add(ItineraryActivity(
            itinerary_id=itinerary.id,
            activity_id=item.activity_id,
            start_time=item.start_time,
            end_time=item.end_time,
            notes=item.notes,
            order=position,
        ))

    await db.commit()
    logger.info(f"Itinerary {itinerary.id} for {itinerary.date} created on trip {trip.id} with {len(activity_ids)} activities")
    return await fetch_itinerary(db, trip.id, itinerary.id)


async def update_itinerary(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    itinerary_id: int,
    data: ItineraryUpdate
) -> Itinerary:
    trip = await get_owned_trip(db, identity, trip_id)
    itinerary = await get_in_trip(db, Itinerary, trip.id, itinerary_id, "Itinerary")
    changes = data.model_dump(exclude_unset=True)

    if changes.get("date") is not None and changes["date"] != itinerary.date:
        await _check_day(db, trip, changes["date"], exclude_id=itinerary.id)

    apply_changes(itinerary, changes)
    await db.commit()
    logger.info(f"Itinerary {itinerary_id} updated on trip {trip.id}")
    return await fetch_itinerary(db, trip.id, itinerary_id)


async def delete_itinerary(db: AsyncSession, identity: Identity, trip_id: int, itinerary_id: int) -> dict:
    """Removes the day together with its scheduled activities and photos."""
    trip = await get_owned_trip(db, identity, trip_id)
    itinerary = await get_in_trip(db, Itinerary, trip.id, itinerary_id, "Itinerary")
    await delete_with_policies(db, itinerary)
    await db.commit()
    logger.info(f"Itinerary {itinerary_id} deleted from trip {trip.id}")
    return {"message": "Itinerary deleted successfully"}
