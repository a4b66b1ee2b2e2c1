from typing import Dict, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tripplanner.core.logger import logger
from tripplanner.dependencies.auth import Identity
from tripplanner.dependencies.pagination import Pagination
from tripplanner.models.bookings.accommodation import Accommodation
from tripplanner.models.bookings.transportation import Transportation
from tripplanner.models.itinerary.activity import Activity
from tripplanner.models.media.photo import Photo
from tripplanner.models.trips.trip_model import Trip, TripStatus
from tripplanner.schemas.trip.trip_detail import TripDetailResponse
from tripplanner.schemas.trip.trip_schema import (
    TripCounts, TripCreate, TripFilters, TripListResponse, TripResponse, TripUpdate
)
from tripplanner.services.common.deletion import delete_with_policies
from tripplanner.services.common.query import apply_conditions, paginate, search_condition
from tripplanner.services.expense.budget_service import attach_actuals
from tripplanner.services.trips.ownership import get_owned_trip

RECENT_ACTIVITY_LIMIT = 5
RECENT_PHOTO_LIMIT = 20

_COUNTED = (
    ("activities", Activity),
    ("transportation", Transportation),
    ("accommodation", Accommodation),
    ("photos", Photo),
)


async def _trip_counts(db: AsyncSession, trip_ids: List[int]) -> Dict[int, TripCounts]:
    counts = {trip_id: {} for trip_id in trip_ids}
    if not trip_ids:
        return {}
    for key, model in _COUNTED:
        rows = await db.execute(
            select(model.trip_id, func.count(model.id))
            .where(model.trip_id.in_(trip_ids))
            .group_by(model.trip_id)
        )
        for trip_id, n in rows.all():
            counts[trip_id][key] = n
    return {trip_id: TripCounts(**values) for trip_id, values in counts.items()}


async def _with_counts(db: AsyncSession, trips: List[Trip]) -> List[Trip]:
    counts = await _trip_counts(db, [trip.id for trip in trips])
    for trip in trips:
        trip.counts = counts.get(trip.id, TripCounts())
    return trips


async def list_trips(
    db: AsyncSession,
    identity: Identity,
    filters: TripFilters,
    pagination: Pagination
) -> TripListResponse:
    stmt = apply_conditions(
        select(Trip).where(Trip.user_id == identity.user_id),
        search_condition(filters.search, Trip.name, Trip.destination, Trip.description),
        Trip.status == filters.status if filters.status else None,
    ).order_by(Trip.start_date.desc(), Trip.id.desc())

    trips, meta = await paginate(db, stmt, pagination)
    await _with_counts(db, trips)
    logger.info(f"Retrieved {len(trips)} of {meta.total} trips for user {identity.user_id}")
    return TripListResponse(
        items=[TripResponse.model_validate(trip) for trip in trips],
        pagination=meta,
    )


async def create_trip(db: AsyncSession, identity: Identity, trip_data: TripCreate) -> Trip:
    trip = Trip(**trip_data.model_dump(), user_id=identity.user_id, status=TripStatus.PLANNING)
    db.add(trip)
    await db.commit()
    await db.refresh(trip)
    trip.counts = TripCounts()
    logger.info(f"Trip {trip.id} created by user {identity.user_id}")
    return trip


async def get_trip_detail(db: AsyncSession, identity: Identity, trip_id: int) -> TripDetailResponse:
    trip = await get_owned_trip(
        db, identity, trip_id,
        selectinload(Trip.transportation),
        selectinload(Trip.accommodation),
        selectinload(Trip.budgets),
        selectinload(Trip.documents),
        selectinload(Trip.notes),
    )
    await _with_counts(db, [trip])
    await attach_actuals(db, trip.budgets)

    recent_activities = (await db.execute(
        select(Activity)
        .where(Activity.trip_id == trip.id)
        .order_by(Activity.created_at.desc(), Activity.id.desc())
        .limit(RECENT_ACTIVITY_LIMIT)
    )).scalars().all()
    recent_photos = (await db.execute(
        select(Photo)
        .options(selectinload(Photo.itinerary), selectinload(Photo.activity))
        .where(Photo.trip_id == trip.id)
        .order_by(Photo.created_at.desc(), Photo.id.desc())
        .limit(RECENT_PHOTO_LIMIT)
    )).scalars().all()

    trip.recent_activities = recent_activities
    trip.recent_photos = recent_photos
    return TripDetailResponse.model_validate(trip)


async def update_trip(db: AsyncSession, identity: Identity, trip_id: int, trip_data: TripUpdate) -> Trip:
    trip = await get_owned_trip(db, identity, trip_id)
    for field, value in trip_data.model_dump().items():
        setattr(trip, field, value)
    await db.commit()
    await db.refresh(trip)
    await _with_counts(db, [trip])
    logger.info(f"Trip {trip_id} updated by user {identity.user_id}")
    return trip


async def delete_trip(db: AsyncSession, identity: Identity, trip_id: int) -> dict:
    trip = await get_owned_trip(db, identity, trip_id)
    await delete_with_policies(db, trip)
    await db.commit()
    logger.info(f"Trip {trip_id} and its nested records deleted by user {identity.user_id}")
    return {"message": "Trip deleted successfully"}
