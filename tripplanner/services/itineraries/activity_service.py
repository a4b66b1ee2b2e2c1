from typing import List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.logger import logger
from tripplanner.dependencies.auth import Identity
from tripplanner.dependencies.pagination import Pagination
from tripplanner.models.itinerary.activity import Activity
from tripplanner.models.itinerary.itinerary_model import ItineraryActivity
from tripplanner.models.media.photo import Photo
from tripplanner.schemas.itineraries.activity import (
    ActivityCreate, ActivityFilters, ActivityListResponse, ActivityResponse, ActivityUpdate
)
from tripplanner.services.common.deletion import delete_with_policies
from tripplanner.services.common.query import apply_conditions, paginate, search_condition
from tripplanner.services.common.rules import apply_changes, get_in_trip
from tripplanner.services.trips.ownership import get_owned_trip


async def _attach_usage(db: AsyncSession, activities: List[Activity]) -> List[Activity]:
    """Set how many itinerary slots and photos reference each activity."""
    ids = [a.id for a in activities]
    if not ids:
        return activities
    scheduled = dict((await db.execute(
        select(ItineraryActivity.activity_id, func.count(ItineraryActivity.id))
        .where(ItineraryActivity.activity_id.in_(ids))
        .group_by(ItineraryActivity.activity_id)
    )).all())
    photographed = dict((await db.execute(
        select(Photo.activity_id, func.count(Photo.id))
        .where(Photo.activity_id.in_(ids))
        .group_by(Photo.activity_id)
    )).all())
    for activity in activities:
        activity.itinerary_count = scheduled.get(activity.id, 0)
        activity.photo_count = photographed.get(activity.id, 0)
    return activities


async def list_activities(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    filters: ActivityFilters,
    pagination: Pagination
) -> ActivityListResponse:
    trip = await get_owned_trip(db, identity, trip_id)
    stmt = apply_conditions(
        select(Activity).where(Activity.trip_id == trip.id),
        search_condition(filters.search, Activity.name, Activity.address, Activity.notes),
        Activity.category == filters.category if filters.category else None,
    ).order_by(Activity.created_at.desc(), Activity.id.desc())

    activities, meta = await paginate(db, stmt, pagination)
    await _attach_usage(db, activities)
    return ActivityListResponse(
        items=[ActivityResponse.model_validate(a) for a in activities],
        pagination=meta,
    )


async def get_activity(db: AsyncSession, identity: Identity, trip_id: int, activity_id: int) -> Activity:
    trip = await get_owned_trip(db, identity, trip_id)
    activity = await get_in_trip(db, Activity, trip.id, activity_id, "Activity")
    await _attach_usage(db, [activity])
    return activity


async def create_activity(db: AsyncSession, identity: Identity, trip_id: int, data: ActivityCreate) -> Activity:
    trip = await get_owned_trip(db, identity, trip_id)
    activity = Activity(**data.model_dump(), trip_id=trip.id)
    db.add(activity)
    await db.commit()
    await db.refresh(activity)
    activity.itinerary_count, activity.photo_count = 0, 0
    logger.info(f"Activity {activity.id} '{activity.name}' created on trip {trip.id}")
    return activity


async def update_activity(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    activity_id: int,
    data: ActivityUpdate
) -> Activity:
    trip = await get_owned_trip(db, identity, trip_id)
    activity = await get_in_trip(db, Activity, trip.id, activity_id, "Activity")
    apply_changes(activity, data.model_dump(exclude_unset=True))
    await db.commit()
    await db.refresh(activity)
    await _attach_usage(db, [activity])
    logger.info(f"Activity {activity_id} updated on trip {trip.id}")
    return activity


async def delete_activity(db: AsyncSession, identity: Identity, trip_id: int, activity_id: int) -> dict:
    """Refused while any itinerary schedules the activity; photos are unlinked."""
    trip = await get_owned_trip(db, identity, trip_id)
    activity = await get_in_trip(db, Activity, trip.id, activity_id, "Activity")
    await delete_with_policies(db, activity)
    await db.commit()
    logger.info(f"Activity {activity_id} deleted from trip {trip.id}")
    return {"message": "Activity deleted successfully"}
