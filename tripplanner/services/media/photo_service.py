from datetime import date

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tripplanner.core.exceptions import NotFoundError
from tripplanner.core.logger import logger
from tripplanner.dependencies.auth import Identity
from tripplanner.dependencies.pagination import Pagination
from tripplanner.models.itinerary.activity import Activity
from tripplanner.models.itinerary.itinerary_model import Itinerary
from tripplanner.models.media.photo import Photo
from tripplanner.schemas.media.photo import (
    ItineraryPhotoCount, PhotoCreate, PhotoFilters, PhotoListResponse, PhotoResponse, PhotoStatistics, PhotoUpdate
)
from tripplanner.services.common.query import apply_conditions, paginate
from tripplanner.services.common.rules import apply_changes, get_in_trip
from tripplanner.services.trips.ownership import get_owned_trip
from tripplanner.utils.dates import day_bounds


def _taken_on(day: date):
    """Photos taken that day, or undated photos attached to that day's itinerary."""
    start, end = day_bounds(day)
    undated_on_day = select(Itinerary.id).where(Itinerary.date == day)
    return or_(
        and_(Photo.taken_at >= start, Photo.taken_at < end),
        and_(Photo.taken_at.is_(None), Photo.itinerary_id.in_(undated_on_day)),
    )


async def _check_links(db: AsyncSession, trip_id: int, changes: dict) -> None:
    if changes.get("itinerary_id") is not None:
        await get_in_trip(db, Itinerary, trip_id, changes["itinerary_id"], "Itinerary")
    if changes.get("activity_id") is not None:
        await get_in_trip(db, Activity, trip_id, changes["activity_id"], "Activity")


async def _fetch_photo(db: AsyncSession, trip_id: int, photo_id: int) -> Photo:
    photo = await db.scalar(
        select(Photo)
        .options(selectinload(Photo.itinerary), selectinload(Photo.activity))
        .where(Photo.id == photo_id, Photo.trip_id == trip_id)
        .execution_options(populate_existing=True)
    )
    if photo is None:
        raise NotFoundError("Photo not found")
    return photo


async def photo_statistics(db: AsyncSession, trip_id: int) -> PhotoStatistics:
    total = await db.scalar(select(func.count(Photo.id)).where(Photo.trip_id == trip_id))
    with_location = await db.scalar(
        select(func.count(Photo.id)).where(
            Photo.trip_id == trip_id,
            Photo.latitude.is_not(None),
            Photo.longitude.is_not(None),
        )
    )
    rows = (await db.execute(
        select(Photo.itinerary_id, func.count(Photo.id))
        .where(Photo.trip_id == trip_id)
        .group_by(Photo.itinerary_id)
    )).all()
    return PhotoStatistics(
        total=total or 0,
        with_location=with_location or 0,
        by_itinerary=[ItineraryPhotoCount(itinerary_id=itinerary_id, count=n) for itinerary_id, n in rows],
    )


async def list_photos(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    filters: PhotoFilters,
    pagination: Pagination
) -> PhotoListResponse:
    trip = await get_owned_trip(db, identity, trip_id)
    stmt = apply_conditions(
        select(Photo).where(Photo.trip_id == trip.id),
        Photo.itinerary_id == filters.itinerary_id if filters.itinerary_id else None,
        Photo.activity_id == filters.activity_id if filters.activity_id else None,
        _taken_on(filters.date) if filters.date else None,
    ).order_by(Photo.taken_at.desc().nulls_last(), Photo.created_at.desc(), Photo.id.desc())

    photos, meta = await paginate(db, stmt, pagination, selectinload(Photo.itinerary), selectinload(Photo.activity))
    return PhotoListResponse(
        items=[PhotoResponse.model_validate(p) for p in photos],
        pagination=meta,
        statistics=await photo_statistics(db, trip.id),
    )


async def get_photo(db: AsyncSession, identity: Identity, trip_id: int, photo_id: int) -> Photo:
    trip = await get_owned_trip(db, identity, trip_id)
    return await _fetch_photo(db, trip.id, photo_id)


async def create_photo(db: AsyncSession, identity: Identity, trip_id: int, data: PhotoCreate) -> Photo:
    trip = await get_owned_trip(db, identity, trip_id)
    payload = data.model_dump()
    await _check_links(db, trip.id, payload)

    photo = Photo(**payload, trip_id=trip.id)
    db.add(photo)
    await db.commit()
    logger.info(f"Photo {photo.id} added to trip {trip.id}")
    return await _fetch_photo(db, trip.id, photo.id)


async def update_photo(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    photo_id: int,
    data: PhotoUpdate
) -> Photo:
    trip = await get_owned_trip(db, identity, trip_id)
    photo = await get_in_trip(db, Photo, trip.id, photo_id, "Photo")
    changes = data.model_dump(exclude_unset=True)
    await _check_links(db, trip.id, changes)

    apply_changes(photo, changes)
    await db.commit()
    logger.info(f"Photo {photo_id} updated on trip {trip.id}")
    return await _fetch_photo(db, trip.id, photo_id)


async def delete_photo(db: AsyncSession, identity: Identity, trip_id: int, photo_id: int) -> dict:
    trip = await get_owned_trip(db, identity, trip_id)
    photo = await get_in_trip(db, Photo, trip.id, photo_id, "Photo")
    await db.delete(photo)
    await db.commit()
    logger.info(f"Photo {photo_id} deleted from trip {trip.id}")
    return {"message": "Photo deleted successfully"}
