from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.logger import logger
from tripplanner.dependencies.auth import Identity
from tripplanner.dependencies.pagination import Pagination
from tripplanner.models.bookings.accommodation import Accommodation
from tripplanner.models.trips.trip_model import Trip
from tripplanner.schemas.bookings.accommodation import (
    AccommodationCreate, AccommodationFilters, AccommodationListResponse, AccommodationResponse,
    AccommodationUpdate
)
from tripplanner.services.common.query import apply_conditions, paginate, search_condition
from tripplanner.services.common.rules import (
    apply_changes, ensure_no_overlap, ensure_ordered, ensure_within_trip, get_in_trip, merged
)
from tripplanner.services.trips.ownership import get_owned_trip

OVERLAP_MESSAGE = "Dates overlap with another accommodation on this trip"


async def _check_stay(db: AsyncSession, trip: Trip, check_in, check_out, exclude_id=None) -> None:
    ensure_ordered(check_in, check_out, "Check-out date must be after check-in date")
    ensure_within_trip(trip, check_in, check_out, label="Accommodation dates")
    await ensure_no_overlap(
        db, Accommodation, trip.id,
        Accommodation.check_in_date, Accommodation.check_out_date,
        check_in, check_out,
        OVERLAP_MESSAGE,
        exclude_id=exclude_id,
    )


async def list_accommodation(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    filters: AccommodationFilters,
    pagination: Pagination
) -> AccommodationListResponse:
    trip = await get_owned_trip(db, identity, trip_id)
    stmt = apply_conditions(
        select(Accommodation).where(Accommodation.trip_id == trip.id),
        search_condition(
            filters.search,
            Accommodation.name,
            Accommodation.address,
            Accommodation.confirmation_code,
            Accommodation.notes,
        ),
        Accommodation.type == filters.type if filters.type else None,
    ).order_by(Accommodation.check_in_date.asc(), Accommodation.id.asc())

    rows, meta = await paginate(db, stmt, pagination)
    return AccommodationListResponse(
        items=[AccommodationResponse.model_validate(r) for r in rows],
        pagination=meta,
    )


async def get_accommodation(db: AsyncSession, identity: Identity, trip_id: int, accommodation_id: int) -> Accommodation:
    trip = await get_owned_trip(db, identity, trip_id)
    return await get_in_trip(db, Accommodation, trip.id, accommodation_id, "Accommodation")


async def create_accommodation(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    data: AccommodationCreate
) -> Accommodation:
    trip = await get_owned_trip(db, identity, trip_id)
    await _check_stay(db, trip, data.check_in_date, data.check_out_date)

    stay = Accommodation(**data.model_dump(), trip_id=trip.id)
    db.add(stay)
    await db.commit()
    await db.refresh(stay)
    logger.info(f"Accommodation {stay.id} ({stay.check_in_date}..{stay.check_out_date}) added to trip {trip.id}")
    return stay


async def update_accommodation(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    accommodation_id: int,
    data: AccommodationUpdate
) -> Accommodation:
    trip = await get_owned_trip(db, identity, trip_id)
    stay = await get_in_trip(db, Accommodation, trip.id, accommodation_id, "Accommodation")
    changes = data.model_dump(exclude_unset=True)

    if "check_in_date" in changes or "check_out_date" in changes:
        await _check_stay(
            db, trip,
            merged(stay, changes, "check_in_date"),
            merged(stay, changes, "check_out_date"),
            exclude_id=stay.id,
        )

    apply_changes(stay, changes)
    await db.commit()
    await db.refresh(stay)
    logger.info(f"Accommodation {accommodation_id} updated on trip {trip.id}")
    return stay


async def delete_accommodation(db: AsyncSession, identity: Identity, trip_id: int, accommodation_id: int) -> dict:
    trip = await get_owned_trip(db, identity, trip_id)
    stay = await get_in_trip(db, Accommodation, trip.id, accommodation_id, "Accommodation")
    await db.delete(stay)
    await db.commit()
    logger.info(f"Accommodation {accommodation_id} deleted from trip {trip.id}")
    return {"message": "Accommodation deleted successfully"}
