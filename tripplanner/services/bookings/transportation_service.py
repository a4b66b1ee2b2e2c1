from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.logger import logger
from tripplanner.dependencies.auth import Identity
from tripplanner.dependencies.pagination import Pagination
from tripplanner.models.bookings.transportation import Transportation
from tripplanner.schemas.bookings.transportation import (
    TransportationCreate, TransportationFilters, TransportationListResponse, TransportationResponse,
    TransportationUpdate
)
from tripplanner.services.common.query import apply_conditions, paginate, search_condition
from tripplanner.services.common.rules import apply_changes, ensure_ordered, ensure_within_trip, get_in_trip, merged
from tripplanner.services.trips.ownership import get_owned_trip


async def list_transportation(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    filters: TransportationFilters,
    pagination: Pagination
) -> TransportationListResponse:
    trip = await get_owned_trip(db, identity, trip_id)
    stmt = apply_conditions(
        select(Transportation).where(Transportation.trip_id == trip.id),
        search_condition(
            filters.search,
            Transportation.company,
            Transportation.departure_location,
            Transportation.arrival_location,
            Transportation.confirmation_code,
            Transportation.notes,
        ),
        Transportation.type == filters.type if filters.type else None,
    ).order_by(Transportation.departure_datetime.asc(), Transportation.id.asc())

    rows, meta = await paginate(db, stmt, pagination)
    return TransportationListResponse(
        items=[TransportationResponse.model_validate(r) for r in rows],
        pagination=meta,
    )


async def get_transportation(db: AsyncSession, identity: Identity, trip_id: int, transport_id: int) -> Transportation:
    trip = await get_owned_trip(db, identity, trip_id)
    return await get_in_trip(db, Transportation, trip.id, transport_id, "Transportation")


async def create_transportation(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    data: TransportationCreate
) -> Transportation:
    trip = await get_owned_trip(db, identity, trip_id)
    # Compared by calendar day: a flight may leave late on the trip's last day
    ensure_within_trip(trip, data.departure_datetime, data.arrival_datetime, label="Transportation")

    transport = Transportation(**data.model_dump(), trip_id=trip.id)
    db.add(transport)
    await db.commit()
    await db.refresh(transport)
    logger.info(
        f"{transport.type.value} {transport.departure_location} -> {transport.arrival_location} "
        f"added to trip {trip.id}"
    )
    return transport


async def update_transportation(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    transport_id: int,
    data: TransportationUpdate
) -> Transportation:
    trip = await get_owned_trip(db, identity, trip_id)
    transport = await get_in_trip(db, Transportation, trip.id, transport_id, "Transportation")
    changes = data.model_dump(exclude_unset=True)

    if "departure_datetime" in changes or "arrival_datetime" in changes:
        departure = merged(transport, changes, "departure_datetime")
        arrival = merged(transport, changes, "arrival_datetime")
        ensure_ordered(departure, arrival, "Arrival must be after departure")
        ensure_within_trip(trip, departure, arrival, label="Transportation")

    apply_changes(transport, changes)
    await db.commit()
    await db.refresh(transport)
    logger.info(f"Transportation {transport_id} updated on trip {trip.id}")
    return transport


async def delete_transportation(db: AsyncSession, identity: Identity, trip_id: int, transport_id: int) -> dict:
    trip = await get_owned_trip(db, identity, trip_id)
    transport = await get_in_trip(db, Transportation, trip.id, transport_id, "Transportation")
    await db.delete(transport)
    await db.commit()
    logger.info(f"Transportation {transport_id} deleted from trip {trip.id}")
    return {"message": "Transportation deleted successfully"}
