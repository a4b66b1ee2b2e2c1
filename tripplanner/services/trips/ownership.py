from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.exceptions import NotFoundError
from tripplanner.core.logger import logger
from tripplanner.dependencies.auth import Identity
from tripplanner.models.trips.trip_model import Trip
from tripplanner.models.user.user import User


async def get_owned_trip(db: AsyncSession, identity: Identity, trip_id: int, *options) -> Trip:
    """Return the trip if ``identity`` owns it.

    A missing trip and somebody else's trip both raise the same 404 so
    that callers cannot probe for trip ids.
    """
    stmt = select(Trip).where(Trip.id == trip_id, Trip.user_id == identity.user_id)
    if options:
        stmt = stmt.options(*options).execution_options(populate_existing=True)
    trip = await db.scalar(stmt)
    if trip is None:
        logger.warning(f"Trip {trip_id} not found for user {identity.user_id}")
        raise NotFoundError("Trip not found")
    return trip


async def get_owned_trip_by_email(db: AsyncSession, email: str, trip_id: int) -> Trip:
    """Variant for callers that only know the account email."""
    user = await db.scalar(select(User).where(User.email == email))
    if user is None:
        logger.warning(f"No user for email {email} while resolving trip {trip_id}")
        raise NotFoundError("Trip not found")
    return await get_owned_trip(db, Identity(user_id=user.id, email=user.email), trip_id)
