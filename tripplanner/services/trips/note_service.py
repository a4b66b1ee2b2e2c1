from datetime import timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.config import settings
from tripplanner.core.logger import logger
from tripplanner.dependencies.auth import Identity
from tripplanner.dependencies.pagination import Pagination
from tripplanner.models.trips.note_model import TripNote
from tripplanner.schemas.trip.note import (
    NoteCreate, NoteFilters, NoteListResponse, NoteResponse, NoteStatistics, NoteUpdate
)
from tripplanner.services.common.query import apply_conditions, paginate, search_condition
from tripplanner.services.common.rules import apply_changes, get_in_trip
from tripplanner.services.trips.ownership import get_owned_trip
from tripplanner.utils.dates import utcnow


async def note_statistics(db: AsyncSession, trip_id: int) -> NoteStatistics:
    by_type = {
        note_type.value: n
        for note_type, n in (await db.execute(
            select(TripNote.type, func.count(TripNote.id))
            .where(TripNote.trip_id == trip_id)
            .group_by(TripNote.type)
        )).all()
    }
    since = utcnow() - timedelta(days=settings.RECENT_NOTE_DAYS)
    recent = await db.scalar(
        select(func.count(TripNote.id)).where(TripNote.trip_id == trip_id, TripNote.updated_at >= since)
    )
    return NoteStatistics(total=sum(by_type.values()), recent=recent or 0, by_type=by_type)


async def list_notes(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    filters: NoteFilters,
    pagination: Pagination
) -> NoteListResponse:
    trip = await get_owned_trip(db, identity, trip_id)
    stmt = apply_conditions(
        select(TripNote).where(TripNote.trip_id == trip.id),
        search_condition(filters.search, TripNote.title, TripNote.content),
        TripNote.type == filters.type if filters.type else None,
    ).order_by(TripNote.updated_at.desc(), TripNote.id.desc())

    notes, meta = await paginate(db, stmt, pagination)
    return NoteListResponse(
        items=[NoteResponse.model_validate(n) for n in notes],
        pagination=meta,
        statistics=await note_statistics(db, trip.id),
    )


async def get_note(db: AsyncSession, identity: Identity, trip_id: int, note_id: int) -> TripNote:
    trip = await get_owned_trip(db, identity, trip_id)
    return await get_in_trip(db, TripNote, trip.id, note_id, "Note")


async def create_note(db: AsyncSession, identity: Identity, trip_id: int, data: NoteCreate) -> TripNote:
    trip = await get_owned_trip(db, identity, trip_id)
    note = TripNote(**data.model_dump(), trip_id=trip.id)
    db.add(note)
    await db.commit()
    await db.refresh(note)
    logger.info(f"Note {note.id} ({note.type.value}) added to trip {trip.id}")
    return note


async def update_note(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    note_id: int,
    data: NoteUpdate
) -> TripNote:
    trip = await get_owned_trip(db, identity, trip_id)
    note = await get_in_trip(db, TripNote, trip.id, note_id, "Note")
    apply_changes(note, data.model_dump(exclude_unset=True))
    await db.commit()
    await db.refresh(note)
    logger.info(f"Note {note_id} updated on trip {trip.id}")
    return note


async def delete_note(db: AsyncSession, identity: Identity, trip_id: int, note_id: int) -> dict:
    trip = await get_owned_trip(db, identity, trip_id)
    note = await get_in_trip(db, TripNote, trip.id, note_id, "Note")
    await db.delete(note)
    await db.commit()
    logger.info(f"Note {note_id} deleted from trip {trip.id}")
    return {"message": "Note deleted successfully"}
