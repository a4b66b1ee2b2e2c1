from datetime import timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.config import settings
from tripplanner.core.logger import logger
from tripplanner.dependencies.auth import Identity
from tripplanner.dependencies.pagination import Pagination
from tripplanner.models.media.document import Document
from tripplanner.schemas.media.document import (
    DocumentCreate, DocumentFilters, DocumentListResponse, DocumentResponse, DocumentStatistics,
    DocumentUpdate, ExpiringDocument
)
from tripplanner.services.common.query import apply_conditions, paginate, search_condition
from tripplanner.services.common.rules import apply_changes, ensure_future, ensure_unique, get_in_trip
from tripplanner.services.trips.ownership import get_owned_trip
from tripplanner.utils.dates import utcnow


def _name_taken(name: str) -> str:
    return f"A document named '{name}' already exists for this trip"


def expiring_window():
    now = utcnow()
    return now, now + timedelta(days=settings.DOCUMENT_EXPIRY_WINDOW_DAYS)


def expiring_condition():
    start, end = expiring_window()
    return Document.expiry_date.is_not(None) & (Document.expiry_date >= start) & (Document.expiry_date <= end)


async def document_statistics(db: AsyncSession, trip_id: int) -> DocumentStatistics:
    by_type = {
        doc_type.value: n
        for doc_type, n in (await db.execute(
            select(Document.type, func.count(Document.id))
            .where(Document.trip_id == trip_id)
            .group_by(Document.type)
        )).all()
    }
    expiring = (await db.execute(
        select(Document)
        .where(Document.trip_id == trip_id, expiring_condition())
        .order_by(Document.expiry_date.asc())
    )).scalars().all()
    return DocumentStatistics(
        total=sum(by_type.values()),
        by_type=by_type,
        expiring_soon=len(expiring),
        expiring_documents=[ExpiringDocument.model_validate(d) for d in expiring],
    )


async def list_documents(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    filters: DocumentFilters,
    pagination: Pagination
) -> DocumentListResponse:
    trip = await get_owned_trip(db, identity, trip_id)
    stmt = apply_conditions(
        select(Document).where(Document.trip_id == trip.id),
        search_condition(filters.search, Document.name, Document.notes),
        Document.type == filters.type if filters.type else None,
    ).order_by(Document.created_at.desc(), Document.id.desc())

    documents, meta = await paginate(db, stmt, pagination)
    return DocumentListResponse(
        items=[DocumentResponse.model_validate(d) for d in documents],
        pagination=meta,
        statistics=await document_statistics(db, trip.id),
    )


async def get_document(db: AsyncSession, identity: Identity, trip_id: int, document_id: int) -> Document:
    trip = await get_owned_trip(db, identity, trip_id)
    return await get_in_trip(db, Document, trip.id, document_id, "Document")


async def create_document(db: AsyncSession, identity: Identity, trip_id: int, data: DocumentCreate) -> Document:
    trip = await get_owned_trip(db, identity, trip_id)
    ensure_future(data.expiry_date)
    await ensure_unique(db, Document, trip.id, Document.name == data.name, _name_taken(data.name))

    document = Document(**data.model_dump(), trip_id=trip.id)
    db.add(document)
    await db.commit()
    await db.refresh(document)
    logger.info(f"Document {document.id} ({document.type.value}) uploaded to trip {trip.id}")
    return document


async def update_document(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    document_id: int,
    data: DocumentUpdate
) -> Document:
    trip = await get_owned_trip(db, identity, trip_id)
    document = await get_in_trip(db, Document, trip.id, document_id, "Document")
    changes = data.model_dump(exclude_unset=True)

    if "expiry_date" in changes:
        ensure_future(changes["expiry_date"])
    name = changes.get("name")
    if name is not None and name != document.name:
        await ensure_unique(db, Document, trip.id, Document.name == name, _name_taken(name), exclude_id=document.id)

    apply_changes(document, changes)
    await db.commit()
    await db.refresh(document)
    logger.info(f"Document {document_id} updated on trip {trip.id}")
    return document


async def delete_document(db: AsyncSession, identity: Identity, trip_id: int, document_id: int) -> dict:
    trip = await get_owned_trip(db, identity, trip_id)
    document = await get_in_trip(db, Document, trip.id, document_id, "Document")
    await db.delete(document)
    await db.commit()
    logger.info(f"Document {document_id} deleted from trip {trip.id}")
    return {"message": "Document deleted successfully"}
