from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.database import get_db
from tripplanner.dependencies.auth import Identity, get_identity
from tripplanner.dependencies.pagination import Pagination, pagination_params
from tripplanner.schemas.common import MessageResponse
from tripplanner.schemas.trip.note import NoteCreate, NoteFilters, NoteListResponse, NoteResponse, NoteUpdate
from tripplanner.services.trips import note_service

router = APIRouter(prefix="/trips", tags=["Trip Notes"])

@router.get("/{trip_id}/notes", response_model=NoteListResponse)
async def list_trip_notes(
    trip_id: int = Path(..., gt=0),
    filters: NoteFilters = Depends(),
    pagination: Pagination = Depends(pagination_params),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await note_service.list_notes(db, identity, trip_id, filters, pagination)

@router.post("/{trip_id}/notes", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_trip_note(
    note: NoteCreate,
    trip_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await note_service.create_note(db, identity, trip_id, note)

@router.get("/{trip_id}/notes/{note_id}", response_model=NoteResponse)
async def get_trip_note(
    trip_id: int = Path(..., gt=0),
    note_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await note_service.get_note(db, identity, trip_id, note_id)

@router.put("/{trip_id}/notes/{note_id}", response_model=NoteResponse)
async def update_trip_note(
    note: NoteUpdate,
    trip_id: int = Path(..., gt=0),
    note_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await note_service.update_note(db, identity, trip_id, note_id, note)

@router.delete("/{trip_id}/notes/{note_id}", response_model=MessageResponse)
async def delete_trip_note(
    trip_id: int = Path(..., gt=0),
    note_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await note_service.delete_note(db, identity, trip_id, note_id)
