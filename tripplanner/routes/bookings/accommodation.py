from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.database import get_db
from tripplanner.dependencies.auth import Identity, get_identity
from tripplanner.dependencies.pagination import Pagination, pagination_params
from tripplanner.schemas.bookings.accommodation import (
    AccommodationCreate, AccommodationFilters, AccommodationListResponse, AccommodationResponse,
    AccommodationUpdate
)
from tripplanner.schemas.common import MessageResponse
from tripplanner.services.bookings import accommodation_service

router = APIRouter(prefix="/trips", tags=["Accommodation"])

@router.get("/{trip_id}/accommodation", response_model=AccommodationListResponse)
async def list_accommodation(
    trip_id: int = Path(..., gt=0),
    filters: AccommodationFilters = Depends(),
    pagination: Pagination = Depends(pagination_params),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await accommodation_service.list_accommodation(db, identity, trip_id, filters, pagination)

@router.post("/{trip_id}/accommodation", response_model=AccommodationResponse, status_code=status.HTTP_201_CREATED)
async def create_accommodation(
    stay: AccommodationCreate,
    trip_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    """Stays may not overlap; checking out on the day the next one starts is allowed."""
    return await accommodation_service.create_accommodation(db, identity, trip_id, stay)

@router.get("/{trip_id}/accommodation/{accommodation_id}", response_model=AccommodationResponse)
async def get_accommodation(
    trip_id: int = Path(..., gt=0),
    accommodation_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await accommodation_service.get_accommodation(db, identity, trip_id, accommodation_id)

@router.put("/{trip_id}/accommodation/{accommodation_id}", response_model=AccommodationResponse)
async def update_accommodation(
    stay: AccommodationUpdate,
    trip_id: int = Path(..., gt=0),
    accommodation_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await accommodation_service.update_accommodation(db, identity, trip_id, accommodation_id, stay)

@router.delete("/{trip_id}/accommodation/{accommodation_id}", response_model=MessageResponse)
async def delete_accommodation(
    trip_id: int = Path(..., gt=0),
    accommodation_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await accommodation_service.delete_accommodation(db, identity, trip_id, accommodation_id)
