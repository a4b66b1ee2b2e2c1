from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.database import get_db
from tripplanner.dependencies.auth import Identity, get_identity
from tripplanner.dependencies.pagination import Pagination, pagination_params
from tripplanner.schemas.common import MessageResponse
from tripplanner.schemas.media.photo import (
    PhotoCreate, PhotoFilters, PhotoListResponse, PhotoResponse, PhotoUpdate
)
from tripplanner.services.media import photo_service

router = APIRouter(prefix="/trips", tags=["Photos"])

@router.get("/{trip_id}/photos", response_model=PhotoListResponse)
async def list_photos(
    trip_id: int = Path(..., gt=0),
    filters: PhotoFilters = Depends(),
    pagination: Pagination = Depends(pagination_params),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await photo_service.list_photos(db, identity, trip_id, filters, pagination)

@router.post("/{trip_id}/photos", response_model=PhotoResponse, status_code=status.HTTP_201_CREATED)
async def create_photo(
    photo: PhotoCreate,
    trip_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    """Register an already uploaded photo by its URL or path."""
    return await photo_service.create_photo(db, identity, trip_id, photo)

@router.get("/{trip_id}/photos/{photo_id}", response_model=PhotoResponse)
async def get_photo(
    trip_id: int = Path(..., gt=0),
    photo_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await photo_service.get_photo(db, identity, trip_id, photo_id)

@router.put("/{trip_id}/photos/{photo_id}", response_model=PhotoResponse)
async def update_photo(
    photo: PhotoUpdate,
    trip_id: int = Path(..., gt=0),
    photo_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await photo_service.update_photo(db, identity, trip_id, photo_id, photo)

@router.delete("/{trip_id}/photos/{photo_id}", response_model=MessageResponse)
async def delete_photo(
    trip_id: int = Path(..., gt=0),
    photo_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await photo_service.delete_photo(db, identity, trip_id, photo_id)
