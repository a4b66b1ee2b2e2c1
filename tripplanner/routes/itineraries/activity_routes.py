from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.database import get_db
from tripplanner.dependencies.auth import Identity, get_identity
from tripplanner.dependencies.pagination import Pagination, pagination_params
from tripplanner.schemas.common import MessageResponse
from tripplanner.schemas.itineraries.activity import (
    ActivityCreate, ActivityFilters, ActivityListResponse, ActivityResponse, ActivityUpdate
)
from tripplanner.services.itineraries import activity_service

router = APIRouter(prefix="/trips", tags=["Activities"])

@router.get("/{trip_id}/activities", response_model=ActivityListResponse)
async def list_activities(
    trip_id: int = Path(..., gt=0),
    filters: ActivityFilters = Depends(),
    pagination: Pagination = Depends(pagination_params),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await activity_service.list_activities(db, identity, trip_id, filters, pagination)

@router.post("/{trip_id}/activities", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED)
async def create_activity(
    activity: ActivityCreate,
    trip_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await activity_service.create_activity(db, identity, trip_id, activity)

@router.get("/{trip_id}/activities/{activity_id}", response_model=ActivityResponse)
async def get_activity(
    trip_id: int = Path(..., gt=0),
    activity_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await activity_service.get_activity(db, identity, trip_id, activity_id)

@router.put("/{trip_id}/activities/{activity_id}", response_model=ActivityResponse)
async def update_activity(
    activity: ActivityUpdate,
    trip_id: int = Path(..., gt=0),
    activity_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await activity_service.update_activity(db, identity, trip_id, activity_id, activity)

@router.delete("/{trip_id}/activities/{activity_id}", response_model=MessageResponse)
async def delete_activity(
    trip_id: int = Path(..., gt=0),
    activity_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    """Fails with 400 and the usage count while itineraries still schedule it."""
    return await activity_service.delete_activity(db, identity, trip_id, activity_id)
