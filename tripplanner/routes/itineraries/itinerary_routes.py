from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.database import get_db
from tripplanner.dependencies.auth import Identity, get_identity
from tripplanner.dependencies.pagination import Pagination, pagination_params
from tripplanner.schemas.common import MessageResponse
from tripplanner.schemas.itineraries.itinerary import (
    ItineraryActivityCreate, ItineraryActivityReorder, ItineraryActivityResponse, ItineraryActivityUpdate,
    ItineraryCreate, ItineraryFilters, ItineraryListResponse, ItineraryResponse, ItineraryUpdate
)
from tripplanner.services.itineraries import itinerary_activity_service, itinerary_service

router = APIRouter(prefix="/trips", tags=["Itinerary"])

# Days
@router.get("/{trip_id}/itineraries", response_model=ItineraryListResponse)
async def list_itineraries(
    trip_id: int = Path(..., gt=0),
    filters: ItineraryFilters = Depends(),
    pagination: Pagination = Depends(pagination_params),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await itinerary_service.list_itineraries(db, identity, trip_id, filters, pagination)

@router.post("/{trip_id}/itineraries", response_model=ItineraryResponse, status_code=status.HTTP_201_CREATED)
async def create_itinerary(
    itinerary: ItineraryCreate,
    trip_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await itinerary_service.create_itinerary(db, identity, trip_id, itinerary)

@router.get("/{trip_id}/itineraries/{itinerary_id}", response_model=ItineraryResponse)
async def get_itinerary(
    trip_id: int = Path(..., gt=0),
    itinerary_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await itinerary_service.get_itinerary(db, identity, trip_id, itinerary_id)

@router.put("/{trip_id}/itineraries/{itinerary_id}", response_model=ItineraryResponse)
async def update_itinerary(
    itinerary: ItineraryUpdate,
    trip_id: int = Path(..., gt=0),
    itinerary_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await itinerary_service.update_itinerary(db, identity, trip_id, itinerary_id, itinerary)

@router.delete("/{trip_id}/itineraries/{itinerary_id}", response_model=MessageResponse)
async def delete_itinerary(
    trip_id: int = Path(..., gt=0),
    itinerary_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await itinerary_service.delete_itinerary(db, identity, trip_id, itinerary_id)

# Scheduled activities
@router.get(
    "/{trip_id}/itineraries/{itinerary_id}/activities",
    response_model=List[ItineraryActivityResponse]
)
async def list_scheduled_activities(
    trip_id: int = Path(..., gt=0),
    itinerary_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await itinerary_activity_service.list_itinerary_activities(db, identity, trip_id, itinerary_id)

@router.post(
    "/{trip_id}/itineraries/{itinerary_id}/activities",
    response_model=ItineraryActivityResponse,
    status_code=status.HTTP_201_CREATED
)
async def schedule_activity(
    item: ItineraryActivityCreate,
    trip_id: int = Path(..., gt=0),
    itinerary_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await itinerary_activity_service.add_itinerary_activity(db, identity, trip_id, itinerary_id, item)

# Declared before /{item_id} so "reorder" is not parsed as an id
@router.put(
    "/{trip_id}/itineraries/{itinerary_id}/activities/reorder",
    response_model=List[ItineraryActivityResponse]
)
async def reorder_scheduled_activities(
    reorder: ItineraryActivityReorder,
    trip_id: int = Path(..., gt=0),
    itinerary_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await itinerary_activity_service.reorder_itinerary_activities(db, identity, trip_id, itinerary_id, reorder)

@router.get(
    "/{trip_id}/itineraries/{itinerary_id}/activities/{item_id}",
    response_model=ItineraryActivityResponse
)
async def get_scheduled_activity(
    trip_id: int = Path(..., gt=0),
    itinerary_id: int = Path(..., gt=0),
    item_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await itinerary_activity_service.get_itinerary_activity(db, identity, trip_id, itinerary_id, item_id)

@router.put(
    "/{trip_id}/itineraries/{itinerary_id}/activities/{item_id}",
    response_model=ItineraryActivityResponse
)
async def update_scheduled_activity(
    item: ItineraryActivityUpdate,
    trip_id: int = Path(..., gt=0),
    itinerary_id: int = Path(..., gt=0),
    item_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await itinerary_activity_service.update_itinerary_activity(
        db, identity, trip_id, itinerary_id, item_id, item
    )

@router.delete(
    "/{trip_id}/itineraries/{itinerary_id}/activities/{item_id}",
    response_model=MessageResponse
)
async def unschedule_activity(
    trip_id: int = Path(..., gt=0),
    itinerary_id: int = Path(..., gt=0),
    item_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    """Removes the slot and closes the gap in the remaining order."""
    return await itinerary_activity_service.remove_itinerary_activity(db, identity, trip_id, itinerary_id, item_id)
