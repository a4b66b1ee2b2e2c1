from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.database import get_db
from tripplanner.dependencies.auth import Identity, get_identity
from tripplanner.dependencies.pagination import Pagination, trip_pagination_params
from tripplanner.schemas.common import MessageResponse
from tripplanner.schemas.trip.dashboard import TripDashboard
from tripplanner.schemas.trip.trip_detail import TripDetailResponse
from tripplanner.schemas.trip.trip_schema import TripCreate, TripFilters, TripListResponse, TripResponse, TripUpdate
from tripplanner.services.dashboard.dashboard_service import get_trip_dashboard
from tripplanner.services.trips import trip_service

router = APIRouter(prefix="/trips", tags=["Trips"])

@router.get("", response_model=TripListResponse)
async def list_my_trips(
    filters: TripFilters = Depends(),
    pagination: Pagination = Depends(trip_pagination_params),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await trip_service.list_trips(db, identity, filters, pagination)

@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip_route(
    trip: TripCreate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await trip_service.create_trip(db, identity, trip)

@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await trip_service.get_trip_detail(db, identity, trip_id)

@router.get("/{trip_id}/dashboard", response_model=TripDashboard)
async def trip_dashboard(
    trip_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    """Module statistics and planning progress for one trip."""
    return await get_trip_dashboard(db, identity, trip_id)

@router.put("/{trip_id}", response_model=TripResponse)
async def update_trip_route(
    trip_update: TripUpdate,
    trip_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await trip_service.update_trip(db, identity, trip_id, trip_update)

@router.delete("/{trip_id}", response_model=MessageResponse)
async def delete_trip_route(
    trip_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await trip_service.delete_trip(db, identity, trip_id)
