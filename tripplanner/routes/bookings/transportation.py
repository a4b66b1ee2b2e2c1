from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.database import get_db
from tripplanner.dependencies.auth import Identity, get_identity
from tripplanner.dependencies.pagination import Pagination, pagination_params
from tripplanner.schemas.bookings.transportation import (
    TransportationCreate, TransportationFilters, TransportationListResponse, TransportationResponse,
    TransportationUpdate
)
from tripplanner.schemas.common import MessageResponse
from tripplanner.services.bookings import transportation_service

router = APIRouter(prefix="/trips", tags=["Transportation"])

@router.get("/{trip_id}/transportation", response_model=TransportationListResponse)
async def list_transportation(
    trip_id: int = Path(..., gt=0),
    filters: TransportationFilters = Depends(),
    pagination: Pagination = Depends(pagination_params),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await transportation_service.list_transportation(db, identity, trip_id, filters, pagination)

@router.post("/{trip_id}/transportation", response_model=TransportationResponse, status_code=status.HTTP_201_CREATED)
async def create_transportation(
    transport: TransportationCreate,
    trip_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await transportation_service.create_transportation(db, identity, trip_id, transport)

@router.get("/{trip_id}/transportation/{transport_id}", response_model=TransportationResponse)
async def get_transportation(
    trip_id: int = Path(..., gt=0),
    transport_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await transportation_service.get_transportation(db, identity, trip_id, transport_id)

@router.put("/{trip_id}/transportation/{transport_id}", response_model=TransportationResponse)
async def update_transportation(
    transport: TransportationUpdate,
    trip_id: int = Path(..., gt=0),
    transport_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await transportation_service.update_transportation(db, identity, trip_id, transport_id, transport)

@router.delete("/{trip_id}/transportation/{transport_id}", response_model=MessageResponse)
async def delete_transportation(
    trip_id: int = Path(..., gt=0),
    transport_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await transportation_service.delete_transportation(db, identity, trip_id, transport_id)
