from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.database import get_db
from tripplanner.dependencies.auth import Identity, get_identity
from tripplanner.dependencies.pagination import Pagination, pagination_params
from tripplanner.schemas.common import MessageResponse
from tripplanner.schemas.expense.budget import (
    BudgetCreate, BudgetDetailResponse, BudgetListResponse, BudgetResponse, BudgetUpdate
)
from tripplanner.services.expense import budget_service

router = APIRouter(prefix="/trips", tags=["Budget"])

@router.get("/{trip_id}/budgets", response_model=BudgetListResponse)
async def list_budgets(
    trip_id: int = Path(..., gt=0),
    pagination: Pagination = Depends(pagination_params),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await budget_service.list_budgets(db, identity, trip_id, pagination)

@router.post("/{trip_id}/budgets", response_model=BudgetResponse, status_code=status.HTTP_201_CREATED)
async def create_budget(
    budget: BudgetCreate,
    trip_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await budget_service.create_budget(db, identity, trip_id, budget)

@router.get("/{trip_id}/budgets/{budget_id}", response_model=BudgetDetailResponse)
async def get_budget(
    trip_id: int = Path(..., gt=0),
    budget_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await budget_service.get_budget(db, identity, trip_id, budget_id)

@router.put("/{trip_id}/budgets/{budget_id}", response_model=BudgetDetailResponse)
async def update_budget(
    budget: BudgetUpdate,
    trip_id: int = Path(..., gt=0),
    budget_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await budget_service.update_budget(db, identity, trip_id, budget_id, budget)

@router.delete("/{trip_id}/budgets/{budget_id}", response_model=MessageResponse)
async def delete_budget(
    trip_id: int = Path(..., gt=0),
    budget_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await budget_service.delete_budget(db, identity, trip_id, budget_id)
