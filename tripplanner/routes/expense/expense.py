from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.database import get_db
from tripplanner.dependencies.auth import Identity, get_identity
from tripplanner.dependencies.pagination import Pagination, pagination_params
from tripplanner.schemas.common import MessageResponse
from tripplanner.schemas.expense.expense import (
    ExpenseCreate, ExpenseFilters, ExpenseListResponse, ExpenseResponse, ExpenseUpdate
)
from tripplanner.services.expense import expense_service

router = APIRouter(prefix="/trips", tags=["Expenses"])

@router.get("/{trip_id}/expenses", response_model=ExpenseListResponse)
async def list_expenses(
    trip_id: int = Path(..., gt=0),
    filters: ExpenseFilters = Depends(),
    pagination: Pagination = Depends(pagination_params),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await expense_service.list_expenses(db, identity, trip_id, filters, pagination)

@router.post("/{trip_id}/expenses", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense: ExpenseCreate,
    trip_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await expense_service.create_expense(db, identity, trip_id, expense)

@router.get("/{trip_id}/expenses/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    trip_id: int = Path(..., gt=0),
    expense_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await expense_service.get_expense(db, identity, trip_id, expense_id)

@router.put("/{trip_id}/expenses/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense: ExpenseUpdate,
    trip_id: int = Path(..., gt=0),
    expense_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await expense_service.update_expense(db, identity, trip_id, expense_id, expense)

@router.delete("/{trip_id}/expenses/{expense_id}", response_model=MessageResponse)
async def delete_expense(
    trip_id: int = Path(..., gt=0),
    expense_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await expense_service.delete_expense(db, identity, trip_id, expense_id)
