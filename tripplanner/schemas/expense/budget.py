from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date as dt, datetime
from decimal import Decimal

from tripplanner.models.expense.expense_models import BudgetCategory
from tripplanner.schemas.common import PaginationMeta

class BudgetCreate(BaseModel):
    category: BudgetCategory
    planned_amount: Decimal = Field(..., gt=0, decimal_places=2)
    currency: str = Field(..., min_length=3, max_length=3)
    notes: Optional[str] = None

class BudgetUpdate(BaseModel):
    category: Optional[BudgetCategory] = None
    planned_amount: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    notes: Optional[str] = None

class BudgetExpense(BaseModel):
    id: int
    description: str
    amount: Decimal
    currency: str
    date: dt
    category: str

    class Config:
        from_attributes = True

class BudgetResponse(BaseModel):
    id: int
    trip_id: int
    category: BudgetCategory
    planned_amount: Decimal
    currency: str
    notes: Optional[str] = None
    actual_amount: Decimal = Decimal("0")
    expense_count: int = 0
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class BudgetDetailResponse(BudgetResponse):
    expenses: List[BudgetExpense] = []

class BudgetSummary(BaseModel):
    total_planned: Decimal
    total_actual: Decimal
    remaining: Decimal
    percentage_used: float
    # Totals are raw sums; these flag when they span currencies
    currencies: List[str]
    mixed_currencies: bool

class BudgetListResponse(BaseModel):
    items: List[BudgetResponse]
    pagination: PaginationMeta
    summary: BudgetSummary
