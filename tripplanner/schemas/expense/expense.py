from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import date as dt, datetime
from decimal import Decimal

from tripplanner.models.expense.expense_models import BudgetCategory
from tripplanner.schemas.common import PaginationMeta, check_optional_url
from tripplanner.utils.dates import coerce_calendar_date

class ExpenseBase(BaseModel):
    description: str = Field(..., min_length=1, max_length=300)
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    currency: str = Field(..., min_length=3, max_length=3)
    date: dt
    category: str = Field(..., min_length=1, max_length=100)
    location: Optional[str] = None
    receipt_url: Optional[str] = None
    notes: Optional[str] = None
    budget_id: Optional[int] = Field(None, gt=0)

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_day(cls, v):
        return coerce_calendar_date(v)

    @field_validator("receipt_url", mode="before")
    @classmethod
    def _receipt_url(cls, v):
        return check_optional_url(v)

class ExpenseCreate(ExpenseBase):
    pass

class ExpenseUpdate(BaseModel):
    description: Optional[str] = Field(None, min_length=1, max_length=300)
    amount: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    date: Optional[dt] = None
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    location: Optional[str] = None
    receipt_url: Optional[str] = None
    notes: Optional[str] = None
    # Explicit null unlinks the expense from its budget
    budget_id: Optional[int] = Field(None, gt=0)

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_day(cls, v):
        return coerce_calendar_date(v)

    @field_validator("receipt_url", mode="before")
    @classmethod
    def _receipt_url(cls, v):
        return check_optional_url(v)

class ExpenseFilters(BaseModel):
    search: Optional[str] = None
    category: Optional[str] = None

class ExpenseBudgetRef(BaseModel):
    id: int
    category: BudgetCategory

    class Config:
        from_attributes = True

class ExpenseResponse(ExpenseBase):
    id: int
    trip_id: int
    budget: Optional[ExpenseBudgetRef] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class CategoryTotal(BaseModel):
    category: str
    total: Decimal
    count: int

class ExpenseSummary(BaseModel):
    total_spent: Decimal
    total_expenses: int
    category_totals: List[CategoryTotal]
    currencies: List[str]
    mixed_currencies: bool

class ExpenseListResponse(BaseModel):
    items: List[ExpenseResponse]
    pagination: PaginationMeta
    summary: ExpenseSummary
