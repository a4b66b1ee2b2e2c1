from decimal import Decimal
from typing import List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tripplanner.core.logger import logger
from tripplanner.dependencies.auth import Identity
from tripplanner.dependencies.pagination import Pagination
from tripplanner.models.expense.expense_models import Budget, Expense
from tripplanner.schemas.expense.budget import (
    BudgetCreate, BudgetDetailResponse, BudgetListResponse, BudgetResponse, BudgetSummary, BudgetUpdate
)
from tripplanner.services.common.deletion import delete_with_policies
from tripplanner.services.common.query import currency_flags, paginate
from tripplanner.services.common.rules import apply_changes, ensure_unique, get_in_trip
from tripplanner.services.trips.ownership import get_owned_trip

ZERO = Decimal("0")


def percentage_of(actual: Decimal, planned: Decimal) -> float:
    if not planned:
        return 0.0
    return round(float(actual / planned * 100), 2)


async def attach_actuals(db: AsyncSession, budgets: List[Budget]) -> List[Budget]:
    """Set ``actual_amount`` and ``expense_count`` from linked expenses.

    Amounts are summed as stored, whatever their currency.
    """
    if not budgets:
        return budgets
    rows = await db.execute(
        select(Expense.budget_id, func.coalesce(func.sum(Expense.amount), 0), func.count(Expense.id))
        .where(Expense.budget_id.in_([b.id for b in budgets]))
        .group_by(Expense.budget_id)
    )
    totals = {budget_id: (Decimal(str(total)), n) for budget_id, total, n in rows.all()}
    for budget in budgets:
        budget.actual_amount, budget.expense_count = totals.get(budget.id, (ZERO, 0))
    return budgets


async def budget_summary(db: AsyncSession, trip_id: int) -> BudgetSummary:
    total_planned = await db.scalar(
        select(func.coalesce(func.sum(Budget.planned_amount), 0)).where(Budget.trip_id == trip_id)
    )
    total_actual = await db.scalar(
        select(func.coalesce(func.sum(Expense.amount), 0))
        .select_from(Expense)
        .join(Budget, Expense.budget_id == Budget.id)
        .where(Budget.trip_id == trip_id)
    )
    budget_currencies = (await db.execute(
        select(Budget.currency).where(Budget.trip_id == trip_id).distinct()
    )).scalars().all()

    planned = Decimal(str(total_planned))
    actual = Decimal(str(total_actual))
    currencies, mixed = currency_flags(budget_currencies)
    return BudgetSummary(
        total_planned=planned,
        total_actual=actual,
        remaining=planned - actual,
        percentage_used=percentage_of(actual, planned),
        currencies=currencies,
        mixed_currencies=mixed,
    )


async def list_budgets(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    pagination: Pagination
) -> BudgetListResponse:
    trip = await get_owned_trip(db, identity, trip_id)
    stmt = select(Budget).where(Budget.trip_id == trip.id).order_by(Budget.category.asc())
    budgets, meta = await paginate(db, stmt, pagination)
    await attach_actuals(db, budgets)
    return BudgetListResponse(
        items=[BudgetResponse.model_validate(b) for b in budgets],
        pagination=meta,
        summary=await budget_summary(db, trip.id),
    )


async def _load_budget(db: AsyncSession, trip_id: int, budget_id: int) -> Budget:
    budget = await get_in_trip(db, Budget, trip_id, budget_id, "Budget")
    budget = await db.scalar(
        select(Budget)
        .options(selectinload(Budget.expenses))
        .where(Budget.id == budget.id)
        .execution_options(populate_existing=True)
    )
    await attach_actuals(db, [budget])
    return budget


async def get_budget(db: AsyncSession, identity: Identity, trip_id: int, budget_id: int) -> BudgetDetailResponse:
    trip = await get_owned_trip(db, identity, trip_id)
    budget = await _load_budget(db, trip.id, budget_id)
    return BudgetDetailResponse.model_validate(budget)


async def create_budget(db: AsyncSession, identity: Identity, trip_id: int, data: BudgetCreate) -> Budget:
    trip = await get_owned_trip(db, identity, trip_id)
    await ensure_unique(
        db, Budget, trip.id, Budget.category == data.category,
        f"A budget for category {data.category.value} already exists for this trip"
    )
    budget = Budget(**data.model_dump(), trip_id=trip.id)
    db.add(budget)
    await db.commit()
    await db.refresh(budget)
    budget.actual_amount, budget.expense_count = ZERO, 0
    logger.info(f"Budget {budget.id} ({budget.category.value}) created on trip {trip.id}")
    return budget


async def update_budget(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    budget_id: int,
    data: BudgetUpdate
) -> BudgetDetailResponse:
    trip = await get_owned_trip(db, identity, trip_id)
    budget = await get_in_trip(db, Budget, trip.id, budget_id, "Budget")
    changes = data.model_dump(exclude_unset=True)

    category = changes.get("category")
    if category is not None and category != budget.category:
        await ensure_unique(
            db, Budget, trip.id, Budget.category == category,
            f"A budget for category {category.value} already exists for this trip",
            exclude_id=budget.id,
        )

    apply_changes(budget, changes)
    await db.commit()
    logger.info(f"Budget {budget_id} updated on trip {trip.id}")
    return BudgetDetailResponse.model_validate(await _load_budget(db, trip.id, budget_id))


async def delete_budget(db: AsyncSession, identity: Identity, trip_id: int, budget_id: int) -> dict:
    trip = await get_owned_trip(db, identity, trip_id)
    budget = await get_in_trip(db, Budget, trip.id, budget_id, "Budget")
    await delete_with_policies(db, budget)
    await db.commit()
    logger.info(f"Budget {budget_id} deleted on trip {trip.id}; its expenses were unlinked")
    return {"message": "Budget deleted successfully"}
