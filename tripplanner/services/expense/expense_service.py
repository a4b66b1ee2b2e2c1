from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tripplanner.core.exceptions import NotFoundError
from tripplanner.core.logger import logger
from tripplanner.dependencies.auth import Identity
from tripplanner.dependencies.pagination import Pagination
from tripplanner.models.expense.expense_models import Budget, Expense
from tripplanner.schemas.expense.expense import (
    CategoryTotal, ExpenseCreate, ExpenseFilters, ExpenseListResponse, ExpenseResponse, ExpenseSummary, ExpenseUpdate
)
from tripplanner.services.common.query import apply_conditions, currency_flags, paginate, search_condition
from tripplanner.services.common.rules import apply_changes, ensure_within_trip, get_in_trip, merged
from tripplanner.services.trips.ownership import get_owned_trip


async def expense_summary(db: AsyncSession, trip_id: int) -> ExpenseSummary:
    """Totals over every expense of the trip, ignoring list filters."""
    rows = (await db.execute(
        select(Expense.category, func.sum(Expense.amount), func.count(Expense.id))
        .where(Expense.trip_id == trip_id)
        .group_by(Expense.category)
        .order_by(func.sum(Expense.amount).desc())
    )).all()
    category_totals = [
        CategoryTotal(category=category, total=Decimal(str(total)), count=n)
        for category, total, n in rows
    ]
    currencies = (await db.execute(
        select(Expense.currency).where(Expense.trip_id == trip_id).distinct()
    )).scalars().all()
    distinct, mixed = currency_flags(currencies)
    return ExpenseSummary(
        total_spent=sum((c.total for c in category_totals), Decimal("0")),
        total_expenses=sum(c.count for c in category_totals),
        category_totals=category_totals,
        currencies=distinct,
        mixed_currencies=mixed,
    )


async def list_expenses(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    filters: ExpenseFilters,
    pagination: Pagination
) -> ExpenseListResponse:
    trip = await get_owned_trip(db, identity, trip_id)
    stmt = apply_conditions(
        select(Expense).where(Expense.trip_id == trip.id),
        search_condition(filters.search, Expense.description, Expense.location, Expense.notes),
        Expense.category == filters.category if filters.category else None,
    ).order_by(Expense.date.desc(), Expense.id.desc())

    expenses, meta = await paginate(db, stmt, pagination, selectinload(Expense.budget))
    return ExpenseListResponse(
        items=[ExpenseResponse.model_validate(e) for e in expenses],
        pagination=meta,
        summary=await expense_summary(db, trip.id),
    )


async def _fetch_expense(db: AsyncSession, trip_id: int, expense_id: int) -> Expense:
    expense = await db.scalar(
        select(Expense)
        .options(selectinload(Expense.budget))
        .where(Expense.id == expense_id, Expense.trip_id == trip_id)
        .execution_options(populate_existing=True)
    )
    if expense is None:
        raise NotFoundError("Expense not found")
    return expense


async def get_expense(db: AsyncSession, identity: Identity, trip_id: int, expense_id: int) -> Expense:
    trip = await get_owned_trip(db, identity, trip_id)
    return await _fetch_expense(db, trip.id, expense_id)


async def create_expense(db: AsyncSession, identity: Identity, trip_id: int, data: ExpenseCreate) -> Expense:
    trip = await get_owned_trip(db, identity, trip_id)
    ensure_within_trip(trip, data.date, label="Expense date")
    if data.budget_id is not None:
        await get_in_trip(db, Budget, trip.id, data.budget_id, "Budget")

    expense = Expense(**data.model_dump(), trip_id=trip.id)
    db.add(expense)
    await db.commit()
    logger.info(f"Expense {expense.id} of {expense.amount} {expense.currency} added to trip {trip.id}")
    return await _fetch_expense(db, trip.id, expense.id)


async def update_expense(
    db: AsyncSession,
    identity: Identity,
    trip_id: int,
    expense_id: int,
    data: ExpenseUpdate
) -> Expense:
    trip = await get_owned_trip(db, identity, trip_id)
    expense = await get_in_trip(db, Expense, trip.id, expense_id, "Expense")
    changes = data.model_dump(exclude_unset=True)

    if "date" in changes:
        ensure_within_trip(trip, merged(expense, changes, "date"), label="Expense date")
    if changes.get("budget_id") is not None:
        await get_in_trip(db, Budget, trip.id, changes["budget_id"], "Budget")

    apply_changes(expense, changes)
    await db.commit()
    logger.info(f"Expense {expense_id} updated on trip {trip.id}")
    return await _fetch_expense(db, trip.id, expense_id)


async def delete_expense(db: AsyncSession, identity: Identity, trip_id: int, expense_id: int) -> dict:
    trip = await get_owned_trip(db, identity, trip_id)
    expense = await get_in_trip(db, Expense, trip.id, expense_id, "Expense")
    await db.delete(expense)
    await db.commit()
    logger.info(f"Expense {expense_id} deleted from trip {trip.id}")
    return {"message": "Expense deleted successfully"}
