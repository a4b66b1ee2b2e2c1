"""Per-trip planning dashboard: module stats and how far planning has got."""
from decimal import Decimal

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.logger import logger
from tripplanner.dependencies.auth import Identity
from tripplanner.models.bookings.accommodation import Accommodation
from tripplanner.models.bookings.transportation import Transportation
from tripplanner.models.expense.expense_models import Budget, Expense
from tripplanner.models.itinerary.activity import Activity
from tripplanner.models.itinerary.itinerary_model import Itinerary, ItineraryActivity
from tripplanner.models.media.document import Document
from tripplanner.schemas.trip.dashboard import (
    ActivityStats, BudgetStats, CostStats, DocumentStats, ExpenseStats, ItineraryStats, ModuleProgress,
    ModuleStats, NoteStats, PhotoStats, TripDashboard, TripOverview
)
from tripplanner.services.expense.budget_service import budget_summary
from tripplanner.services.media.document_service import expiring_condition
from tripplanner.services.media.photo_service import photo_statistics
from tripplanner.services.trips.note_service import note_statistics
from tripplanner.services.trips.ownership import get_owned_trip_by_email
from tripplanner.utils.dates import utcnow

# Minimum number of records for a module to count as planned
MODULE_TARGETS = {
    "transportation": 2,
    "accommodation": 1,
    "activities": 5,
    "budget": 1,
    "documents": 3,
    "photos": 1,
    "notes": 1,
}


async def _cost_stats(db: AsyncSession, model, price_column, trip_id: int) -> CostStats:
    count, total = (await db.execute(
        select(func.count(model.id), func.coalesce(func.sum(price_column), 0)).where(model.trip_id == trip_id)
    )).one()
    return CostStats(count=count, total_cost=Decimal(str(total)))


async def _activity_stats(db: AsyncSession, trip_id: int) -> ActivityStats:
    by_category = {
        category.value: n
        for category, n in (await db.execute(
            select(Activity.category, func.count(Activity.id))
            .where(Activity.trip_id == trip_id)
            .group_by(Activity.category)
        )).all()
    }
    scheduled = await db.scalar(
        select(func.count(distinct(ItineraryActivity.activity_id)))
        .select_from(ItineraryActivity)
        .join(Itinerary, ItineraryActivity.itinerary_id == Itinerary.id)
        .where(Itinerary.trip_id == trip_id)
    )
    return ActivityStats(total=sum(by_category.values()), scheduled=scheduled or 0, by_category=by_category)


async def _itinerary_stats(db: AsyncSession, trip_id: int) -> ItineraryStats:
    days = await db.scalar(select(func.count(Itinerary.id)).where(Itinerary.trip_id == trip_id))
    activities, planned_days = (await db.execute(
        select(func.count(ItineraryActivity.id), func.count(distinct(ItineraryActivity.itinerary_id)))
        .select_from(ItineraryActivity)
        .join(Itinerary, ItineraryActivity.itinerary_id == Itinerary.id)
        .where(Itinerary.trip_id == trip_id)
    )).one()
    return ItineraryStats(days=days or 0, activities=activities, planned_days=planned_days)


async def get_trip_dashboard(db: AsyncSession, identity: Identity, trip_id: int) -> TripDashboard:
    trip = await get_owned_trip_by_email(db, identity.email, trip_id)

    budget = await budget_summary(db, trip.id)
    budget_rows = await db.scalar(select(func.count(Budget.id)).where(Budget.trip_id == trip.id))
    expense_count, expense_total = (await db.execute(
        select(func.count(Expense.id), func.coalesce(func.sum(Expense.amount), 0)).where(Expense.trip_id == trip.id)
    )).one()
    documents_total = await db.scalar(select(func.count(Document.id)).where(Document.trip_id == trip.id))
    documents_expiring = await db.scalar(
        select(func.count(Document.id)).where(Document.trip_id == trip.id, expiring_condition())
    )
    photos = await photo_statistics(db, trip.id)
    notes = await note_statistics(db, trip.id)

    stats = ModuleStats(
        transportation=await _cost_stats(db, Transportation, Transportation.price, trip.id),
        accommodation=await _cost_stats(db, Accommodation, Accommodation.total_price, trip.id),
        activities=await _activity_stats(db, trip.id),
        budget=BudgetStats(
            total_planned=budget.total_planned,
            total_actual=budget.total_actual,
            remaining=budget.remaining,
            percentage_used=budget.percentage_used,
        ),
        expenses=ExpenseStats(count=expense_count, total_spent=Decimal(str(expense_total))),
        documents=DocumentStats(total=documents_total or 0, expiring_soon=documents_expiring or 0),
        itinerary=await _itinerary_stats(db, trip.id),
        photos=PhotoStats(total=photos.total, with_location=photos.with_location),
        notes=NoteStats(total=notes.total, by_type=notes.by_type),
    )

    duration = trip.duration_days
    targets = dict(MODULE_TARGETS, itinerary=max(1, duration // 2))
    current = {
        "transportation": stats.transportation.count,
        "accommodation": stats.accommodation.count,
        "activities": stats.activities.total,
        "budget": budget_rows,
        "documents": stats.documents.total,
        "itinerary": stats.itinerary.days,
        "photos": stats.photos.total,
        "notes": stats.notes.total,
    }
    progress = {
        module: ModuleProgress(current=current[module], target=target, completed=current[module] >= target)
        for module, target in targets.items()
    }
    completed = sum(1 for p in progress.values() if p.completed)

    logger.info(f"Dashboard built for trip {trip.id}: {completed}/{len(progress)} modules complete")
    return TripDashboard(
        trip=TripOverview(
            id=trip.id,
            name=trip.name,
            destination=trip.destination,
            status=trip.status,
            duration_days=duration,
            days_until_trip=(trip.start_date - utcnow().date()).days,
        ),
        stats=stats,
        progress=progress,
        completion_percentage=round(completed / len(progress) * 100),
    )
