from pydantic import BaseModel
from typing import Dict
from decimal import Decimal

from tripplanner.models.trips.trip_model import TripStatus


class CostStats(BaseModel):
    count: int
    total_cost: Decimal

class ActivityStats(BaseModel):
    total: int
    scheduled: int
    by_category: Dict[str, int]

class BudgetStats(BaseModel):
    total_planned: Decimal
    total_actual: Decimal
    remaining: Decimal
    percentage_used: float

class ExpenseStats(BaseModel):
    count: int
    total_spent: Decimal

class DocumentStats(BaseModel):
    total: int
    expiring_soon: int

class ItineraryStats(BaseModel):
    days: int
    activities: int
    planned_days: int

class PhotoStats(BaseModel):
    total: int
    with_location: int

class NoteStats(BaseModel):
    total: int
    by_type: Dict[str, int]

class ModuleStats(BaseModel):
    transportation: CostStats
    accommodation: CostStats
    activities: ActivityStats
    budget: BudgetStats
    expenses: ExpenseStats
    documents: DocumentStats
    itinerary: ItineraryStats
    photos: PhotoStats
    notes: NoteStats

class ModuleProgress(BaseModel):
    current: int
    target: int
    completed: bool

class TripOverview(BaseModel):
    id: int
    name: str
    destination: str
    status: TripStatus
    duration_days: int
    days_until_trip: int

class TripDashboard(BaseModel):
    trip: TripOverview
    stats: ModuleStats
    progress: Dict[str, ModuleProgress]
    completion_percentage: int
