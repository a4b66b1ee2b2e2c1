from pydantic import BaseModel
from typing import List

from tripplanner.schemas.bookings.accommodation import AccommodationResponse
from tripplanner.schemas.bookings.transportation import TransportationResponse
from tripplanner.schemas.expense.budget import BudgetResponse
from tripplanner.schemas.itineraries.activity import ActivityBrief
from tripplanner.schemas.media.document import DocumentResponse
from tripplanner.schemas.media.photo import PhotoResponse
from tripplanner.schemas.trip.note import NoteResponse
from tripplanner.schemas.trip.trip_schema import TripResponse


class TripDetailResponse(TripResponse):
    """Trip with its bookings, budgets, paperwork and the latest activity/photo uploads."""
    transportation: List[TransportationResponse] = []
    accommodation: List[AccommodationResponse] = []
    budgets: List[BudgetResponse] = []
    documents: List[DocumentResponse] = []
    notes: List[NoteResponse] = []
    recent_activities: List[ActivityBrief] = []
    recent_photos: List[PhotoResponse] = []
