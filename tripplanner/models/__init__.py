from .user.user import User
from .trips.trip_model import Trip, TripStatus
from .trips.note_model import TripNote, NoteType
from .itinerary.itinerary_model import Itinerary, ItineraryActivity
from .itinerary.activity import Activity, ActivityCategory
from .bookings.transportation import Transportation, TransportType
from .bookings.accommodation import Accommodation, AccommodationType
from .expense.expense_models import Budget, BudgetCategory, Expense
from .media.document import Document, DocumentType
from .media.photo import Photo
