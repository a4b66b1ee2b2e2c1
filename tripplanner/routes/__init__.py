# tripplanner/routes/__init__.py
from fastapi import APIRouter
from tripplanner.routes.auth import auth
from tripplanner.routes.trip import trip_routes, notes
from tripplanner.routes.itineraries import activity_routes, itinerary_routes
from tripplanner.routes.bookings import transportation, accommodation
from tripplanner.routes.expense import budget, expense
from tripplanner.routes.media import documents, photos


api_router = APIRouter()


# Auth routes
api_router.include_router(auth.router)

# Trip routes
api_router.include_router(trip_routes.router)
api_router.include_router(notes.router)

# Itinerary routes
api_router.include_router(activity_routes.router)
api_router.include_router(itinerary_routes.router)

# Booking routes
api_router.include_router(transportation.router)
api_router.include_router(accommodation.router)

# Budget and expense routes
api_router.include_router(budget.router)
api_router.include_router(expense.router)

# Document and photo routes
api_router.include_router(documents.router)
api_router.include_router(photos.router)
