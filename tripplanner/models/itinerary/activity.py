from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text, Float, Numeric, Enum, Index
from sqlalchemy.orm import relationship
from tripplanner.core.database import Base
from tripplanner.utils.dates import utcnow
import enum

class ActivityCategory(str, enum.Enum):
    CULTURAL = "CULTURAL"
    FOOD = "FOOD"
    NATURE = "NATURE"
    ADVENTURE = "ADVENTURE"
    SHOPPING = "SHOPPING"
    ENTERTAINMENT = "ENTERTAINMENT"
    OTHER = "OTHER"

class Activity(Base):
    """Trip-scoped catalog entry that itinerary days can schedule."""
    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    name = Column(String, nullable=False)
    category = Column(Enum(ActivityCategory), nullable=False, default=ActivityCategory.OTHER)
    address = Column(String, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    price = Column(Numeric(12, 2), nullable=True)
    currency = Column(String(3), nullable=True)
    duration_hours = Column(Float, nullable=True)
    opening_hours = Column(String, nullable=True)
    website_url = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    rating = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    trip = relationship("Trip", back_populates="activities")
    itinerary_activities = relationship("ItineraryActivity", back_populates="activity", passive_deletes=True)
    photos = relationship("Photo", back_populates="activity", passive_deletes=True)

    __table_args__ = (
        Index("ix_activities_trip_id", "trip_id"),
        Index("ix_activities_category", "category"),
    )
