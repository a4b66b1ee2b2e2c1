from sqlalchemy import Column, Integer, ForeignKey, Date, DateTime, Text, Time, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from tripplanner.core.database import Base
from tripplanner.utils.dates import utcnow

class Itinerary(Base):
    __tablename__ = "itineraries"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    trip = relationship("Trip", back_populates="itineraries")
    activities = relationship(
        "ItineraryActivity",
        back_populates="itinerary",
        passive_deletes=True,
        order_by="ItineraryActivity.order"
    )
    photos = relationship("Photo", back_populates="itinerary", passive_deletes=True)

    __table_args__ = (
        UniqueConstraint("trip_id", "date", name="uq_itinerary_trip_date"),
        Index("ix_itineraries_trip_id", "trip_id"),
    )

class ItineraryActivity(Base):
    """An Activity scheduled into one itinerary day at a given position."""
    __tablename__ = "itinerary_activities"

    id = Column(Integer, primary_key=True, index=True)
    itinerary_id = Column(Integer, ForeignKey("itineraries.id", ondelete="CASCADE"), nullable=False)
    activity_id = Column(Integer, ForeignKey("activities.id"), nullable=False)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    order = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    itinerary = relationship("Itinerary", back_populates="activities")
    activity = relationship("Activity", back_populates="itinerary_activities")

    __table_args__ = (
        Index("ix_itinerary_activities_itinerary_id", "itinerary_id"),
        Index("ix_itinerary_activities_activity_id", "activity_id"),
    )
