from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text, Float, Index
from sqlalchemy.orm import relationship
from tripplanner.core.database import Base
from tripplanner.utils.dates import utcnow

class Photo(Base):
    __tablename__ = "photos"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    itinerary_id = Column(Integer, ForeignKey("itineraries.id", ondelete="CASCADE"), nullable=True)
    activity_id = Column(Integer, ForeignKey("activities.id", ondelete="SET NULL"), nullable=True)
    file_url = Column(String, nullable=False)
    thumbnail_url = Column(String, nullable=True)
    caption = Column(Text, nullable=True)
    taken_at = Column(DateTime, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    trip = relationship("Trip", back_populates="photos")
    itinerary = relationship("Itinerary", back_populates="photos")
    activity = relationship("Activity", back_populates="photos")

    __table_args__ = (
        Index("ix_photos_trip_id", "trip_id"),
        Index("ix_photos_itinerary_id", "itinerary_id"),
        Index("ix_photos_activity_id", "activity_id"),
        Index("ix_photos_taken_at", "taken_at"),
    )

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None
