from sqlalchemy import Column, Integer, String, Text, Date, ForeignKey, Enum, DateTime, Index
from sqlalchemy.orm import relationship
from tripplanner.core.database import Base
from tripplanner.utils.dates import utcnow
import enum

class TripStatus(str, enum.Enum):
    PLANNING = "PLANNING"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"

class Trip(Base):
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String, nullable=False)
    destination = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    cover_image_url = Column(String, nullable=True)
    status = Column(Enum(TripStatus), nullable=False, default=TripStatus.PLANNING)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="trips")

    # Deletion of children is driven by services/common/deletion.py
    itineraries = relationship("Itinerary", back_populates="trip", passive_deletes=True)
    activities = relationship("Activity", back_populates="trip", passive_deletes=True)
    transportation = relationship(
        "Transportation", back_populates="trip", passive_deletes=True,
        order_by="Transportation.departure_datetime"
    )
    accommodation = relationship(
        "Accommodation", back_populates="trip", passive_deletes=True,
        order_by="Accommodation.check_in_date"
    )
    budgets = relationship("Budget", back_populates="trip", passive_deletes=True, order_by="Budget.category")
    expenses = relationship("Expense", back_populates="trip", passive_deletes=True)
    documents = relationship("Document", back_populates="trip", passive_deletes=True)
    photos = relationship("Photo", back_populates="trip", passive_deletes=True)
    notes = relationship("TripNote", back_populates="trip", passive_deletes=True, order_by="TripNote.updated_at.desc()")

    __table_args__ = (
        Index("ix_trips_user_id", "user_id"),
        Index("ix_trips_status", "status"),
        Index("ix_trips_start_date", "start_date"),
    )

    @property
    def duration_days(self) -> int:
        return (self.end_date - self.start_date).days + 1
