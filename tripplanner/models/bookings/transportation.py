from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text, Numeric, Enum, Index
from sqlalchemy.orm import relationship
from tripplanner.core.database import Base
from tripplanner.utils.dates import utcnow
import enum

class TransportType(str, enum.Enum):
    FLIGHT = "FLIGHT"
    BUS = "BUS"
    TRAIN = "TRAIN"
    CAR = "CAR"
    BOAT = "BOAT"
    OTHER = "OTHER"

class Transportation(Base):
    __tablename__ = "transportation"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    type = Column(Enum(TransportType), nullable=False)
    company = Column(String, nullable=True)
    departure_location = Column(String, nullable=False)
    arrival_location = Column(String, nullable=False)
    departure_datetime = Column(DateTime, nullable=False)
    arrival_datetime = Column(DateTime, nullable=False)
    confirmation_code = Column(String, nullable=True)
    price = Column(Numeric(12, 2), nullable=True)
    currency = Column(String(3), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    trip = relationship("Trip", back_populates="transportation")

    __table_args__ = (
        Index("ix_transportation_trip_id", "trip_id"),
        Index("ix_transportation_departure", "departure_datetime"),
    )
