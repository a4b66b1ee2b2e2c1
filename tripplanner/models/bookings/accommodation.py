from sqlalchemy import Column, Integer, String, ForeignKey, Date, DateTime, Text, Float, Numeric, Enum, Index
from sqlalchemy.orm import relationship
from tripplanner.core.database import Base
from tripplanner.utils.dates import utcnow
import enum

class AccommodationType(str, enum.Enum):
    HOTEL = "HOTEL"
    HOSTEL = "HOSTEL"
    AIRBNB = "AIRBNB"
    APARTMENT = "APARTMENT"
    HOUSE = "HOUSE"
    OTHER = "OTHER"

class Accommodation(Base):
    __tablename__ = "accommodation"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    name = Column(String, nullable=False)
    type = Column(Enum(AccommodationType), nullable=False)
    address = Column(String, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    # Stays are half-open: the night of check_out_date is not included
    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)
    price_per_night = Column(Numeric(12, 2), nullable=True)
    total_price = Column(Numeric(12, 2), nullable=True)
    currency = Column(String(3), nullable=True)
    booking_url = Column(String, nullable=True)
    confirmation_code = Column(String, nullable=True)
    rating = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    trip = relationship("Trip", back_populates="accommodation")

    __table_args__ = (
        Index("ix_accommodation_trip_id", "trip_id"),
        Index("ix_accommodation_check_in", "check_in_date"),
    )

    @property
    def nights(self) -> int:
        return (self.check_out_date - self.check_in_date).days
