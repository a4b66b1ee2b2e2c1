from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, Enum, Index
from sqlalchemy.orm import relationship
from tripplanner.core.database import Base
from tripplanner.utils.dates import utcnow
import enum

class NoteType(str, enum.Enum):
    GENERAL = "GENERAL"
    IMPORTANT = "IMPORTANT"
    REMINDER = "REMINDER"
    IDEA = "IDEA"

class TripNote(Base):
    __tablename__ = "trip_notes"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    title = Column(String, nullable=True)
    content = Column(Text, nullable=False)
    type = Column(Enum(NoteType), nullable=False, default=NoteType.GENERAL)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    trip = relationship("Trip", back_populates="notes")

    __table_args__ = (
        Index("ix_trip_notes_trip_id", "trip_id"),
        Index("ix_trip_notes_type", "type"),
    )
