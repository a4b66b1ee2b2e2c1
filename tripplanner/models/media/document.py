from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text, Enum, Index
from sqlalchemy.orm import relationship
from tripplanner.core.database import Base
from tripplanner.utils.dates import utcnow
import enum

class DocumentType(str, enum.Enum):
    PASSPORT = "PASSPORT"
    VISA = "VISA"
    TICKET = "TICKET"
    RESERVATION = "RESERVATION"
    INSURANCE = "INSURANCE"
    OTHER = "OTHER"

class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    name = Column(String, nullable=False)
    type = Column(Enum(DocumentType), nullable=False)
    file_url = Column(String, nullable=False)
    file_type = Column(String, nullable=False)
    file_size = Column(Integer, nullable=False)
    expiry_date = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    trip = relationship("Trip", back_populates="documents")

    __table_args__ = (
        Index("ix_documents_trip_id", "trip_id"),
        Index("ix_documents_trip_name", "trip_id", "name"),
        Index("ix_documents_expiry_date", "expiry_date"),
    )
