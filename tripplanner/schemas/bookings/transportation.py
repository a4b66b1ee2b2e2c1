from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from tripplanner.models.bookings.transportation import TransportType
from tripplanner.schemas.common import PaginationMeta
from tripplanner.utils.dates import to_naive_utc

class TransportationBase(BaseModel):
    type: TransportType
    company: Optional[str] = None
    departure_location: str = Field(..., min_length=1)
    arrival_location: str = Field(..., min_length=1)
    departure_datetime: datetime
    arrival_datetime: datetime
    confirmation_code: Optional[str] = None
    price: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    notes: Optional[str] = None

    @field_validator("departure_datetime", "arrival_datetime")
    @classmethod
    def _naive_utc(cls, v):
        return to_naive_utc(v)

class TransportationCreate(TransportationBase):
    @model_validator(mode="after")
    def _arrival_after_departure(self):
        if self.arrival_datetime <= self.departure_datetime:
            raise ValueError("Arrival must be after departure")
        return self

class TransportationUpdate(BaseModel):
    type: Optional[TransportType] = None
    company: Optional[str] = None
    departure_location: Optional[str] = Field(None, min_length=1)
    arrival_location: Optional[str] = Field(None, min_length=1)
    departure_datetime: Optional[datetime] = None
    arrival_datetime: Optional[datetime] = None
    confirmation_code: Optional[str] = None
    price: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    notes: Optional[str] = None

    @field_validator("departure_datetime", "arrival_datetime")
    @classmethod
    def _naive_utc(cls, v):
        return to_naive_utc(v)

    @model_validator(mode="after")
    def _arrival_after_departure(self):
        if (
            self.departure_datetime is not None
            and self.arrival_datetime is not None
            and self.arrival_datetime <= self.departure_datetime
        ):
            raise ValueError("Arrival must be after departure")
        return self

class TransportationFilters(BaseModel):
    search: Optional[str] = None
    type: Optional[TransportType] = None

class TransportationResponse(TransportationBase):
    id: int
    trip_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class TransportationListResponse(BaseModel):
    items: List[TransportationResponse]
    pagination: PaginationMeta
