from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal

from tripplanner.models.bookings.accommodation import AccommodationType
from tripplanner.schemas.common import PaginationMeta, check_optional_url
from tripplanner.utils.dates import coerce_calendar_date

class AccommodationBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    type: AccommodationType
    address: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    check_in_date: date
    check_out_date: date
    price_per_night: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    total_price: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    booking_url: Optional[str] = None
    confirmation_code: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None

    @field_validator("check_in_date", "check_out_date", mode="before")
    @classmethod
    def _calendar_day(cls, v):
        return coerce_calendar_date(v)

    @field_validator("booking_url", mode="before")
    @classmethod
    def _booking_url(cls, v):
        return check_optional_url(v)

class AccommodationCreate(AccommodationBase):
    @model_validator(mode="after")
    def _check_out_after_check_in(self):
        if self.check_out_date <= self.check_in_date:
            raise ValueError("Check-out date must be after check-in date")
        return self

class AccommodationUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[AccommodationType] = None
    address: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    price_per_night: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    total_price: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    booking_url: Optional[str] = None
    confirmation_code: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None

    @field_validator("check_in_date", "check_out_date", mode="before")
    @classmethod
    def _calendar_day(cls, v):
        return coerce_calendar_date(v)

    @field_validator("booking_url", mode="before")
    @classmethod
    def _booking_url(cls, v):
        return check_optional_url(v)

    @model_validator(mode="after")
    def _check_out_after_check_in(self):
        if (
            self.check_in_date is not None
            and self.check_out_date is not None
            and self.check_out_date <= self.check_in_date
        ):
            raise ValueError("Check-out date must be after check-in date")
        return self

class AccommodationFilters(BaseModel):
    search: Optional[str] = None
    type: Optional[AccommodationType] = None

class AccommodationResponse(AccommodationBase):
    id: int
    trip_id: int
    nights: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class AccommodationListResponse(BaseModel):
    items: List[AccommodationResponse]
    pagination: PaginationMeta
