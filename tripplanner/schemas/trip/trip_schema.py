from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from datetime import date, datetime

from tripplanner.models.trips.trip_model import TripStatus
from tripplanner.schemas.common import PaginationMeta, check_optional_url
from tripplanner.utils.dates import coerce_calendar_date

class TripBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    destination: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    start_date: date
    end_date: date
    cover_image_url: Optional[str] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _calendar_day(cls, v):
        return coerce_calendar_date(v)

    @field_validator("cover_image_url", mode="before")
    @classmethod
    def _cover_url(cls, v):
        return check_optional_url(v)

    @model_validator(mode="after")
    def _end_after_start(self):
        if self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        return self

class TripCreate(TripBase):
    pass

class TripUpdate(TripBase):
    """Full replace: every trip field is sent, status included."""
    status: TripStatus

class TripFilters(BaseModel):
    search: Optional[str] = None
    status: Optional[TripStatus] = None

class TripCounts(BaseModel):
    activities: int = 0
    transportation: int = 0
    accommodation: int = 0
    photos: int = 0

class TripResponse(BaseModel):
    id: int
    user_id: int
    name: str
    destination: str
    description: Optional[str] = None
    start_date: date
    end_date: date
    cover_image_url: Optional[str] = None
    status: TripStatus
    duration_days: int
    created_at: datetime
    updated_at: datetime
    counts: TripCounts = TripCounts()

    class Config:
        from_attributes = True

class TripListResponse(BaseModel):
    items: List[TripResponse]
    pagination: PaginationMeta
