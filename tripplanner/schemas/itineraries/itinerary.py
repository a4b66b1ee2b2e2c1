from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import date as dt, datetime, time
from typing import List, Optional

from tripplanner.models.itinerary.activity import ActivityCategory
from tripplanner.schemas.common import PaginationMeta
from tripplanner.schemas.itineraries.activity import ActivityBrief
from tripplanner.utils.dates import coerce_calendar_date


def check_time_window(start_time: Optional[time], end_time: Optional[time]) -> None:
    if start_time is not None and end_time is not None and end_time <= start_time:
        raise ValueError("End time must be after start time")


class ScheduledActivityBase(BaseModel):
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _window(self):
        check_time_window(self.start_time, self.end_time)
        return self

class ItineraryActivityCreate(ScheduledActivityBase):
    activity_id: int = Field(..., gt=0)

class ItineraryActivityUpdate(ScheduledActivityBase):
    pass

class ReorderItem(BaseModel):
    id: int = Field(..., gt=0)
    order: int = Field(..., ge=1)

class ItineraryActivityReorder(BaseModel):
    items: List[ReorderItem] = Field(..., min_length=1)

    @field_validator("items")
    @classmethod
    def _unique_ids(cls, v):
        if len({item.id for item in v}) != len(v):
            raise ValueError("Each itinerary activity may appear only once")
        return v

class ItineraryActivityResponse(BaseModel):
    id: int
    itinerary_id: int
    activity_id: int
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    order: int
    notes: Optional[str] = None
    activity: ActivityBrief

    class Config:
        from_attributes = True


class ItineraryCreate(BaseModel):
    date: dt
    notes: Optional[str] = None
    # Scheduled in the order given
    activities: List[ItineraryActivityCreate] = []

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_day(cls, v):
        return coerce_calendar_date(v)

class ItineraryUpdate(BaseModel):
    date: Optional[dt] = None
    notes: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_day(cls, v):
        return coerce_calendar_date(v)

class ItineraryFilters(BaseModel):
    date: Optional[dt] = None

class ItineraryResponse(BaseModel):
    id: int
    trip_id: int
    date: dt
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    activities: List[ItineraryActivityResponse] = []
    photo_count: int = 0

    class Config:
        from_attributes = True

class CategoryCount(BaseModel):
    category: ActivityCategory
    count: int

class ItineraryStatistics(BaseModel):
    total_days: int
    total_activities: int
    category_distribution: List[CategoryCount]

class ItineraryListResponse(BaseModel):
    items: List[ItineraryResponse]
    pagination: PaginationMeta
    statistics: ItineraryStatistics
