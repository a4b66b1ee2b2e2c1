from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import date as dt, datetime

from tripplanner.schemas.common import PaginationMeta, check_file_reference
from tripplanner.schemas.itineraries.activity import ActivityBrief
from tripplanner.utils.dates import to_naive_utc

class PhotoCreate(BaseModel):
    file_url: str = Field(..., min_length=1)
    thumbnail_url: Optional[str] = None
    caption: Optional[str] = None
    taken_at: Optional[datetime] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    itinerary_id: Optional[int] = Field(None, gt=0)
    activity_id: Optional[int] = Field(None, gt=0)

    @field_validator("file_url")
    @classmethod
    def _file_reference(cls, v):
        return check_file_reference(v)

    @field_validator("thumbnail_url")
    @classmethod
    def _thumbnail_reference(cls, v):
        return check_file_reference(v) if v else None

    @field_validator("taken_at")
    @classmethod
    def _naive_utc(cls, v):
        return to_naive_utc(v)

class PhotoUpdate(BaseModel):
    """The stored file is immutable; only its metadata and links change."""
    caption: Optional[str] = None
    taken_at: Optional[datetime] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    itinerary_id: Optional[int] = Field(None, gt=0)
    activity_id: Optional[int] = Field(None, gt=0)

    @field_validator("taken_at")
    @classmethod
    def _naive_utc(cls, v):
        return to_naive_utc(v)

class PhotoFilters(BaseModel):
    itinerary_id: Optional[int] = Field(None, gt=0)
    activity_id: Optional[int] = Field(None, gt=0)
    date: Optional[dt] = None

class PhotoItineraryRef(BaseModel):
    id: int
    date: dt

    class Config:
        from_attributes = True

class PhotoResponse(BaseModel):
    id: int
    trip_id: int
    file_url: str
    thumbnail_url: Optional[str] = None
    caption: Optional[str] = None
    taken_at: Optional[datetime] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    has_location: bool
    itinerary_id: Optional[int] = None
    activity_id: Optional[int] = None
    itinerary: Optional[PhotoItineraryRef] = None
    activity: Optional[ActivityBrief] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class ItineraryPhotoCount(BaseModel):
    itinerary_id: Optional[int] = None
    count: int

class PhotoStatistics(BaseModel):
    total: int
    with_location: int
    by_itinerary: List[ItineraryPhotoCount]

class PhotoListResponse(BaseModel):
    items: List[PhotoResponse]
    pagination: PaginationMeta
    statistics: PhotoStatistics
