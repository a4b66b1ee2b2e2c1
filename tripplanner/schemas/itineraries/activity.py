from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from tripplanner.models.itinerary.activity import ActivityCategory
from tripplanner.schemas.common import PaginationMeta, check_optional_url

class ActivityBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    category: ActivityCategory = ActivityCategory.OTHER
    address: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    price: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    duration_hours: Optional[float] = Field(None, gt=0)
    opening_hours: Optional[str] = None
    website_url: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)

    @field_validator("website_url", mode="before")
    @classmethod
    def _website(cls, v):
        return check_optional_url(v)

class ActivityCreate(ActivityBase):
    pass

class ActivityUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    category: Optional[ActivityCategory] = None
    address: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    price: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    duration_hours: Optional[float] = Field(None, gt=0)
    opening_hours: Optional[str] = None
    website_url: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)

    @field_validator("website_url", mode="before")
    @classmethod
    def _website(cls, v):
        return check_optional_url(v)

class ActivityFilters(BaseModel):
    search: Optional[str] = None
    category: Optional[ActivityCategory] = None

class ActivityResponse(ActivityBase):
    id: int
    trip_id: int
    created_at: datetime
    updated_at: datetime
    itinerary_count: int = 0
    photo_count: int = 0

    class Config:
        from_attributes = True

class ActivityBrief(BaseModel):
    id: int
    name: str
    category: ActivityCategory

    class Config:
        from_attributes = True

class ActivityListResponse(BaseModel):
    items: List[ActivityResponse]
    pagination: PaginationMeta
