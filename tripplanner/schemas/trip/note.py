from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from datetime import datetime

from tripplanner.models.trips.note_model import NoteType
from tripplanner.schemas.common import PaginationMeta

class NoteCreate(BaseModel):
    title: Optional[str] = Field(None, max_length=200)
    content: str = Field(..., min_length=1)
    type: NoteType = NoteType.GENERAL

class NoteUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=200)
    content: Optional[str] = Field(None, min_length=1)
    type: Optional[NoteType] = None

class NoteFilters(BaseModel):
    search: Optional[str] = None
    type: Optional[NoteType] = None

class NoteResponse(BaseModel):
    id: int
    trip_id: int
    title: Optional[str] = None
    content: str
    type: NoteType
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class NoteStatistics(BaseModel):
    total: int
    recent: int
    by_type: Dict[str, int]

class NoteListResponse(BaseModel):
    items: List[NoteResponse]
    pagination: PaginationMeta
    statistics: NoteStatistics
