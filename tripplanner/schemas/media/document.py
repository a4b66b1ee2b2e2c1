from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional
from datetime import datetime

from tripplanner.models.media.document import DocumentType
from tripplanner.schemas.common import PaginationMeta, check_file_reference
from tripplanner.utils.dates import to_naive_utc

class DocumentBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    type: DocumentType
    file_url: str = Field(..., min_length=1)
    file_type: str = Field(..., min_length=1, max_length=100)
    file_size: int = Field(..., gt=0)
    expiry_date: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("file_url")
    @classmethod
    def _file_reference(cls, v):
        return check_file_reference(v)

    @field_validator("expiry_date")
    @classmethod
    def _naive_utc(cls, v):
        return to_naive_utc(v)

class DocumentCreate(DocumentBase):
    pass

class DocumentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[DocumentType] = None
    file_url: Optional[str] = Field(None, min_length=1)
    file_type: Optional[str] = Field(None, min_length=1, max_length=100)
    file_size: Optional[int] = Field(None, gt=0)
    expiry_date: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("file_url")
    @classmethod
    def _file_reference(cls, v):
        return check_file_reference(v) if v is not None else v

    @field_validator("expiry_date")
    @classmethod
    def _naive_utc(cls, v):
        return to_naive_utc(v)

class DocumentFilters(BaseModel):
    search: Optional[str] = None
    type: Optional[DocumentType] = None

class DocumentResponse(DocumentBase):
    id: int
    trip_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class ExpiringDocument(BaseModel):
    id: int
    name: str
    type: DocumentType
    expiry_date: datetime

    class Config:
        from_attributes = True

class DocumentStatistics(BaseModel):
    total: int
    by_type: Dict[str, int]
    expiring_soon: int
    expiring_documents: List[ExpiringDocument]

class DocumentListResponse(BaseModel):
    items: List[DocumentResponse]
    pagination: PaginationMeta
    statistics: DocumentStatistics
