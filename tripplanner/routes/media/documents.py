from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.database import get_db
from tripplanner.dependencies.auth import Identity, get_identity
from tripplanner.dependencies.pagination import Pagination, pagination_params
from tripplanner.schemas.common import MessageResponse
from tripplanner.schemas.media.document import (
    DocumentCreate, DocumentFilters, DocumentListResponse, DocumentResponse, DocumentUpdate
)
from tripplanner.services.media import document_service

router = APIRouter(prefix="/trips", tags=["Documents"])

@router.get("/{trip_id}/documents", response_model=DocumentListResponse)
async def list_documents(
    trip_id: int = Path(..., gt=0),
    filters: DocumentFilters = Depends(),
    pagination: Pagination = Depends(pagination_params),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await document_service.list_documents(db, identity, trip_id, filters, pagination)

@router.post("/{trip_id}/documents", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    document: DocumentCreate,
    trip_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await document_service.create_document(db, identity, trip_id, document)

@router.get("/{trip_id}/documents/{document_id}", response_model=DocumentResponse)
async def get_document(
    trip_id: int = Path(..., gt=0),
    document_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await document_service.get_document(db, identity, trip_id, document_id)

@router.put("/{trip_id}/documents/{document_id}", response_model=DocumentResponse)
async def update_document(
    document: DocumentUpdate,
    trip_id: int = Path(..., gt=0),
    document_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await document_service.update_document(db, identity, trip_id, document_id, document)

@router.delete("/{trip_id}/documents/{document_id}", response_model=MessageResponse)
async def delete_document(
    trip_id: int = Path(..., gt=0),
    document_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    return await document_service.delete_document(db, identity, trip_id, document_id)
