# household/api/routers/documents.py - Document metadata records
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from sqlalchemy import select
from typing import List, Optional
from uuid import UUID
import logging

from household.core.db import get_db
from household.models.document import Document
from household.schemas.document import (
    DocumentCreate, DocumentUpdate, DocumentOut, EntityType, DocumentType,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_document(db: Session, document_id: UUID) -> Document:
    document = db.execute(select(Document).where(Document.id == document_id)).scalar_one_or_none()
    if not document:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")
    return document


@router.get("/", response_model=List[DocumentOut])
async def list_documents(
    entity_type: Optional[EntityType] = Query(None),
    document_type: Optional[DocumentType] = Query(None),
    financial_year: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Case-insensitive match on the document name"),
    db: Session = Depends(get_db)
):
    """Newest documents first, narrowed by any filters given"""
    query = select(Document)
    if entity_type:
        query = query.where(Document.entity_type == entity_type)
    if document_type:
        query = query.where(Document.document_type == document_type)
    if financial_year:
        query = query.where(Document.financial_year == financial_year)
    if search and search.strip():
        query = query.where(Document.name.ilike(f"%{search.strip()}%"))

    return db.execute(query.order_by(Document.created_at.desc())).scalars().all()


@router.post("/", response_model=DocumentOut, status_code=status.HTTP_201_CREATED)
async def create_document(data: DocumentCreate, db: Session = Depends(get_db)):
    document = Document(**data.model_dump())
    db.add(document)
    db.commit()
    db.refresh(document)
    logger.info(f"Document created: {document.name} ({document.document_type})")
    return document


@router.get("/{document_id}", response_model=DocumentOut)
async def get_document(document_id: UUID, db: Session = Depends(get_db)):
    return _get_document(db, document_id)


@router.put("/{document_id}", response_model=DocumentOut)
async def update_document(document_id: UUID, data: DocumentUpdate, db: Session = Depends(get_db)):
    document = _get_document(db, document_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if field in ("name", "entity_type", "document_type") and value is None:
            continue
        setattr(document, field, value)
    db.commit()
    db.refresh(document)
    logger.info(f"Document updated: {document.name}")
    return document


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(document_id: UUID, db: Session = Depends(get_db)):
    """Delete the record and any member links to it"""
    document = _get_document(db, document_id)
    name = document.name
    db.delete(document)
    db.commit()
    logger.info(f"Document deleted: {name}")
