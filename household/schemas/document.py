# household/schemas/document.py - Document metadata and member link schemas
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Literal
from datetime import datetime
from uuid import UUID

from household.schemas.validators import blank_to_none, require_text
from household.services.financial_year import financial_year_start

EntityType = Literal["personal", "smsf", "trust"]
DocumentType = Literal[
    "bank_statement", "tax_return", "receipt", "invoice", "trust_deed",
    "distribution_resolution", "smsf_annual_return", "investment_statement",
    "contract", "insurance", "other",
]
DocumentCategory = Literal[
    "identification", "medical", "school", "certificate",
    "legal", "insurance", "financial", "other",
]


class DocumentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    original_filename: Optional[str] = Field(None, max_length=255)
    storage_path: Optional[str] = Field(None, max_length=512)
    file_type: Optional[str] = Field(None, max_length=128)
    file_size: Optional[int] = Field(None, ge=0)
    entity_type: EntityType = "personal"
    document_type: DocumentType = "other"
    financial_year: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = []

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_text(v, "Document name")

    @field_validator('original_filename', 'storage_path', 'file_type', 'financial_year', 'description', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)

    @field_validator('financial_year')
    @classmethod
    def validate_financial_year(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            financial_year_start(v)
        return v

    @field_validator('tags')
    @classmethod
    def clean_tags(cls, v: List[str]) -> List[str]:
        return [tag.strip() for tag in v if tag and tag.strip()]


class DocumentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    entity_type: Optional[EntityType] = None
    document_type: Optional[DocumentType] = None
    financial_year: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator('financial_year', 'description', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)

    @field_validator('financial_year')
    @classmethod
    def validate_financial_year(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            financial_year_start(v)
        return v


class DocumentOut(BaseModel):
    id: UUID
    name: str
    original_filename: Optional[str] = None
    storage_path: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = None
    entity_type: str
    document_type: str
    financial_year: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MemberDocumentCreate(BaseModel):
    document_id: UUID
    document_category: DocumentCategory = "other"
    notes: Optional[str] = None

    @field_validator('notes', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)


class MemberDocumentOut(BaseModel):
    id: UUID
    family_member_id: UUID
    document_id: UUID
    document_category: str
    notes: Optional[str] = None
    document: DocumentOut
    created_at: datetime

    class Config:
        from_attributes = True
