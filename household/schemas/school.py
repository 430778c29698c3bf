# household/schemas/school.py - School, school year and term schemas
from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Optional, List, Literal
from datetime import date, datetime
from uuid import UUID

from household.schemas.validators import blank_to_none, require_text

SchoolType = Literal["primary", "secondary", "combined", "preschool", "tertiary", "other"]
Sector = Literal["public", "private", "catholic", "independent", "other"]
AustralianState = Literal["QLD", "NSW", "VIC", "SA", "WA", "TAS", "NT", "ACT"]
TermType = Literal["term", "semester", "trimester", "quarter"]


class SchoolCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    school_type: Optional[SchoolType] = None
    sector: Optional[Sector] = None
    address: Optional[str] = Field(None, max_length=256)
    suburb: Optional[str] = Field(None, max_length=64)
    state: AustralianState = "QLD"
    postcode: Optional[str] = Field(None, max_length=8)
    phone: Optional[str] = Field(None, max_length=32)
    email: Optional[EmailStr] = None
    website: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_text(v, "School name")

    @field_validator('school_type', 'sector', 'address', 'suburb', 'postcode', 'phone', 'email', 'website', 'notes', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)

    @field_validator('state', mode='before')
    @classmethod
    def normalize_state(cls, v):
        return v.strip().upper() if isinstance(v, str) else v


class SchoolUpdate(SchoolCreate):
    name: Optional[str] = Field(None, min_length=1, max_length=128)
    state: Optional[AustralianState] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return require_text(v, "School name") if v is not None else None


class SchoolOut(BaseModel):
    id: UUID
    name: str
    school_type: Optional[str] = None
    sector: Optional[str] = None
    address: Optional[str] = None
    suburb: Optional[str] = None
    state: str
    postcode: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# School Term Schemas
class SchoolTermCreate(BaseModel):
    term_type: TermType = "term"
    term_number: int = Field(..., ge=1, le=12)
    name: Optional[str] = Field(None, max_length=64)
    start_date: date
    end_date: date
    fees_due_date: Optional[date] = None
    notes: Optional[str] = None

    @field_validator('name', 'notes', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)

    @model_validator(mode='after')
    def validate_dates(self):
        if self.end_date < self.start_date:
            raise ValueError('End date must be on or after start date')
        return self


class SchoolTermUpdate(BaseModel):
    term_type: Optional[TermType] = None
    term_number: Optional[int] = Field(None, ge=1, le=12)
    name: Optional[str] = Field(None, max_length=64)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    fees_due_date: Optional[date] = None
    notes: Optional[str] = None

    @field_validator('name', 'notes', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)


class SchoolTermSyncItem(SchoolTermCreate):
    """A row from the term editor; rows with an id update, rows without create."""
    id: Optional[UUID] = None


class SchoolTermOut(BaseModel):
    id: UUID
    school_year_id: UUID
    term_type: str
    term_number: int
    name: Optional[str] = None
    start_date: date
    end_date: date
    fees_due_date: Optional[date] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class SchoolTermTemplateOut(BaseModel):
    term_type: str
    term_number: int
    name: str
    start_date: date
    end_date: date
    fees_due_date: date

    class Config:
        from_attributes = True


class TermSyncResult(BaseModel):
    created: int
    updated: int
    deleted: int
    terms: List[SchoolTermOut]


# School Year Schemas
class SchoolYearCreate(BaseModel):
    year: int = Field(..., ge=1900, le=2100)
    year_start: Optional[date] = None
    year_end: Optional[date] = None
    notes: Optional[str] = None

    @field_validator('notes', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)


class SchoolYearUpdate(BaseModel):
    year: Optional[int] = Field(None, ge=1900, le=2100)
    year_start: Optional[date] = None
    year_end: Optional[date] = None
    notes: Optional[str] = None

    @field_validator('notes', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)


class SchoolYearOut(SchoolYearCreate):
    id: UUID
    school_id: UUID

    class Config:
        from_attributes = True


class SchoolYearDetail(SchoolYearOut):
    terms: List[SchoolTermOut] = []


class SchoolDetail(SchoolOut):
    """School with its years and their terms, newest year first"""
    years: List[SchoolYearDetail] = []
