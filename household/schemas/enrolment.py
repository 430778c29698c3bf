# household/schemas/enrolment.py - School enrolment schemas
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date, datetime
from uuid import UUID

from household.schemas.validators import blank_to_none


class EnrolmentCreate(BaseModel):
    family_member_id: UUID
    school_id: UUID
    year_level: Optional[str] = Field(None, max_length=16)
    enrolment_date: Optional[date] = None
    expected_graduation: Optional[date] = None
    student_id: Optional[str] = Field(None, max_length=64)
    house: Optional[str] = Field(None, max_length=64)
    is_current: bool = True
    notes: Optional[str] = None

    @field_validator('year_level', 'student_id', 'house', 'notes', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)


class EnrolmentUpdate(BaseModel):
    year_level: Optional[str] = Field(None, max_length=16)
    enrolment_date: Optional[date] = None
    expected_graduation: Optional[date] = None
    student_id: Optional[str] = Field(None, max_length=64)
    house: Optional[str] = Field(None, max_length=64)
    is_current: Optional[bool] = None
    notes: Optional[str] = None

    @field_validator('year_level', 'student_id', 'house', 'notes', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)


class SchoolBrief(BaseModel):
    id: UUID
    name: str
    state: str

    class Config:
        from_attributes = True


class EnrolmentOut(BaseModel):
    id: UUID
    family_member_id: UUID
    school_id: UUID
    year_level: Optional[str] = None
    enrolment_date: Optional[date] = None
    expected_graduation: Optional[date] = None
    student_id: Optional[str] = None
    house: Optional[str] = None
    is_current: bool
    notes: Optional[str] = None
    school: Optional[SchoolBrief] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
