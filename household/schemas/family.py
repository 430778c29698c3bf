# household/schemas/family.py - Family member schemas
from pydantic import AliasChoices, BaseModel, EmailStr, Field, field_validator
from typing import Optional, Literal
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from household.schemas.validators import blank_to_none, require_text

MemberType = Literal["adult", "child"]
RelationshipType = Literal["self", "spouse", "child", "parent", "sibling", "other"]
Gender = Literal["male", "female", "other", "prefer_not_to_say"]


class FamilyMemberCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    member_type: MemberType
    relationship: Optional[RelationshipType] = None
    gender: Optional[Gender] = None
    date_of_birth: Optional[date] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=32)
    medicare_number: Optional[str] = Field(None, max_length=32)
    notes: Optional[str] = None
    is_primary: bool = False
    avatar_url: Optional[str] = Field(None, max_length=512)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_text(v, "Name")

    @field_validator('relationship', 'gender', 'email', 'phone', 'medicare_number', 'notes', 'avatar_url', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)

    @field_validator('date_of_birth')
    @classmethod
    def validate_date_of_birth(cls, v: Optional[date]) -> Optional[date]:
        if v is not None and v > date.today():
            raise ValueError('Date of birth cannot be in the future')
        return v

    def to_model_fields(self, **dump_kwargs) -> dict:
        """Column values for the model; `relationship` is stored as relationship_type."""
        data = self.model_dump(**dump_kwargs)
        if "relationship" in data:
            data["relationship_type"] = data.pop("relationship")
        return data


class FamilyMemberUpdate(FamilyMemberCreate):
    name: Optional[str] = Field(None, min_length=1, max_length=128)
    member_type: Optional[MemberType] = None
    is_primary: Optional[bool] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return require_text(v, "Name") if v is not None else None


class FamilyMemberOut(BaseModel):
    id: UUID
    name: str
    member_type: MemberType
    relationship: Optional[str] = Field(
        None, validation_alias=AliasChoices("relationship", "relationship_type")
    )
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    medicare_number: Optional[str] = None
    notes: Optional[str] = None
    is_primary: bool
    avatar_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MemberSummaryOut(BaseModel):
    member_id: UUID
    name: str
    age: Optional[int] = None
    current_school: Optional[str] = None
    year_level: Optional[str] = None
    next_year_level: Optional[str] = None
    school_fees_this_year: Decimal = Decimal('0.00')
    unpaid_fees_count: int = 0
    active_activities_count: int = 0
    activities_annual_cost: Decimal = Decimal('0.00')
    documents_count: int = 0
