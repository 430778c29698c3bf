# household/schemas/lookups.py - Fee type, activity type and frequency schemas
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from decimal import Decimal
from uuid import UUID

from household.schemas.validators import blank_to_none, require_text


class LookupBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    sort_order: int = Field(50, ge=0, le=999)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_text(v, "Name")

    @field_validator('description', mode='before')
    @classmethod
    def clean_description(cls, v):
        return blank_to_none(v)


class LookupUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    sort_order: Optional[int] = Field(None, ge=0, le=999)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return require_text(v, "Name") if v is not None else None


class FeeTypeCreate(LookupBase):
    pass


class FeeTypeUpdate(LookupUpdate):
    pass


class FeeTypeOut(LookupBase):
    id: UUID
    is_system: bool

    class Config:
        from_attributes = True


class ActivityTypeCreate(LookupBase):
    icon: Optional[str] = Field(None, max_length=50)


class ActivityTypeUpdate(LookupUpdate):
    icon: Optional[str] = Field(None, max_length=50)


class ActivityTypeOut(ActivityTypeCreate):
    id: UUID
    is_system: bool

    class Config:
        from_attributes = True


class FrequencyCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    per_year_multiplier: Optional[Decimal] = Field(None, ge=0)
    sort_order: int = Field(50, ge=0, le=999)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_text(v, "Name")


class FrequencyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    per_year_multiplier: Optional[Decimal] = Field(None, ge=0)
    sort_order: Optional[int] = Field(None, ge=0, le=999)


class FrequencyOut(FrequencyCreate):
    id: UUID
    is_system: bool

    class Config:
        from_attributes = True
