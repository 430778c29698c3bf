# household/schemas/extracurricular.py - Extracurricular activity schemas
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List, Literal
from datetime import date, datetime, time
from decimal import Decimal
from uuid import UUID

from household.schemas.lookups import ActivityTypeOut, FrequencyOut
from household.schemas.validators import blank_to_none, require_text

Weekday = Literal["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

_OPTIONAL_TEXT = (
    'provider', 'venue', 'other_costs_description', 'contact_name',
    'contact_phone', 'contact_email', 'website', 'notes',
)


class ExtracurricularBase(BaseModel):
    activity_type_id: Optional[UUID] = None
    provider: Optional[str] = Field(None, max_length=128)
    venue: Optional[str] = Field(None, max_length=255)
    day_of_week: Optional[List[Weekday]] = None
    time_start: Optional[time] = None
    time_end: Optional[time] = None
    season_start: Optional[date] = None
    season_end: Optional[date] = None
    cost_amount: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    cost_frequency_id: Optional[UUID] = None
    registration_fee: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    equipment_cost: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    uniform_cost: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    other_costs: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    other_costs_description: Optional[str] = Field(None, max_length=255)
    contact_name: Optional[str] = Field(None, max_length=128)
    contact_phone: Optional[str] = Field(None, max_length=32)
    contact_email: Optional[EmailStr] = None
    website: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None

    @field_validator(*_OPTIONAL_TEXT, mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)

    @field_validator('day_of_week', mode='before')
    @classmethod
    def normalize_days(cls, v):
        """Accept any capitalisation and drop repeats while keeping order"""
        if isinstance(v, list):
            seen = []
            for day in v:
                day = day.strip().capitalize() if isinstance(day, str) else day
                if day not in seen:
                    seen.append(day)
            return seen
        return v


class ExtracurricularCreate(ExtracurricularBase):
    family_member_id: UUID
    name: str = Field(..., min_length=1, max_length=128)
    is_active: bool = True

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_text(v, "Activity name")


class ExtracurricularUpdate(ExtracurricularBase):
    name: Optional[str] = Field(None, min_length=1, max_length=128)
    is_active: Optional[bool] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return require_text(v, "Activity name") if v is not None else None


class ExtracurricularOut(BaseModel):
    id: UUID
    family_member_id: UUID
    activity_type_id: Optional[UUID] = None
    name: str
    provider: Optional[str] = None
    venue: Optional[str] = None
    day_of_week: Optional[List[str]] = None
    time_start: Optional[time] = None
    time_end: Optional[time] = None
    season_start: Optional[date] = None
    season_end: Optional[date] = None
    is_active: bool
    cost_amount: Optional[Decimal] = None
    cost_frequency_id: Optional[UUID] = None
    registration_fee: Optional[Decimal] = None
    equipment_cost: Optional[Decimal] = None
    uniform_cost: Optional[Decimal] = None
    other_costs: Optional[Decimal] = None
    other_costs_description: Optional[str] = None
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None
    activity_type: Optional[ActivityTypeOut] = None
    cost_frequency: Optional[FrequencyOut] = None
    annual_cost: Decimal = Decimal('0.00')
    weekly_hours: float = 0.0
    member_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ActivityCostGroup(BaseModel):
    id: Optional[UUID] = None
    name: str
    count: int = 0
    annual_cost: Decimal = Decimal('0.00')


class ActivitySummaryOut(BaseModel):
    active_count: int
    total_annual_cost: Decimal
    monthly_average: Decimal
    total_weekly_hours: float
    by_child: List[ActivityCostGroup] = []
    by_type: List[ActivityCostGroup] = []


class ScheduleEntry(BaseModel):
    activity_id: UUID
    name: str
    member_name: str
    venue: Optional[str] = None
    time_start: Optional[time] = None
    time_end: Optional[time] = None


class ScheduleDayOut(BaseModel):
    day: str
    activities: List[ScheduleEntry] = []
