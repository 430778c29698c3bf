# household/schemas/deduction.py - Deduction schemas and calculator payloads
import datetime as dt
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, Dict, List, Literal, Any
from decimal import Decimal
from uuid import UUID

from household.schemas.validators import blank_to_none, require_text, validate_income_person

DeductionCategory = Literal[
    "work_from_home", "vehicle", "travel", "clothing_laundry", "self_education",
    "tools_equipment", "professional_subscriptions", "union_fees", "phone_internet",
    "donations", "income_protection", "tax_agent_fees", "investment_expenses",
    "rental_property", "other",
]


class DeductionCreate(BaseModel):
    person: str
    category: DeductionCategory
    description: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    date: dt.date
    receipt_url: Optional[str] = Field(None, max_length=512)
    calculation_method: Optional[str] = Field(None, max_length=32)
    calculation_details: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None

    @field_validator('person')
    @classmethod
    def validate_person(cls, v: str) -> str:
        return validate_income_person(v)

    @field_validator('description')
    @classmethod
    def validate_description(cls, v: str) -> str:
        return require_text(v, "Description")

    @field_validator('receipt_url', 'calculation_method', 'notes', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)


class DeductionUpdate(BaseModel):
    person: Optional[str] = None
    category: Optional[DeductionCategory] = None
    description: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    date: Optional[dt.date] = None
    receipt_url: Optional[str] = Field(None, max_length=512)
    notes: Optional[str] = None

    @field_validator('person')
    @classmethod
    def validate_person(cls, v: Optional[str]) -> Optional[str]:
        return validate_income_person(v) if v is not None else None

    @field_validator('receipt_url', 'notes', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)


class DeductionOut(BaseModel):
    id: UUID
    person: str
    category: str
    description: str
    amount: Decimal
    date: dt.date
    financial_year: str
    is_approved: bool
    receipt_url: Optional[str] = None
    calculation_method: Optional[str] = None
    calculation_details: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True


class DeductionResult(BaseModel):
    """A saved deduction plus any reasons it was held back from approval"""
    deduction: DeductionOut
    flagged: bool
    flag_reasons: List[str] = []


class WFHCalculationIn(BaseModel):
    hours_per_week: Decimal = Field(..., ge=0, le=168)
    weeks: int = Field(48, ge=0, le=52)


class WFHCalculationOut(BaseModel):
    hours_per_week: Decimal
    weeks: int
    total_hours: Decimal
    rate: Decimal
    deduction: Decimal

    class Config:
        from_attributes = True


class WFHDeductionCreate(WFHCalculationIn):
    person: str
    period_start: dt.date
    period_end: dt.date
    receipt_url: Optional[str] = Field(None, max_length=512)
    notes: Optional[str] = None

    @field_validator('person')
    @classmethod
    def validate_person(cls, v: str) -> str:
        return validate_income_person(v)

    @field_validator('receipt_url', 'notes', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)

    @model_validator(mode='after')
    def validate_period(self):
        if self.period_end < self.period_start:
            raise ValueError('Period end must be on or after period start')
        return self


class VehicleCalculationIn(BaseModel):
    kilometres: Decimal = Field(..., ge=0)


class VehicleCalculationOut(BaseModel):
    kilometres: Decimal
    claimable_km: Decimal
    rate: Decimal
    deduction: Decimal
    capped: bool

    class Config:
        from_attributes = True


class VehicleDeductionCreate(VehicleCalculationIn):
    person: str
    date: dt.date
    description: Optional[str] = Field(None, max_length=255)
    receipt_url: Optional[str] = Field(None, max_length=512)
    notes: Optional[str] = None

    @field_validator('person')
    @classmethod
    def validate_person(cls, v: str) -> str:
        return validate_income_person(v)

    @field_validator('description', 'receipt_url', 'notes', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)


class DeductionSummaryOut(BaseModel):
    financial_year: str
    person: Optional[str] = None
    total: Decimal
    count: int
    flagged_count: int
    by_category: Dict[str, Decimal] = {}
    pending: List[DeductionOut] = []
