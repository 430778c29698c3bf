# household/schemas/fee_schema.py - School fee schemas and fee reports
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Literal
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from household.schemas.lookups import FeeTypeOut, FrequencyOut
from household.schemas.validators import blank_to_none, require_text

PaymentMethod = Literal["bank_transfer", "bpay", "credit_card", "direct_debit", "cash", "other"]
FeeStatus = Literal["paid", "no-date", "overdue", "due", "upcoming"]


class SchoolFeeCreate(BaseModel):
    enrolment_id: UUID
    fee_type_id: Optional[UUID] = None
    frequency_id: Optional[UUID] = None
    school_term_id: Optional[UUID] = None
    description: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    due_date: Optional[date] = None
    year: Optional[int] = Field(None, ge=1900, le=2100)  # defaults to the current year
    is_paid: bool = False
    paid_date: Optional[date] = None
    paid_amount: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    payment_method: Optional[PaymentMethod] = None
    invoice_number: Optional[str] = Field(None, max_length=64)
    notes: Optional[str] = None

    @field_validator('description')
    @classmethod
    def validate_description(cls, v: str) -> str:
        return require_text(v, "Description")

    @field_validator('payment_method', 'invoice_number', 'notes', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)


class SchoolFeeUpdate(BaseModel):
    fee_type_id: Optional[UUID] = None
    frequency_id: Optional[UUID] = None
    school_term_id: Optional[UUID] = None
    description: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    due_date: Optional[date] = None
    year: Optional[int] = Field(None, ge=1900, le=2100)
    is_paid: Optional[bool] = None
    paid_date: Optional[date] = None
    paid_amount: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    payment_method: Optional[PaymentMethod] = None
    invoice_number: Optional[str] = Field(None, max_length=64)
    notes: Optional[str] = None

    @field_validator('payment_method', 'invoice_number', 'notes', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)


class MarkFeePaid(BaseModel):
    paid_date: Optional[date] = None        # defaults to today
    paid_amount: Optional[Decimal] = Field(None, ge=0, decimal_places=2)  # defaults to the fee amount
    payment_method: Optional[PaymentMethod] = None
    invoice_number: Optional[str] = Field(None, max_length=64)


class SchoolFeeOut(BaseModel):
    id: UUID
    enrolment_id: UUID
    fee_type_id: Optional[UUID] = None
    frequency_id: Optional[UUID] = None
    school_term_id: Optional[UUID] = None
    description: str
    amount: Decimal
    due_date: Optional[date] = None
    year: int
    is_paid: bool
    paid_date: Optional[date] = None
    paid_amount: Optional[Decimal] = None
    payment_method: Optional[str] = None
    invoice_number: Optional[str] = None
    notes: Optional[str] = None
    fee_type: Optional[FeeTypeOut] = None
    frequency: Optional[FrequencyOut] = None
    status: FeeStatus = "upcoming"  # computed from due date and payment
    member_name: Optional[str] = None
    school_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class FeeGroupTotal(BaseModel):
    id: Optional[UUID] = None
    name: str
    total: Decimal = Decimal('0.00')
    paid: Decimal = Decimal('0.00')
    remaining: Decimal = Decimal('0.00')
    count: int = 0


class FeeSummaryOut(BaseModel):
    year: int
    total: Decimal
    paid: Decimal
    remaining: Decimal
    paid_percentage: float
    fee_count: int
    unpaid_count: int
    overdue_count: int
    by_child: List[FeeGroupTotal] = []
    by_fee_type: List[FeeGroupTotal] = []


class FeeCalendarDay(BaseModel):
    due_date: date
    total: Decimal
    fees: List[SchoolFeeOut] = []


class FeeCalendarOut(BaseModel):
    year: int
    month: int
    total: Decimal
    days: List[FeeCalendarDay] = []


class ChildFeesOverview(BaseModel):
    member_id: UUID
    name: str
    school_fees: Decimal = Decimal('0.00')
    paid_fees: Decimal = Decimal('0.00')
    activities_cost: Decimal = Decimal('0.00')
    total: Decimal = Decimal('0.00')


class FamilyFeesOverview(BaseModel):
    year: int
    children: List[ChildFeesOverview] = []
    total_school_fees: Decimal = Decimal('0.00')
    total_paid: Decimal = Decimal('0.00')
    total_activities: Decimal = Decimal('0.00')
    grand_total: Decimal = Decimal('0.00')
    remaining_school_fees: Decimal = Decimal('0.00')
