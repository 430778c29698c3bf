# household/schemas/income.py - Income schemas
import datetime as dt
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict, Literal
from decimal import Decimal
from uuid import UUID

from household.schemas.validators import blank_to_none, require_text, validate_income_person

IncomeType = Literal[
    "salary", "bonus", "dividend", "trust_distribution", "rental",
    "interest", "capital_gain", "government_payment", "other",
]


class IncomeCreate(BaseModel):
    person: str
    source: str = Field(..., min_length=1, max_length=255)
    income_type: IncomeType
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    date: dt.date
    franking_credits: Decimal = Field(Decimal('0.00'), ge=0, decimal_places=2)
    tax_withheld: Decimal = Field(Decimal('0.00'), ge=0, decimal_places=2)
    is_taxable: bool = True
    notes: Optional[str] = None

    @field_validator('person')
    @classmethod
    def validate_person(cls, v: str) -> str:
        return validate_income_person(v)

    @field_validator('source')
    @classmethod
    def validate_source(cls, v: str) -> str:
        return require_text(v, "Source")

    @field_validator('notes', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)


class IncomeUpdate(BaseModel):
    person: Optional[str] = None
    source: Optional[str] = Field(None, min_length=1, max_length=255)
    income_type: Optional[IncomeType] = None
    amount: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    date: Optional[dt.date] = None
    franking_credits: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    tax_withheld: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    is_taxable: Optional[bool] = None
    notes: Optional[str] = None

    @field_validator('person')
    @classmethod
    def validate_person(cls, v: Optional[str]) -> Optional[str]:
        return validate_income_person(v) if v is not None else None


class IncomeOut(BaseModel):
    id: UUID
    person: str
    source: str
    income_type: str
    amount: Decimal
    date: dt.date
    financial_year: str
    franking_credits: Decimal
    tax_withheld: Decimal
    is_taxable: bool
    notes: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True


class IncomeSummaryOut(BaseModel):
    financial_year: str
    person: Optional[str] = None
    total: Decimal
    taxable_total: Decimal
    franking_credits: Decimal
    tax_withheld: Decimal
    by_type: Dict[str, Decimal] = {}
