# household/schemas/superannuation.py - Super contribution, account and cap schemas
import datetime as dt
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict, List, Literal
from decimal import Decimal
from uuid import UUID

from household.schemas.validators import blank_to_none, validate_household_person

ContributionType = Literal[
    "employer_sg", "salary_sacrifice", "personal_deductible", "personal_non_deductible",
    "spouse", "government_co_contribution", "low_income_super_offset", "other",
]


class SuperContributionCreate(BaseModel):
    person: str
    contribution_type: ContributionType
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    date: dt.date
    fund_name: Optional[str] = Field(None, max_length=128)
    fund_abn: Optional[str] = Field(None, max_length=14)
    employer_name: Optional[str] = Field(None, max_length=128)
    notes: Optional[str] = None

    @field_validator('person')
    @classmethod
    def validate_person(cls, v: str) -> str:
        return validate_household_person(v)

    @field_validator('fund_name', 'fund_abn', 'employer_name', 'notes', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)


class SuperContributionUpdate(BaseModel):
    contribution_type: Optional[ContributionType] = None
    amount: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    date: Optional[dt.date] = None
    fund_name: Optional[str] = Field(None, max_length=128)
    fund_abn: Optional[str] = Field(None, max_length=14)
    employer_name: Optional[str] = Field(None, max_length=128)
    notes: Optional[str] = None

    @field_validator('fund_name', 'fund_abn', 'employer_name', 'notes', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)


class SuperContributionOut(BaseModel):
    id: UUID
    person: str
    contribution_type: str
    amount: Decimal
    date: dt.date
    financial_year: str
    fund_name: Optional[str] = None
    fund_abn: Optional[str] = None
    employer_name: Optional[str] = None
    is_concessional: bool
    notes: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True


class SuperContributionResult(BaseModel):
    contribution: SuperContributionOut
    warnings: List[str] = []


class SuperAccountUpsert(BaseModel):
    person: str
    fund_name: str = Field(..., min_length=1, max_length=128)
    member_number: Optional[str] = Field(None, max_length=64)
    balance: Decimal = Field(..., ge=0, decimal_places=2)
    balance_date: Optional[dt.date] = None
    is_active: bool = True

    @field_validator('person')
    @classmethod
    def validate_person(cls, v: str) -> str:
        return validate_household_person(v)

    @field_validator('fund_name')
    @classmethod
    def strip_fund_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Fund name cannot be empty or whitespace')
        return v.strip()


class SuperAccountOut(BaseModel):
    id: UUID
    person: str
    fund_name: str
    member_number: Optional[str] = None
    balance: Decimal
    balance_date: Optional[dt.date] = None
    is_active: bool

    class Config:
        from_attributes = True


class BringForwardOut(BaseModel):
    available: bool
    years: int
    max_contribution: Decimal

    class Config:
        from_attributes = True


class SuperAlertOut(BaseModel):
    level: Literal["error", "warning", "info"]
    message: str

    class Config:
        from_attributes = True


class ContributionSummaryOut(BaseModel):
    person: str
    financial_year: str
    concessional_total: Decimal
    non_concessional_total: Decimal
    other_total: Decimal
    concessional_cap: Decimal
    non_concessional_cap: Decimal
    concessional_remaining: Decimal
    non_concessional_remaining: Decimal
    concessional_utilisation: Decimal
    total_super_balance: Decimal
    bring_forward: BringForwardOut
    by_type: Dict[str, Decimal] = {}
    alerts: List[SuperAlertOut] = []

    class Config:
        from_attributes = True


class HouseholdSuperSummary(BaseModel):
    financial_year: str
    persons: List[ContributionSummaryOut] = []
    combined_concessional: Decimal
    combined_non_concessional: Decimal
    combined_total: Decimal
    combined_super_balance: Decimal


class SGCalculationOut(BaseModel):
    financial_year: str
    salary: Decimal
    rate: Decimal
    contribution: Decimal


class Division293Out(BaseModel):
    applies: bool
    taxable_amount: Decimal
    tax: Decimal

    class Config:
        from_attributes = True


class ConcessionsOut(BaseModel):
    """Division 293 and LISTO for one person's income and concessional contributions"""
    person: str
    financial_year: str
    taxable_income: Decimal
    concessional_total: Decimal
    division_293: Division293Out
    listo: Decimal
