# household/schemas/tax.py - Tax estimate and financial year schemas
from pydantic import BaseModel, Field
from typing import Optional, Dict, List
from datetime import date
from decimal import Decimal


class TaxCalculationIn(BaseModel):
    gross_income: Decimal = Field(..., ge=0)
    deductions: Decimal = Field(Decimal('0'), ge=0)
    franking_credits: Decimal = Field(Decimal('0'), ge=0)
    has_hecs_debt: bool = False
    has_private_health: bool = True
    financial_year: Optional[str] = None


class TaxCalculationOut(BaseModel):
    gross_income: Decimal
    deductions: Decimal
    taxable_income: Decimal
    franking_credits: Decimal
    income_tax: Decimal
    medicare_levy: Decimal
    medicare_levy_surcharge: Decimal
    hecs_repayment: Decimal
    total_tax: Decimal
    net_tax_payable: Decimal
    effective_rate: Decimal
    marginal_rate: Decimal
    tax_bracket: str

    class Config:
        from_attributes = True


class IncomeBreakdown(BaseModel):
    salary: Decimal = Decimal('0.00')
    dividends: Decimal = Decimal('0.00')
    trust_distributions: Decimal = Decimal('0.00')
    rental: Decimal = Decimal('0.00')
    capital_gains: Decimal = Decimal('0.00')
    other: Decimal = Decimal('0.00')
    total: Decimal = Decimal('0.00')


class TaxSummaryOut(BaseModel):
    person: str
    financial_year: str
    income: IncomeBreakdown
    franking_credits: Decimal
    tax_withheld: Decimal
    total_deductions: Decimal
    deductions_by_category: Dict[str, Decimal] = {}
    tax: TaxCalculationOut
    # Negative means a refund is expected
    estimated_refund_or_owing: Decimal


class HouseholdTaxSummary(BaseModel):
    financial_year: str
    persons: List[TaxSummaryOut] = []
    combined_income: Decimal
    combined_deductions: Decimal
    combined_tax: Decimal
    combined_withheld: Decimal
    combined_refund_or_owing: Decimal
    days_until_eofy: int


class FinancialYearInfo(BaseModel):
    financial_year: str
    start_date: date
    end_date: date
    days_until_eofy: int
    persons: List[str]
