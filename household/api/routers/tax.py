# household/api/routers/tax.py - Tax estimates and the financial year
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List
import logging

from household.core.config import settings
from household.core.db import get_db
from household.api.deps.household import get_financial_year, get_household_person
from household.schemas.tax import (
    TaxCalculationIn, TaxCalculationOut, TaxSummaryOut, HouseholdTaxSummary, FinancialYearInfo,
)
from household.services.financial_year import financial_year_bounds, days_until_eofy, financial_year_start
from household.services.tax_calculator import calculate_tax
from household.services.tax_tracker import tax_summary, household_tax_summary

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/calculate", response_model=TaxCalculationOut)
async def calculate(data: TaxCalculationIn):
    """Ad hoc estimate from the figures given; nothing is read from the database"""
    if data.financial_year is not None:
        try:
            financial_year_start(data.financial_year)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    return calculate_tax(
        gross_income=data.gross_income,
        deductions=data.deductions,
        franking_credits=data.franking_credits,
        has_hecs_debt=data.has_hecs_debt,
        has_private_health=data.has_private_health,
        financial_year=data.financial_year,
    )


@router.get("/financial-year", response_model=FinancialYearInfo)
async def get_financial_year_info(financial_year: str = Depends(get_financial_year)):
    start, end = financial_year_bounds(financial_year)
    return FinancialYearInfo(
        financial_year=financial_year,
        start_date=start,
        end_date=end,
        days_until_eofy=days_until_eofy(),
        persons=settings.household_persons,
    )


@router.get("/summary/household", response_model=HouseholdTaxSummary)
async def get_household_tax_summary(
    financial_year: str = Depends(get_financial_year),
    hecs: List[str] = Query([], description="Persons with a HECS/HELP debt"),
    has_private_health: bool = Query(True),
    db: Session = Depends(get_db)
):
    hecs_persons = [get_household_person(person) for person in hecs]
    return household_tax_summary(db, financial_year, hecs_persons, has_private_health)


@router.get("/summary/{person}", response_model=TaxSummaryOut)
async def get_tax_summary(
    person: str = Depends(get_household_person),
    financial_year: str = Depends(get_financial_year),
    has_hecs_debt: bool = Query(False),
    has_private_health: bool = Query(True),
    db: Session = Depends(get_db)
):
    """Income, deductions and estimated refund or bill for one person"""
    return tax_summary(db, person, financial_year, has_hecs_debt, has_private_health)
