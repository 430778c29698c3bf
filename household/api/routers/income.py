# household/api/routers/income.py - Income records per person and financial year
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy import select
from typing import List, Optional
from uuid import UUID
import logging

from household.core.db import get_db
from household.api.deps.household import get_financial_year, optional_income_person
from household.models.income import Income
from household.schemas.income import IncomeCreate, IncomeUpdate, IncomeOut, IncomeSummaryOut
from household.services.financial_year import financial_year_for
from household.services.tax_tracker import income_for_year, summarise_income

logger = logging.getLogger(__name__)
router = APIRouter()

REQUIRED_FIELDS = ("person", "source", "income_type", "amount", "date",
                   "franking_credits", "tax_withheld", "is_taxable")


def _get_income(db: Session, income_id: UUID) -> Income:
    income = db.execute(select(Income).where(Income.id == income_id)).scalar_one_or_none()
    if not income:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Income not found")
    return income


@router.get("/", response_model=List[IncomeOut])
async def list_income(
    financial_year: str = Depends(get_financial_year),
    person: Optional[str] = Depends(optional_income_person),
    db: Session = Depends(get_db)
):
    return income_for_year(db, financial_year, person)


@router.get("/summary", response_model=IncomeSummaryOut)
async def get_income_summary(
    financial_year: str = Depends(get_financial_year),
    person: Optional[str] = Depends(optional_income_person),
    db: Session = Depends(get_db)
):
    """Totals by income type for the financial year"""
    return summarise_income(financial_year, income_for_year(db, financial_year, person), person)


@router.post("/", response_model=IncomeOut, status_code=status.HTTP_201_CREATED)
async def create_income(data: IncomeCreate, db: Session = Depends(get_db)):
    income = Income(**data.model_dump(), financial_year=financial_year_for(data.date))
    db.add(income)
    db.commit()
    db.refresh(income)
    logger.info(f"Income added: {income.person} {income.income_type} ${income.amount} ({income.financial_year})")
    return income


@router.get("/{income_id}", response_model=IncomeOut)
async def get_income(income_id: UUID, db: Session = Depends(get_db)):
    return _get_income(db, income_id)


@router.put("/{income_id}", response_model=IncomeOut)
async def update_income(income_id: UUID, data: IncomeUpdate, db: Session = Depends(get_db)):
    income = _get_income(db, income_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if field in REQUIRED_FIELDS and value is None:
            continue
        setattr(income, field, value)
    income.financial_year = financial_year_for(income.date)

    db.commit()
    db.refresh(income)
    logger.info(f"Income updated: {income_id}")
    return income


@router.delete("/{income_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_income(income_id: UUID, db: Session = Depends(get_db)):
    income = _get_income(db, income_id)
    db.delete(income)
    db.commit()
    logger.info(f"Income deleted: {income_id}")
