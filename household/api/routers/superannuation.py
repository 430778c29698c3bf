# household/api/routers/superannuation.py - Super contributions, caps, accounts and concessions
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from sqlalchemy import select
from typing import List, Optional
from uuid import UUID
from decimal import Decimal
import logging

from household.core.db import get_db
from household.api.deps.household import get_financial_year, get_household_person
from household.models.superannuation import SuperContribution, SuperAccount
from household.schemas.superannuation import (
    SuperContributionCreate, SuperContributionUpdate, SuperContributionOut, SuperContributionResult,
    SuperAccountUpsert, SuperAccountOut, ContributionSummaryOut, HouseholdSuperSummary,
    SGCalculationOut, ConcessionsOut, Division293Out,
)
from household.services.financial_year import financial_year_for
from household.services.super_rules import (
    is_concessional, sg_rate_for_year, calculate_sg, calculate_division_293, calculate_listo,
)
from household.services.super_tracker import (
    contributions_for_year, warnings_for_contribution, contribution_summary,
    household_super_summary, upsert_super_account,
)
from household.services.tax_tracker import tax_summary

logger = logging.getLogger(__name__)
router = APIRouter()

REQUIRED_FIELDS = ("contribution_type", "amount", "date")


def _get_contribution(db: Session, contribution_id: UUID) -> SuperContribution:
    contribution = db.execute(
        select(SuperContribution).where(SuperContribution.id == contribution_id)
    ).scalar_one_or_none()
    if not contribution:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contribution not found")
    return contribution


# Contributions
@router.get("/contributions", response_model=List[SuperContributionOut])
async def list_contributions(
    financial_year: str = Depends(get_financial_year),
    person: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    if person is not None:
        person = get_household_person(person)
    return contributions_for_year(db, financial_year, person)


@router.post("/contributions", response_model=SuperContributionResult, status_code=status.HTTP_201_CREATED)
async def create_contribution(data: SuperContributionCreate, db: Session = Depends(get_db)):
    """Save a contribution and warn if it takes the person past a cap"""
    financial_year = financial_year_for(data.date)
    warnings = warnings_for_contribution(db, data.person, data.contribution_type, data.amount, financial_year)

    contribution = SuperContribution(
        **data.model_dump(),
        financial_year=financial_year,
        is_concessional=is_concessional(data.contribution_type),
    )
    db.add(contribution)
    db.commit()
    db.refresh(contribution)
    logger.info(f"Super contribution added: {contribution.person} {contribution.contribution_type} ${contribution.amount} ({financial_year})")

    return SuperContributionResult(
        contribution=SuperContributionOut.model_validate(contribution),
        warnings=warnings,
    )


@router.get("/contributions/{contribution_id}", response_model=SuperContributionOut)
async def get_contribution(contribution_id: UUID, db: Session = Depends(get_db)):
    return _get_contribution(db, contribution_id)


@router.put("/contributions/{contribution_id}", response_model=SuperContributionResult)
async def update_contribution(contribution_id: UUID, data: SuperContributionUpdate, db: Session = Depends(get_db)):
    contribution = _get_contribution(db, contribution_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if field in REQUIRED_FIELDS and value is None:
            continue
        setattr(contribution, field, value)
    contribution.financial_year = financial_year_for(contribution.date)
    contribution.is_concessional = is_concessional(contribution.contribution_type)

    warnings = warnings_for_contribution(
        db,
        contribution.person,
        contribution.contribution_type,
        Decimal(contribution.amount),
        contribution.financial_year,
        exclude_id=contribution.id,
    )

    db.commit()
    db.refresh(contribution)
    logger.info(f"Super contribution updated: {contribution_id}")
    return SuperContributionResult(
        contribution=SuperContributionOut.model_validate(contribution),
        warnings=warnings,
    )


@router.delete("/contributions/{contribution_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contribution(contribution_id: UUID, db: Session = Depends(get_db)):
    contribution = _get_contribution(db, contribution_id)
    db.delete(contribution)
    db.commit()
    logger.info(f"Super contribution deleted: {contribution_id}")


# Summaries
@router.get("/summary/household", response_model=HouseholdSuperSummary)
async def get_household_super_summary(
    financial_year: str = Depends(get_financial_year),
    db: Session = Depends(get_db)
):
    return household_super_summary(db, financial_year)


@router.get("/summary/{person}", response_model=ContributionSummaryOut)
async def get_contribution_summary(
    person: str = Depends(get_household_person),
    financial_year: str = Depends(get_financial_year),
    db: Session = Depends(get_db)
):
    """Totals against the caps, bring-forward availability and alerts"""
    return contribution_summary(db, person, financial_year)


@router.get("/concessions/{person}", response_model=ConcessionsOut)
async def get_concessions(
    person: str = Depends(get_household_person),
    financial_year: str = Depends(get_financial_year),
    db: Session = Depends(get_db)
):
    """Division 293 and LISTO based on the person's recorded income for the year"""
    taxable_income = tax_summary(db, person, financial_year).tax.taxable_income
    concessional = contribution_summary(db, person, financial_year).concessional_total

    return ConcessionsOut(
        person=person,
        financial_year=financial_year,
        taxable_income=taxable_income,
        concessional_total=concessional,
        division_293=Division293Out.model_validate(calculate_division_293(taxable_income, concessional)),
        listo=calculate_listo(taxable_income, concessional),
    )


# Accounts
@router.get("/accounts", response_model=List[SuperAccountOut])
async def list_accounts(
    person: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    query = select(SuperAccount)
    if person is not None:
        query = query.where(SuperAccount.person == get_household_person(person))
    return db.execute(query.order_by(SuperAccount.person, SuperAccount.fund_name)).scalars().all()


@router.put("/accounts", response_model=SuperAccountOut)
async def save_account(data: SuperAccountUpsert, db: Session = Depends(get_db)):
    """Create or update the balance held with a fund"""
    account = upsert_super_account(db, data)
    db.commit()
    db.refresh(account)
    return account


# Calculators
@router.get("/calculate/sg", response_model=SGCalculationOut)
async def calculate_super_guarantee(
    salary: Decimal = Query(..., ge=0),
    financial_year: str = Depends(get_financial_year),
):
    return SGCalculationOut(
        financial_year=financial_year,
        salary=salary,
        rate=sg_rate_for_year(financial_year),
        contribution=calculate_sg(salary, financial_year),
    )
