# household/services/super_tracker.py - Super contribution totals, caps and account balances
import logging
from decimal import Decimal
from typing import List, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from household.core.config import settings
from household.models.superannuation import SuperContribution, SuperAccount
from household.schemas.superannuation import ContributionSummaryOut, HouseholdSuperSummary, SuperAccountUpsert
from household.services.super_rules import (
    summarise_contributions, non_concessional_type, cap_warnings,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


def contributions_for_year(db: Session, financial_year: str, person: str = None) -> List[SuperContribution]:
    query = select(SuperContribution).where(SuperContribution.financial_year == financial_year)
    if person:
        query = query.where(SuperContribution.person == person)
    return list(db.execute(query.order_by(SuperContribution.date.desc())).scalars().all())


def total_super_balance(db: Session, person: str) -> Decimal:
    accounts = db.execute(
        select(SuperAccount).where(SuperAccount.person == person, SuperAccount.is_active == True)  # noqa: E712
    ).scalars().all()
    return sum((Decimal(account.balance) for account in accounts), ZERO)


def running_totals(db: Session, person: str, financial_year: str, exclude_id=None) -> Tuple[Decimal, Decimal]:
    """Concessional and non-concessional totals so far this year"""
    concessional = ZERO
    non_concessional = ZERO
    for contribution in contributions_for_year(db, financial_year, person):
        if exclude_id is not None and contribution.id == exclude_id:
            continue
        if contribution.is_concessional:
            concessional += Decimal(contribution.amount)
        elif non_concessional_type(contribution.contribution_type):
            non_concessional += Decimal(contribution.amount)
    return concessional, non_concessional


def warnings_for_contribution(
    db: Session, person: str, contribution_type: str, amount: Decimal, financial_year: str, exclude_id=None
) -> List[str]:
    concessional, non_concessional = running_totals(db, person, financial_year, exclude_id)
    warnings = cap_warnings(contribution_type, amount, concessional, non_concessional, financial_year)
    for warning in warnings:
        logger.warning(f"Super cap warning for {person} {financial_year}: {warning}")
    return warnings


def contribution_summary(db: Session, person: str, financial_year: str) -> ContributionSummaryOut:
    summary = summarise_contributions(
        person,
        financial_year,
        contributions_for_year(db, financial_year, person),
        total_super_balance(db, person),
    )
    return ContributionSummaryOut.model_validate(summary)


def household_super_summary(db: Session, financial_year: str) -> HouseholdSuperSummary:
    persons = [contribution_summary(db, person, financial_year) for person in settings.household_persons]
    concessional = sum((p.concessional_total for p in persons), ZERO)
    non_concessional = sum((p.non_concessional_total for p in persons), ZERO)
    other = sum((p.other_total for p in persons), ZERO)
    return HouseholdSuperSummary(
        financial_year=financial_year,
        persons=persons,
        combined_concessional=concessional,
        combined_non_concessional=non_concessional,
        combined_total=concessional + non_concessional + other,
        combined_super_balance=sum((p.total_super_balance for p in persons), ZERO),
    )


def upsert_super_account(db: Session, data: SuperAccountUpsert) -> SuperAccount:
    """Create or replace the balance for a person's fund. The caller commits."""
    account = db.execute(
        select(SuperAccount).where(
            SuperAccount.person == data.person,
            SuperAccount.fund_name == data.fund_name,
        )
    ).scalar_one_or_none()

    if account is None:
        account = SuperAccount(**data.model_dump())
        db.add(account)
        logger.info(f"Super account created: {data.person} / {data.fund_name}")
    else:
        for field, value in data.model_dump().items():
            setattr(account, field, value)
        logger.info(f"Super account updated: {data.person} / {data.fund_name}")
    return account
