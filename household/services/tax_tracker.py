# household/services/tax_tracker.py - Income, deduction and tax summaries per person and household
import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from household.core.config import settings
from household.models.deduction import Deduction
from household.models.income import Income
from household.schemas.deduction import DeductionOut, DeductionSummaryOut
from household.schemas.income import IncomeSummaryOut
from household.schemas.tax import (
    HouseholdTaxSummary, IncomeBreakdown, TaxCalculationOut, TaxSummaryOut,
)
from household.services.financial_year import days_until_eofy
from household.services.tax_calculator import calculate_tax

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")
JOINT = "joint"
JOINT_SHARE = Decimal("0.5")

# income_type -> bucket in the tax summary
INCOME_GROUPS = {
    "salary": "salary",
    "bonus": "salary",
    "dividend": "dividends",
    "trust_distribution": "trust_distributions",
    "rental": "rental",
    "capital_gain": "capital_gains",
}


def _round_currency(amount: Decimal) -> Decimal:
    return Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _share(record, person: str) -> Decimal:
    """A person's share of a record: all of their own, half of a joint one."""
    if record.person == person:
        return Decimal(1)
    if record.person == JOINT:
        return JOINT_SHARE
    return ZERO


def income_for_year(db: Session, financial_year: str, person: Optional[str] = None) -> List[Income]:
    query = select(Income).where(Income.financial_year == financial_year)
    if person:
        query = query.where(Income.person == person)
    return list(db.execute(query.order_by(Income.date.desc())).scalars().all())


def deductions_for_year(db: Session, financial_year: str, person: Optional[str] = None) -> List[Deduction]:
    query = select(Deduction).where(Deduction.financial_year == financial_year)
    if person:
        query = query.where(Deduction.person == person)
    return list(db.execute(query.order_by(Deduction.date.desc())).scalars().all())


def _records_for_person(db: Session, model, financial_year: str, person: str):
    return db.execute(
        select(model).where(
            model.financial_year == financial_year,
            model.person.in_([person, JOINT]),
        )
    ).scalars().all()


def summarise_income(financial_year: str, incomes: Iterable[Income], person: Optional[str] = None) -> IncomeSummaryOut:
    total = ZERO
    taxable = ZERO
    franking = ZERO
    withheld = ZERO
    by_type: Dict[str, Decimal] = {}
    for income in incomes:
        amount = Decimal(income.amount)
        total += amount
        if income.is_taxable:
            taxable += amount
        franking += Decimal(income.franking_credits)
        withheld += Decimal(income.tax_withheld)
        by_type[income.income_type] = by_type.get(income.income_type, ZERO) + amount

    return IncomeSummaryOut(
        financial_year=financial_year,
        person=person,
        total=_round_currency(total),
        taxable_total=_round_currency(taxable),
        franking_credits=_round_currency(franking),
        tax_withheld=_round_currency(withheld),
        by_type={key: _round_currency(value) for key, value in by_type.items()},
    )


def summarise_deductions(financial_year: str, deductions: Iterable[Deduction], person: Optional[str] = None) -> DeductionSummaryOut:
    deductions = list(deductions)
    by_category: Dict[str, Decimal] = {}
    for deduction in deductions:
        by_category[deduction.category] = by_category.get(deduction.category, ZERO) + Decimal(deduction.amount)

    pending = [d for d in deductions if not d.is_approved]
    return DeductionSummaryOut(
        financial_year=financial_year,
        person=person,
        total=_round_currency(sum(by_category.values(), ZERO)),
        count=len(deductions),
        flagged_count=len(pending),
        by_category={key: _round_currency(value) for key, value in by_category.items()},
        pending=[DeductionOut.model_validate(d) for d in pending],
    )


def tax_summary(
    db: Session,
    person: str,
    financial_year: str,
    has_hecs_debt: bool = False,
    has_private_health: bool = True,
) -> TaxSummaryOut:
    """Estimated tax position for one person, counting half of every joint record"""
    breakdown: Dict[str, Decimal] = {field: ZERO for field in IncomeBreakdown.model_fields if field != "total"}
    franking = ZERO
    withheld = ZERO
    for income in _records_for_person(db, Income, financial_year, person):
        share = _share(income, person)
        if income.is_taxable:
            group = INCOME_GROUPS.get(income.income_type, "other")
            breakdown[group] += Decimal(income.amount) * share
            franking += Decimal(income.franking_credits) * share
            withheld += Decimal(income.tax_withheld) * share

    deductions_by_category: Dict[str, Decimal] = {}
    for deduction in _records_for_person(db, Deduction, financial_year, person):
        amount = Decimal(deduction.amount) * _share(deduction, person)
        deductions_by_category[deduction.category] = deductions_by_category.get(deduction.category, ZERO) + amount

    gross = sum(breakdown.values(), ZERO)
    total_deductions = sum(deductions_by_category.values(), ZERO)

    result = calculate_tax(
        gross_income=gross,
        deductions=total_deductions,
        franking_credits=franking,
        has_hecs_debt=has_hecs_debt,
        has_private_health=has_private_health,
        financial_year=financial_year,
    )
    income = IncomeBreakdown(
        **{key: _round_currency(value) for key, value in breakdown.items()},
        total=_round_currency(gross),
    )

    return TaxSummaryOut(
        person=person,
        financial_year=financial_year,
        income=income,
        franking_credits=_round_currency(franking),
        tax_withheld=_round_currency(withheld),
        total_deductions=_round_currency(total_deductions),
        deductions_by_category={key: _round_currency(value) for key, value in deductions_by_category.items()},
        tax=TaxCalculationOut.model_validate(result),
        estimated_refund_or_owing=_round_currency(result.net_tax_payable - withheld),
    )


def household_tax_summary(
    db: Session,
    financial_year: str,
    hecs_persons: Iterable[str] = (),
    has_private_health: bool = True,
    today: Optional[date] = None,
) -> HouseholdTaxSummary:
    hecs_persons = set(hecs_persons)
    persons = [
        tax_summary(db, person, financial_year, person in hecs_persons, has_private_health)
        for person in settings.household_persons
    ]
    return HouseholdTaxSummary(
        financial_year=financial_year,
        persons=persons,
        combined_income=sum((p.income.total for p in persons), ZERO),
        combined_deductions=sum((p.total_deductions for p in persons), ZERO),
        combined_tax=sum((p.tax.net_tax_payable for p in persons), ZERO),
        combined_withheld=sum((p.tax_withheld for p in persons), ZERO),
        combined_refund_or_owing=sum((p.estimated_refund_or_owing for p in persons), ZERO),
        days_until_eofy=days_until_eofy(today),
    )
