"""
Superannuation contribution caps and related concessions.

All figures are per person per financial year. Caps follow the indexed
amounts in force from 1 July 2021 and 1 July 2024.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional

from household.services.financial_year import financial_year_start

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

CONCESSIONAL_TYPES = frozenset({"employer_sg", "salary_sacrifice", "personal_deductible"})

CAP_WARNING_REMAINING = Decimal("5000")
LOW_UTILISATION_PERCENT = Decimal("50")

TSB_BRING_FORWARD_UNAVAILABLE = Decimal("1900000")
TSB_BRING_FORWARD_TWO_YEARS = Decimal("1680000")

DIVISION_293_THRESHOLD = Decimal("250000")
DIVISION_293_RATE = Decimal("0.15")

LISTO_INCOME_THRESHOLD = Decimal("37000")
LISTO_RATE = Decimal("0.15")
LISTO_MAX = Decimal("500")

# (first FY start year, rate), checked newest first
SG_RATES = [
    (2025, Decimal("0.12")),
    (2024, Decimal("0.115")),
    (2023, Decimal("0.11")),
    (2022, Decimal("0.105")),
]
SG_RATE_DEFAULT = Decimal("0.10")


def _round_currency(amount: Decimal) -> Decimal:
    """Round to 2 decimal places for currency."""
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def is_concessional(contribution_type: str) -> bool:
    return contribution_type in CONCESSIONAL_TYPES


@dataclass(frozen=True)
class ContributionCaps:
    concessional: Decimal
    non_concessional: Decimal
    bring_forward: Decimal


def caps_for_year(financial_year: str) -> ContributionCaps:
    if financial_year_start(financial_year) >= 2024:
        return ContributionCaps(Decimal("30000"), Decimal("120000"), Decimal("360000"))
    return ContributionCaps(Decimal("27500"), Decimal("110000"), Decimal("330000"))


def sg_rate_for_year(financial_year: str) -> Decimal:
    start = financial_year_start(financial_year)
    for first_year, rate in SG_RATES:
        if start >= first_year:
            return rate
    return SG_RATE_DEFAULT


def calculate_sg(salary: Decimal, financial_year: str) -> Decimal:
    return _round_currency(Decimal(salary) * sg_rate_for_year(financial_year))


@dataclass
class BringForwardEligibility:
    available: bool
    years: int
    max_contribution: Decimal


def bring_forward_eligibility(total_super_balance: Decimal, financial_year: str) -> BringForwardEligibility:
    """Non-concessional bring-forward depends on the total super balance at 30 June."""
    cap = caps_for_year(financial_year).non_concessional
    balance = Decimal(total_super_balance)
    if balance >= TSB_BRING_FORWARD_UNAVAILABLE:
        return BringForwardEligibility(False, 0, cap)
    if balance >= TSB_BRING_FORWARD_TWO_YEARS:
        return BringForwardEligibility(True, 2, cap * 2)
    return BringForwardEligibility(True, 3, cap * 3)


@dataclass
class Division293Result:
    applies: bool
    taxable_amount: Decimal
    tax: Decimal


def calculate_division_293(income: Decimal, concessional: Decimal) -> Division293Result:
    """Extra 15% on concessional contributions once income plus contributions pass $250k."""
    combined = Decimal(income) + Decimal(concessional)
    if combined <= DIVISION_293_THRESHOLD:
        return Division293Result(False, ZERO, ZERO)
    taxable = min(combined - DIVISION_293_THRESHOLD, Decimal(concessional))
    return Division293Result(True, _round_currency(taxable), _round_currency(taxable * DIVISION_293_RATE))


def calculate_listo(adjusted_taxable_income: Decimal, concessional: Decimal) -> Decimal:
    """Low income super tax offset, paid into the fund."""
    if Decimal(adjusted_taxable_income) > LISTO_INCOME_THRESHOLD:
        return ZERO
    return _round_currency(min(Decimal(concessional) * LISTO_RATE, LISTO_MAX))


def cap_warnings(
    contribution_type: str,
    amount: Decimal,
    concessional_to_date: Decimal,
    non_concessional_to_date: Decimal,
    financial_year: str,
) -> List[str]:
    """Warnings for a new contribution that pushes a running total past its cap."""
    caps = caps_for_year(financial_year)
    amount = Decimal(amount)
    warnings: List[str] = []

    if is_concessional(contribution_type):
        new_total = Decimal(concessional_to_date) + amount
        if new_total > caps.concessional:
            excess = _round_currency(new_total - caps.concessional)
            warnings.append(f"This contribution will exceed the concessional cap by ${excess:,.2f}")
    elif contribution_type in ("personal_non_deductible", "spouse"):
        new_total = Decimal(non_concessional_to_date) + amount
        if new_total > caps.non_concessional:
            excess = _round_currency(new_total - caps.non_concessional)
            warnings.append(f"This contribution will exceed the non-concessional cap by ${excess:,.2f}")

    return warnings


@dataclass
class SuperAlert:
    level: str  # error|warning|info
    message: str


@dataclass
class ContributionSummary:
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
    bring_forward: BringForwardEligibility
    by_type: Dict[str, Decimal] = field(default_factory=dict)
    alerts: List[SuperAlert] = field(default_factory=list)


def non_concessional_type(contribution_type: str) -> bool:
    return contribution_type in ("personal_non_deductible", "spouse")


def summarise_contributions(
    person: str,
    financial_year: str,
    contributions: Iterable,
    total_super_balance: Decimal = ZERO,
) -> ContributionSummary:
    """Totals, remaining cap room and alerts for one person's contributions.

    Government co-contributions and LISTO payments count towards neither cap.
    """
    caps = caps_for_year(financial_year)
    concessional = ZERO
    non_concessional = ZERO
    other = ZERO
    by_type: Dict[str, Decimal] = {}

    for contribution in contributions:
        amount = Decimal(contribution.amount)
        by_type[contribution.contribution_type] = by_type.get(contribution.contribution_type, ZERO) + amount
        if contribution.is_concessional:
            concessional += amount
        elif non_concessional_type(contribution.contribution_type):
            non_concessional += amount
        else:
            other += amount

    bring_forward = bring_forward_eligibility(total_super_balance, financial_year)
    concessional_remaining = caps.concessional - concessional
    non_concessional_remaining = caps.non_concessional - non_concessional
    utilisation = concessional / caps.concessional * 100

    alerts: List[SuperAlert] = []
    if concessional_remaining < 0:
        alerts.append(SuperAlert(
            "error",
            f"Concessional cap exceeded by ${_round_currency(-concessional_remaining):,.2f}. "
            "Excess contributions are taxed at your marginal rate.",
        ))
    elif concessional_remaining < CAP_WARNING_REMAINING:
        alerts.append(SuperAlert(
            "warning",
            f"Only ${_round_currency(concessional_remaining):,.2f} of concessional cap remaining",
        ))

    if non_concessional_remaining < 0:
        alerts.append(SuperAlert(
            "error",
            f"Non-concessional cap exceeded by ${_round_currency(-non_concessional_remaining):,.2f}. "
            "Excess is taxed at 47% unless withdrawn.",
        ))

    if not bring_forward.available:
        alerts.append(SuperAlert(
            "info",
            "Bring-forward arrangement not available (total super balance is $1.9M or more)",
        ))

    if utilisation < LOW_UTILISATION_PERCENT:
        alerts.append(SuperAlert(
            "info",
            f"${_round_currency(concessional_remaining):,.2f} of concessional cap unused. "
            "Consider salary sacrifice or a personal deductible contribution.",
        ))

    for alert in alerts:
        if alert.level != "info":
            logger.warning(f"Super {alert.level} for {person} {financial_year}: {alert.message}")

    return ContributionSummary(
        person=person,
        financial_year=financial_year,
        concessional_total=_round_currency(concessional),
        non_concessional_total=_round_currency(non_concessional),
        other_total=_round_currency(other),
        concessional_cap=caps.concessional,
        non_concessional_cap=caps.non_concessional,
        concessional_remaining=_round_currency(max(ZERO, concessional_remaining)),
        non_concessional_remaining=_round_currency(max(ZERO, non_concessional_remaining)),
        concessional_utilisation=_round_currency(utilisation),
        total_super_balance=_round_currency(Decimal(total_super_balance)),
        bring_forward=bring_forward,
        by_type={key: _round_currency(value) for key, value in by_type.items()},
        alerts=alerts,
    )
