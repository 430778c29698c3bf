"""
Australian individual income tax estimates.

Covers resident marginal rates, the Medicare levy, the Medicare levy
surcharge and HECS-HELP compulsory repayments. Franking credits are grossed
up into assessable income and then offset against the tax payable.

Rates are published per financial year; years after the latest table use the
latest table.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Tuple

from household.services.financial_year import financial_year_start

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _round_currency(amount: Decimal) -> Decimal:
    """Round to 2 decimal places for currency."""
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class TaxBracket:
    lower: Decimal           # first dollar taxed in this bracket
    upper: Optional[Decimal] # None for the top bracket
    rate: Decimal
    base_tax: Decimal        # tax on all income below `lower`

    @property
    def label(self) -> str:
        rate_text = f"{(self.rate * 100).normalize():f}%"
        if self.upper is None:
            return f"${self.lower:,.0f}+ ({rate_text})"
        return f"${self.lower:,.0f} - ${self.upper:,.0f} ({rate_text})"


def _brackets(rows: List[Tuple[int, Optional[int], str, int]]) -> List[TaxBracket]:
    return [
        TaxBracket(Decimal(lower), Decimal(upper) if upper is not None else None, Decimal(rate), Decimal(base))
        for lower, upper, rate, base in rows
    ]


# Keyed by the calendar year the financial year starts in
TAX_BRACKETS: Dict[int, List[TaxBracket]] = {
    2023: _brackets([
        (0, 18200, "0", 0),
        (18201, 45000, "0.19", 0),
        (45001, 120000, "0.325", 5092),
        (120001, 180000, "0.37", 29467),
        (180001, None, "0.45", 51667),
    ]),
    2024: _brackets([
        (0, 18200, "0", 0),
        (18201, 45000, "0.16", 0),
        (45001, 135000, "0.30", 4288),
        (135001, 190000, "0.37", 31288),
        (190001, None, "0.45", 51638),
    ]),
}

MEDICARE_LEVY_RATE = Decimal("0.02")
MEDICARE_LOW_INCOME_THRESHOLD = Decimal("26000")
MEDICARE_PHASE_IN_UPPER = Decimal("32500")
MEDICARE_PHASE_IN_RATE = Decimal("0.10")

# (income upper bound, surcharge rate); applies only without private hospital cover
MEDICARE_SURCHARGE_TIERS: List[Tuple[Optional[Decimal], Decimal]] = [
    (Decimal("97000"), Decimal("0")),
    (Decimal("130000"), Decimal("0.01")),
    (Decimal("173000"), Decimal("0.0125")),
    (None, Decimal("0.015")),
]

# (repayment income upper bound, rate of total income)
HECS_REPAYMENT_TIERS: List[Tuple[Optional[Decimal], Decimal]] = [
    (Decimal(upper) if upper else None, Decimal(rate))
    for upper, rate in [
        (54435, "0"), (62850, "0.01"), (66620, "0.02"), (70618, "0.025"),
        (74855, "0.03"), (79346, "0.035"), (84107, "0.04"), (89154, "0.045"),
        (94503, "0.05"), (100174, "0.055"), (106185, "0.06"), (112556, "0.065"),
        (119309, "0.07"), (126467, "0.075"), (134056, "0.08"), (142100, "0.085"),
        (150626, "0.09"), (159663, "0.095"), (None, "0.10"),
    ]
]


@dataclass
class TaxCalculationResult:
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


def brackets_for_year(financial_year: Optional[str] = None) -> List[TaxBracket]:
    if financial_year is None:
        return TAX_BRACKETS[max(TAX_BRACKETS)]
    start = financial_year_start(financial_year)
    eligible = [year for year in TAX_BRACKETS if year <= start]
    return TAX_BRACKETS[max(eligible) if eligible else min(TAX_BRACKETS)]


def find_bracket(income: Decimal, brackets: List[TaxBracket]) -> TaxBracket:
    for bracket in brackets:
        if bracket.upper is None or income <= bracket.upper:
            return bracket
    return brackets[-1]


def calculate_income_tax(income: Decimal, brackets: Optional[List[TaxBracket]] = None) -> Decimal:
    brackets = brackets or brackets_for_year()
    if income <= 0:
        return ZERO
    bracket = find_bracket(income, brackets)
    return bracket.base_tax + (income - bracket.lower + 1) * bracket.rate


def calculate_medicare_levy(income: Decimal) -> Decimal:
    if income <= MEDICARE_LOW_INCOME_THRESHOLD:
        return ZERO
    if income <= MEDICARE_PHASE_IN_UPPER:
        return (income - MEDICARE_LOW_INCOME_THRESHOLD) * MEDICARE_PHASE_IN_RATE
    return income * MEDICARE_LEVY_RATE


def calculate_medicare_levy_surcharge(income: Decimal, has_private_health: bool) -> Decimal:
    if has_private_health:
        return ZERO
    for upper, rate in MEDICARE_SURCHARGE_TIERS:
        if upper is None or income <= upper:
            return income * rate
    return ZERO


def calculate_hecs_repayment(income: Decimal) -> Decimal:
    for upper, rate in HECS_REPAYMENT_TIERS:
        if upper is None or income <= upper:
            return income * rate
    return ZERO


def calculate_tax(
    gross_income: Decimal,
    deductions: Decimal = ZERO,
    franking_credits: Decimal = ZERO,
    has_hecs_debt: bool = False,
    has_private_health: bool = True,
    financial_year: Optional[str] = None,
) -> TaxCalculationResult:
    """Estimate tax for one person.

    Franking credits are added to taxable income before every component is
    worked out, then credited against the total. Net payable never goes
    below zero.
    """
    gross_income = Decimal(gross_income)
    deductions = Decimal(deductions)
    franking_credits = Decimal(franking_credits)

    brackets = brackets_for_year(financial_year)
    taxable_income = max(ZERO, gross_income - deductions)
    assessable = taxable_income + franking_credits

    income_tax = calculate_income_tax(assessable, brackets)
    medicare_levy = calculate_medicare_levy(assessable)
    surcharge = calculate_medicare_levy_surcharge(assessable, has_private_health)
    hecs = calculate_hecs_repayment(assessable) if has_hecs_debt else ZERO

    total_tax = income_tax + medicare_levy + surcharge + hecs
    net_tax_payable = max(ZERO, total_tax - franking_credits)
    effective_rate = (net_tax_payable / gross_income * 100) if gross_income > 0 else ZERO

    bracket = find_bracket(assessable, brackets)

    return TaxCalculationResult(
        gross_income=_round_currency(gross_income),
        deductions=_round_currency(deductions),
        taxable_income=_round_currency(taxable_income),
        franking_credits=_round_currency(franking_credits),
        income_tax=_round_currency(income_tax),
        medicare_levy=_round_currency(medicare_levy),
        medicare_levy_surcharge=_round_currency(surcharge),
        hecs_repayment=_round_currency(hecs),
        total_tax=_round_currency(total_tax),
        net_tax_payable=_round_currency(net_tax_payable),
        effective_rate=_round_currency(effective_rate),
        marginal_rate=_round_currency(bracket.rate * 100),
        tax_bracket=bracket.label,
    )
