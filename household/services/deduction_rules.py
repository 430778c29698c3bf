"""
Deduction evidence checks and the ATO shortcut calculators.

- Receipt thresholds per category; claims above them need a receipt on file.
- Fixed rate working-from-home method (67 cents per hour worked at home).
- Cents per kilometre car expense method (85 cents/km, 5,000 km cap).
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

WFH_FIXED_RATE_PER_HOUR = Decimal("0.67")
WFH_DEFAULT_WEEKS = 48

VEHICLE_RATE_PER_KM = Decimal("0.85")
VEHICLE_MAX_KM = 5000

LARGE_DEDUCTION_THRESHOLD = Decimal("1000")

# Claims in these categories above the amount need a receipt
RECEIPT_THRESHOLDS: Dict[str, Decimal] = {
    "clothing_laundry": Decimal("150"),
    "tools_equipment": Decimal("300"),
    "phone_internet": Decimal("0"),
    "self_education": Decimal("0"),
    "travel": Decimal("0"),
    "vehicle": Decimal("0"),
}


def _round_currency(amount: Decimal) -> Decimal:
    """Round to 2 decimal places for currency."""
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


@dataclass
class DeductionCheck:
    flagged: bool
    reasons: List[str] = field(default_factory=list)


def check_deduction(category: str, amount: Decimal, receipt_url: Optional[str]) -> DeductionCheck:
    """Work out whether a claim needs more evidence before it can be approved."""
    amount = Decimal(amount)
    has_receipt = bool(receipt_url)
    reasons: List[str] = []

    threshold = RECEIPT_THRESHOLDS.get(category)
    if threshold is not None and amount > threshold and not has_receipt:
        reasons.append(f"Receipt required for {category} claims over ${threshold}")

    if amount > LARGE_DEDUCTION_THRESHOLD and not has_receipt:
        reasons.append("Large deduction without receipt - keep documentation")

    if category == "work_from_home" and not has_receipt:
        reasons.append("WFH claims require timesheet/diary records")

    return DeductionCheck(flagged=bool(reasons), reasons=reasons)


@dataclass
class WFHCalculation:
    hours_per_week: Decimal
    weeks: int
    total_hours: Decimal
    rate: Decimal
    deduction: Decimal

    def details(self) -> Dict[str, Any]:
        return {
            "hours_per_week": float(self.hours_per_week),
            "weeks": self.weeks,
            "total_hours": float(self.total_hours),
            "rate": float(self.rate),
        }


def calculate_wfh(hours_per_week: Decimal, weeks: int = WFH_DEFAULT_WEEKS) -> WFHCalculation:
    hours_per_week = Decimal(hours_per_week)
    if hours_per_week < 0 or weeks < 0:
        raise ValueError("Hours and weeks must not be negative")
    total_hours = hours_per_week * weeks
    return WFHCalculation(
        hours_per_week=hours_per_week,
        weeks=weeks,
        total_hours=total_hours,
        rate=WFH_FIXED_RATE_PER_HOUR,
        deduction=_round_currency(total_hours * WFH_FIXED_RATE_PER_HOUR),
    )


def wfh_description(calc: WFHCalculation) -> str:
    return f"WFH: {calc.total_hours.normalize():f} hours @ ${calc.rate}/hr"


def wfh_period_notes(period_start: date, period_end: date) -> str:
    return f"Period: {period_start.isoformat()} to {period_end.isoformat()}"


@dataclass
class VehicleCalculation:
    kilometres: Decimal
    claimable_km: Decimal
    rate: Decimal
    deduction: Decimal
    capped: bool

    def details(self) -> Dict[str, Any]:
        return {
            "kilometres": float(self.kilometres),
            "claimable_km": float(self.claimable_km),
            "rate": float(self.rate),
            "capped": self.capped,
        }


def calculate_vehicle(kilometres: Decimal) -> VehicleCalculation:
    kilometres = Decimal(kilometres)
    if kilometres < 0:
        raise ValueError("Kilometres must not be negative")
    claimable = min(kilometres, Decimal(VEHICLE_MAX_KM))
    return VehicleCalculation(
        kilometres=kilometres,
        claimable_km=claimable,
        rate=VEHICLE_RATE_PER_KM,
        deduction=_round_currency(claimable * VEHICLE_RATE_PER_KM),
        capped=kilometres > VEHICLE_MAX_KM,
    )


def vehicle_description(calc: VehicleCalculation) -> str:
    return f"Vehicle: {calc.claimable_km.normalize():f} km @ ${calc.rate}/km"
