# household/services/family_utils.py - Ages, year levels, fee status and activity costs
from datetime import date, datetime, time
from decimal import Decimal
from typing import Iterable, List, Optional

ZERO = Decimal("0")

YEAR_LEVELS = ["Prep"] + [f"Year {n}" for n in range(1, 13)]

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

FEE_DUE_SOON_DAYS = 7


def calculate_age(date_of_birth: Optional[date], today: Optional[date] = None) -> Optional[int]:
    if date_of_birth is None:
        return None
    today = today or date.today()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def estimate_year_level(date_of_birth: Optional[date], today: Optional[date] = None) -> Optional[str]:
    """Rough Australian year level from age: 5 is Prep, 6 is Year 1 ... 17 is Year 12."""
    age = calculate_age(date_of_birth, today)
    if age is None or age < 5 or age > 17:
        return None
    return YEAR_LEVELS[age - 5]


def next_year_level(year_level: Optional[str]) -> Optional[str]:
    if year_level not in YEAR_LEVELS:
        return None
    index = YEAR_LEVELS.index(year_level)
    return YEAR_LEVELS[index + 1] if index + 1 < len(YEAR_LEVELS) else None


def sort_members(members: Iterable) -> List:
    """Primary member first, then adults, then alphabetical."""
    return sorted(
        members,
        key=lambda m: (not m.is_primary, m.member_type != "adult", (m.name or "").lower()),
    )


def fee_status(fee, today: Optional[date] = None) -> str:
    """One of paid, no-date, overdue, due (within a week) or upcoming."""
    if fee.is_paid:
        return "paid"
    if fee.due_date is None:
        return "no-date"
    days = (fee.due_date - (today or date.today())).days
    if days < 0:
        return "overdue"
    if days <= FEE_DUE_SOON_DAYS:
        return "due"
    return "upcoming"


def fee_paid_value(fee) -> Decimal:
    """What a paid fee contributes to paid totals; unpaid fees contribute nothing."""
    if not fee.is_paid:
        return ZERO
    return Decimal(fee.paid_amount if fee.paid_amount is not None else fee.amount)


def _money(value) -> Decimal:
    return Decimal(value) if value is not None else ZERO


def annual_activity_cost(activity) -> Decimal:
    """Recurring cost annualised by its frequency plus one-off costs.

    Frequencies without a multiplier (per session) and activities without a
    frequency count the recurring amount once.
    """
    multiplier = Decimal(1)
    frequency = activity.cost_frequency
    if frequency is not None and frequency.per_year_multiplier is not None:
        multiplier = Decimal(frequency.per_year_multiplier)

    return (
        _money(activity.cost_amount) * multiplier
        + _money(activity.registration_fee)
        + _money(activity.equipment_cost)
        + _money(activity.uniform_cost)
        + _money(activity.other_costs)
    )


def weekly_activity_hours(activity) -> float:
    if activity.time_start is None or activity.time_end is None:
        return 0.0
    start = datetime.combine(date.min, activity.time_start)
    end = datetime.combine(date.min, activity.time_end)
    hours = (end - start).total_seconds() / 3600
    days = len(activity.day_of_week or [])
    return max(0.0, hours * days)


def sort_key_for_time(value: Optional[time]) -> time:
    return value or time.max
