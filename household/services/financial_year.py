# household/services/financial_year.py - Australian financial year helpers (1 July - 30 June)
import re
from datetime import date
from typing import Optional, Tuple

FY_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def financial_year_for(value: date) -> str:
    """Return the FY label ("2024-25") that contains the given date."""
    start_year = value.year if value.month >= 7 else value.year - 1
    return f"{start_year}-{str(start_year + 1)[-2:]}"


def current_financial_year(today: Optional[date] = None) -> str:
    return financial_year_for(today or date.today())


def financial_year_start(label: str) -> int:
    """Parse an FY label and return the calendar year it starts in.

    Raises ValueError for anything that is not a consecutive "YYYY-YY" pair.
    """
    match = FY_PATTERN.match(label or "")
    if not match:
        raise ValueError(f"Invalid financial year '{label}', expected format YYYY-YY")
    start_year = int(match.group(1))
    if int(match.group(2)) != (start_year + 1) % 100:
        raise ValueError(f"Invalid financial year '{label}', years must be consecutive")
    return start_year


def financial_year_bounds(label: str) -> Tuple[date, date]:
    start_year = financial_year_start(label)
    return date(start_year, 7, 1), date(start_year + 1, 6, 30)


def days_until_eofy(today: Optional[date] = None) -> int:
    """Days remaining until 30 June of the current financial year."""
    today = today or date.today()
    _, end = financial_year_bounds(financial_year_for(today))
    return (end - today).days
