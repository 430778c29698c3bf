# household/services/term_dates.py - Default school term layouts and term lookups
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

# term_type -> [(term_number, start_week, end_week, fees_due_weeks_before)]
DEFAULT_TERM_STRUCTURES: Dict[str, List[Tuple[int, int, int, int]]] = {
    "term": [(1, 4, 14, 2), (2, 16, 26, 2), (3, 28, 38, 2), (4, 40, 50, 2)],
    "semester": [(1, 4, 26, 2), (2, 28, 50, 2)],
    "trimester": [(1, 4, 17, 2), (2, 19, 33, 2), (3, 35, 50, 2)],
    "quarter": [(1, 1, 13, 1), (2, 14, 26, 1), (3, 27, 39, 1), (4, 40, 52, 1)],
}


@dataclass
class TermTemplate:
    term_type: str
    term_number: int
    name: str
    start_date: date
    end_date: date
    fees_due_date: date


def week_start(year: int, week: int) -> date:
    """Week 1 starts on 1 January; each later week starts seven days on."""
    return date(year, 1, 1) + timedelta(days=(week - 1) * 7)


def generate_default_terms(year: int, term_type: str = "term") -> List[TermTemplate]:
    if term_type not in DEFAULT_TERM_STRUCTURES:
        raise ValueError(f"Unknown term type '{term_type}'")

    label = term_type.capitalize()
    return [
        TermTemplate(
            term_type=term_type,
            term_number=number,
            name=f"{label} {number}",
            start_date=week_start(year, start_week),
            end_date=week_start(year, end_week),
            fees_due_date=week_start(year, start_week - due_before),
        )
        for number, start_week, end_week, due_before in DEFAULT_TERM_STRUCTURES[term_type]
    ]


def get_current_term(terms: Iterable, today: Optional[date] = None):
    """The term whose date range contains today, if any."""
    today = today or date.today()
    for term in terms:
        if term.start_date <= today <= term.end_date:
            return term
    return None


def get_next_term(terms: Iterable, today: Optional[date] = None):
    """The earliest term starting after today."""
    today = today or date.today()
    upcoming = [term for term in terms if term.start_date > today]
    return min(upcoming, key=lambda term: term.start_date, default=None)


def days_until_fees_due(term, today: Optional[date] = None) -> Optional[int]:
    if term is None or term.fees_due_date is None:
        return None
    return (term.fees_due_date - (today or date.today())).days
