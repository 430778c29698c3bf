# tests/test_term_dates.py - Default term layouts and current/next term lookups
from datetime import date
from types import SimpleNamespace

import pytest

from household.services.term_dates import (
    days_until_fees_due,
    generate_default_terms,
    get_current_term,
    get_next_term,
    week_start,
)


def term(name, start, end, fees_due=None):
    return SimpleNamespace(name=name, start_date=start, end_date=end, fees_due_date=fees_due)


class TestDefaultTerms:
    """Week based templates."""

    def test_week_start(self):
        assert week_start(2025, 1) == date(2025, 1, 1)
        assert week_start(2025, 4) == date(2025, 1, 22)

    def test_four_terms(self):
        terms = generate_default_terms(2025)
        assert [t.name for t in terms] == ["Term 1", "Term 2", "Term 3", "Term 4"]
        assert terms[0].start_date == date(2025, 1, 22)
        assert terms[0].end_date == date(2025, 4, 2)
        assert terms[0].fees_due_date == date(2025, 1, 8)

    def test_semesters(self):
        terms = generate_default_terms(2025, "semester")
        assert [t.term_number for t in terms] == [1, 2]
        assert terms[1].name == "Semester 2"

    def test_quarter_fees_fall_in_previous_year(self):
        first = generate_default_terms(2025, "quarter")[0]
        assert first.start_date == date(2025, 1, 1)
        assert first.fees_due_date == date(2024, 12, 25)

    def test_unknown_term_type(self):
        with pytest.raises(ValueError):
            generate_default_terms(2025, "fortnight")


class TestTermLookups:
    """Current and next terms."""

    terms = [
        term("Term 1", date(2025, 1, 28), date(2025, 4, 4), date(2025, 1, 14)),
        term("Term 2", date(2025, 4, 22), date(2025, 6, 27), date(2025, 4, 8)),
    ]

    def test_current_term(self):
        assert get_current_term(self.terms, date(2025, 3, 1)).name == "Term 1"

    def test_end_date_is_inclusive(self):
        assert get_current_term(self.terms, date(2025, 4, 4)).name == "Term 1"

    def test_holidays_have_no_current_term(self):
        assert get_current_term(self.terms, date(2025, 4, 10)) is None

    def test_next_term(self):
        assert get_next_term(self.terms, date(2025, 4, 10)).name == "Term 2"
        assert get_next_term(self.terms, date(2025, 7, 1)) is None

    def test_days_until_fees_due(self):
        assert days_until_fees_due(self.terms[1], date(2025, 4, 1)) == 7
        assert days_until_fees_due(None, date(2025, 4, 1)) is None
