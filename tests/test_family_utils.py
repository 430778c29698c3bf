# tests/test_family_utils.py - Ages, year levels, fee status, activity costs and FY helpers
from datetime import date, time
from decimal import Decimal
from types import SimpleNamespace

import pytest

from household.services.family_utils import (
    annual_activity_cost,
    calculate_age,
    estimate_year_level,
    fee_paid_value,
    fee_status,
    next_year_level,
    sort_members,
    weekly_activity_hours,
)
from household.services.financial_year import (
    days_until_eofy,
    financial_year_bounds,
    financial_year_for,
    financial_year_start,
)

TODAY = date(2025, 6, 1)


class TestAges:
    """Age and year level estimates."""

    def test_age_before_birthday(self):
        assert calculate_age(date(2015, 8, 1), TODAY) == 9

    def test_age_on_birthday(self):
        assert calculate_age(date(2015, 6, 1), TODAY) == 10

    def test_no_birth_date(self):
        assert calculate_age(None, TODAY) is None

    @pytest.mark.parametrize("age,level", [(5, "Prep"), (10, "Year 5"), (17, "Year 12"), (4, None), (18, None)])
    def test_year_level(self, age, level):
        birth = date(TODAY.year - age, 1, 1)
        assert estimate_year_level(birth, TODAY) == level

    def test_next_year_level(self):
        assert next_year_level("Prep") == "Year 1"
        assert next_year_level("Year 11") == "Year 12"
        assert next_year_level("Year 12") is None
        assert next_year_level("Kindy") is None

    def test_sort_members(self):
        members = [
            SimpleNamespace(name="Olivia", member_type="child", is_primary=False),
            SimpleNamespace(name="Shannon", member_type="adult", is_primary=False),
            SimpleNamespace(name="Grant", member_type="adult", is_primary=True),
            SimpleNamespace(name="Archie", member_type="child", is_primary=False),
        ]
        assert [m.name for m in sort_members(members)] == ["Grant", "Shannon", "Archie", "Olivia"]


class TestFeeStatus:
    """Status labels and paid values."""

    def fee(self, due_date=None, is_paid=False, amount="100", paid_amount=None):
        return SimpleNamespace(
            due_date=due_date,
            is_paid=is_paid,
            amount=Decimal(amount),
            paid_amount=Decimal(paid_amount) if paid_amount is not None else None,
        )

    def test_statuses(self):
        assert fee_status(self.fee(is_paid=True), TODAY) == "paid"
        assert fee_status(self.fee(), TODAY) == "no-date"
        assert fee_status(self.fee(date(2025, 5, 31)), TODAY) == "overdue"
        assert fee_status(self.fee(date(2025, 6, 8)), TODAY) == "due"
        assert fee_status(self.fee(date(2025, 6, 9)), TODAY) == "upcoming"

    def test_paid_value_prefers_paid_amount(self):
        assert fee_paid_value(self.fee(is_paid=True, paid_amount="90")) == Decimal("90")
        assert fee_paid_value(self.fee(is_paid=True)) == Decimal("100")
        assert fee_paid_value(self.fee()) == 0


class TestActivities:
    """Annual cost and weekly hours."""

    def test_weekly_cost_with_registration(self):
        activity = SimpleNamespace(
            cost_amount=Decimal("20"),
            cost_frequency=SimpleNamespace(per_year_multiplier=52),
            registration_fee=Decimal("50"),
            equipment_cost=None,
            uniform_cost=None,
            other_costs=None,
        )
        assert annual_activity_cost(activity) == Decimal("1090")

    def test_no_frequency_counts_once(self):
        activity = SimpleNamespace(
            cost_amount=Decimal("120"),
            cost_frequency=None,
            registration_fee=None,
            equipment_cost=Decimal("30"),
            uniform_cost=Decimal("45"),
            other_costs=None,
        )
        assert annual_activity_cost(activity) == Decimal("195")

    def test_weekly_hours(self):
        activity = SimpleNamespace(
            time_start=time(16, 0), time_end=time(17, 30), day_of_week=["Tuesday", "Thursday"]
        )
        assert weekly_activity_hours(activity) == 3.0

    def test_weekly_hours_without_times(self):
        activity = SimpleNamespace(time_start=None, time_end=None, day_of_week=["Saturday"])
        assert weekly_activity_hours(activity) == 0.0


class TestFinancialYear:
    """1 July to 30 June labels."""

    def test_label_for_date(self):
        assert financial_year_for(date(2024, 6, 30)) == "2023-24"
        assert financial_year_for(date(2024, 7, 1)) == "2024-25"
        assert financial_year_for(date(1999, 12, 1)) == "1999-00"

    def test_century_rollover_is_valid(self):
        assert financial_year_start("1999-00") == 1999

    @pytest.mark.parametrize("label", ["2024-26", "2024/25", "24-25", ""])
    def test_invalid_labels(self, label):
        with pytest.raises(ValueError):
            financial_year_start(label)

    def test_bounds(self):
        assert financial_year_bounds("2024-25") == (date(2024, 7, 1), date(2025, 6, 30))

    def test_days_until_eofy(self):
        assert days_until_eofy(TODAY) == 29
