# tests/test_super_rules.py - Contribution caps, SG rates and concessions
from decimal import Decimal
from types import SimpleNamespace

import pytest

from household.services.super_rules import (
    bring_forward_eligibility,
    calculate_division_293,
    calculate_listo,
    calculate_sg,
    cap_warnings,
    caps_for_year,
    is_concessional,
    sg_rate_for_year,
    summarise_contributions,
)


def contribution(contribution_type, amount):
    return SimpleNamespace(
        contribution_type=contribution_type,
        amount=Decimal(amount),
        is_concessional=is_concessional(contribution_type),
    )


class TestCapsAndRates:
    """Yearly cap and SG tables."""

    def test_caps_from_2024(self):
        caps = caps_for_year("2024-25")
        assert caps.concessional == Decimal("30000")
        assert caps.non_concessional == Decimal("120000")

    def test_caps_before_2024(self):
        assert caps_for_year("2023-24").concessional == Decimal("27500")

    @pytest.mark.parametrize("financial_year,rate", [
        ("2025-26", Decimal("0.12")),
        ("2024-25", Decimal("0.115")),
        ("2023-24", Decimal("0.11")),
        ("2020-21", Decimal("0.10")),
    ])
    def test_sg_rates(self, financial_year, rate):
        assert sg_rate_for_year(financial_year) == rate

    def test_calculate_sg(self):
        assert calculate_sg(Decimal("100000"), "2024-25") == Decimal("11500.00")

    def test_concessional_types(self):
        assert is_concessional("employer_sg")
        assert is_concessional("salary_sacrifice")
        assert not is_concessional("spouse")
        assert not is_concessional("government_co_contribution")


class TestBringForward:
    """Total super balance thresholds."""

    def test_unavailable_over_threshold(self):
        result = bring_forward_eligibility(Decimal("2000000"), "2024-25")
        assert (result.available, result.years, result.max_contribution) == (False, 0, Decimal("120000"))

    def test_two_year_window(self):
        result = bring_forward_eligibility(Decimal("1700000"), "2024-25")
        assert (result.available, result.years, result.max_contribution) == (True, 2, Decimal("240000"))

    def test_three_year_window(self):
        result = bring_forward_eligibility(Decimal("500000"), "2024-25")
        assert (result.available, result.years, result.max_contribution) == (True, 3, Decimal("360000"))


class TestConcessions:
    """Division 293 and LISTO."""

    def test_division_293_below_threshold(self):
        result = calculate_division_293(Decimal("200000"), Decimal("20000"))
        assert not result.applies
        assert result.tax == 0

    def test_division_293_on_excess_only(self):
        result = calculate_division_293(Decimal("240000"), Decimal("20000"))
        assert result.applies
        assert result.taxable_amount == Decimal("10000.00")
        assert result.tax == Decimal("1500.00")

    def test_division_293_limited_to_contributions(self):
        result = calculate_division_293(Decimal("400000"), Decimal("20000"))
        assert result.taxable_amount == Decimal("20000.00")
        assert result.tax == Decimal("3000.00")

    def test_listo(self):
        assert calculate_listo(Decimal("30000"), Decimal("2000")) == Decimal("300.00")

    def test_listo_capped(self):
        assert calculate_listo(Decimal("30000"), Decimal("5000")) == Decimal("500.00")

    def test_listo_over_income_threshold(self):
        assert calculate_listo(Decimal("40000"), Decimal("2000")) == 0


class TestCapWarnings:
    """Warnings for a contribution that would cross a cap."""

    def test_concessional_excess(self):
        warnings = cap_warnings("salary_sacrifice", Decimal("5000"), Decimal("28000"), Decimal("0"), "2024-25")
        assert warnings == ["This contribution will exceed the concessional cap by $3,000.00"]

    def test_non_concessional_excess(self):
        warnings = cap_warnings("spouse", Decimal("20000"), Decimal("0"), Decimal("110000"), "2024-25")
        assert warnings == ["This contribution will exceed the non-concessional cap by $10,000.00"]

    def test_within_cap(self):
        assert cap_warnings("employer_sg", Decimal("1000"), Decimal("5000"), Decimal("0"), "2024-25") == []

    def test_other_types_never_warn(self):
        assert cap_warnings("government_co_contribution", Decimal("500"), Decimal("30000"), Decimal("120000"), "2024-25") == []


class TestSummariseContributions:
    """Per person totals and alerts."""

    def test_totals_by_category(self):
        summary = summarise_contributions("grant", "2024-25", [
            contribution("employer_sg", "11500"),
            contribution("salary_sacrifice", "5000"),
            contribution("personal_non_deductible", "10000"),
            contribution("government_co_contribution", "500"),
        ])
        assert summary.concessional_total == Decimal("16500.00")
        assert summary.non_concessional_total == Decimal("10000.00")
        assert summary.other_total == Decimal("500.00")
        assert summary.concessional_remaining == Decimal("13500.00")
        assert summary.concessional_utilisation == Decimal("55.00")
        assert summary.by_type["employer_sg"] == Decimal("11500.00")
        assert summary.alerts == []

    def test_nearly_full_cap_warns(self):
        summary = summarise_contributions("grant", "2024-25", [contribution("employer_sg", "27000")])
        assert [alert.level for alert in summary.alerts] == ["warning"]
        assert summary.alerts[0].message == "Only $3,000.00 of concessional cap remaining"

    def test_exceeded_cap_is_an_error(self):
        summary = summarise_contributions("grant", "2024-25", [contribution("salary_sacrifice", "32000")])
        assert summary.alerts[0].level == "error"
        assert summary.alerts[0].message.startswith("Concessional cap exceeded by $2,000.00")

    def test_remaining_never_negative(self):
        summary = summarise_contributions("grant", "2024-25", [
            contribution("salary_sacrifice", "35000"),
            contribution("personal_non_deductible", "130000"),
        ])
        assert summary.concessional_remaining == Decimal("0.00")
        assert summary.non_concessional_remaining == Decimal("0.00")
        assert [alert.level for alert in summary.alerts] == ["error", "error"]
        assert summary.alerts[0].message.startswith("Concessional cap exceeded by $5,000.00")
        assert summary.alerts[1].message.startswith("Non-concessional cap exceeded by $10,000.00")

    def test_low_utilisation_and_large_balance_are_info(self):
        summary = summarise_contributions(
            "shannon", "2024-25", [], total_super_balance=Decimal("2000000")
        )
        assert [alert.level for alert in summary.alerts] == ["info", "info"]
        assert not summary.bring_forward.available
