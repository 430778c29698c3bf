# tests/test_tax_calculator.py - Income tax, Medicare and HECS estimates
from decimal import Decimal

import pytest

from household.services.tax_calculator import (
    brackets_for_year,
    calculate_hecs_repayment,
    calculate_income_tax,
    calculate_medicare_levy,
    calculate_medicare_levy_surcharge,
    calculate_tax,
    find_bracket,
)


class TestIncomeTax:
    """Marginal rate tables."""

    def test_tax_free_threshold(self):
        assert calculate_income_tax(Decimal("18200"), brackets_for_year("2024-25")) == 0

    def test_middle_bracket_2024(self):
        assert calculate_income_tax(Decimal("100000"), brackets_for_year("2024-25")) == Decimal("20788")

    def test_middle_bracket_2023_uses_older_table(self):
        assert calculate_income_tax(Decimal("100000"), brackets_for_year("2023-24")) == Decimal("22967")

    def test_later_years_use_latest_table(self):
        assert brackets_for_year("2027-28") == brackets_for_year("2024-25")

    def test_zero_income(self):
        assert calculate_income_tax(Decimal("0")) == 0

    @pytest.mark.parametrize("income,label", [
        (Decimal("10000"), "$0 - $18,200 (0%)"),
        (Decimal("60000"), "$45,001 - $135,000 (30%)"),
        (Decimal("250000"), "$190,001+ (45%)"),
    ])
    def test_bracket_labels(self, income, label):
        assert find_bracket(income, brackets_for_year("2024-25")).label == label

    def test_bracket_label_with_fractional_rate(self):
        bracket = find_bracket(Decimal("60000"), brackets_for_year("2023-24"))
        assert bracket.label == "$45,001 - $120,000 (32.5%)"


class TestMedicare:
    """Medicare levy and surcharge."""

    def test_levy_below_threshold(self):
        assert calculate_medicare_levy(Decimal("26000")) == 0

    def test_levy_phase_in(self):
        assert calculate_medicare_levy(Decimal("30000")) == Decimal("400")

    def test_levy_full_rate(self):
        assert calculate_medicare_levy(Decimal("100000")) == Decimal("2000")

    def test_surcharge_skipped_with_private_health(self):
        assert calculate_medicare_levy_surcharge(Decimal("150000"), has_private_health=True) == 0

    @pytest.mark.parametrize("income,expected", [
        (Decimal("90000"), Decimal("0")),
        (Decimal("120000"), Decimal("1200")),
        (Decimal("150000"), Decimal("1875")),
        (Decimal("200000"), Decimal("3000")),
    ])
    def test_surcharge_tiers(self, income, expected):
        assert calculate_medicare_levy_surcharge(income, has_private_health=False) == expected


class TestHecs:
    """HECS-HELP repayment tiers."""

    def test_below_threshold(self):
        assert calculate_hecs_repayment(Decimal("54435")) == 0

    def test_first_tier(self):
        assert calculate_hecs_repayment(Decimal("60000")) == Decimal("600")

    def test_top_tier(self):
        assert calculate_hecs_repayment(Decimal("200000")) == Decimal("20000")


class TestCalculateTax:
    """Full estimate."""

    def test_salary_only(self):
        result = calculate_tax(Decimal("100000"), financial_year="2024-25")
        assert result.taxable_income == Decimal("100000.00")
        assert result.income_tax == Decimal("20788.00")
        assert result.medicare_levy == Decimal("2000.00")
        assert result.total_tax == Decimal("22788.00")
        assert result.net_tax_payable == Decimal("22788.00")
        assert result.effective_rate == Decimal("22.79")
        assert result.marginal_rate == Decimal("30.00")
        assert result.tax_bracket == "$45,001 - $135,000 (30%)"

    def test_deductions_reduce_taxable_income(self):
        result = calculate_tax(Decimal("100000"), deductions=Decimal("10000"), financial_year="2024-25")
        assert result.taxable_income == Decimal("90000.00")
        assert result.income_tax == Decimal("17788.00")

    def test_deductions_never_make_taxable_income_negative(self):
        result = calculate_tax(Decimal("5000"), deductions=Decimal("8000"))
        assert result.taxable_income == Decimal("0.00")
        assert result.net_tax_payable == Decimal("0.00")

    def test_franking_credits_offset_tax_but_not_below_zero(self):
        result = calculate_tax(Decimal("10000"), franking_credits=Decimal("3000"))
        assert result.income_tax == Decimal("0.00")
        assert result.net_tax_payable == Decimal("0.00")

    def test_franking_credits_are_grossed_up(self):
        result = calculate_tax(Decimal("97000"), franking_credits=Decimal("3000"), financial_year="2024-25")
        # assessed on 100,000 then the credit comes off
        assert result.total_tax == Decimal("22788.00")
        assert result.net_tax_payable == Decimal("19788.00")

    def test_hecs_and_surcharge_included(self):
        result = calculate_tax(
            Decimal("120000"),
            has_hecs_debt=True,
            has_private_health=False,
            financial_year="2024-25",
        )
        assert result.hecs_repayment == Decimal("9000.00")
        assert result.medicare_levy_surcharge == Decimal("1200.00")
        assert result.total_tax == result.income_tax + result.medicare_levy + Decimal("10200.00")

    def test_zero_income_has_zero_effective_rate(self):
        result = calculate_tax(Decimal("0"))
        assert result.effective_rate == Decimal("0.00")
