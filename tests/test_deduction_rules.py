# tests/test_deduction_rules.py - Evidence flags and the WFH/vehicle calculators
from datetime import date
from decimal import Decimal

import pytest

from household.services.deduction_rules import (
    calculate_vehicle,
    calculate_wfh,
    check_deduction,
    vehicle_description,
    wfh_description,
    wfh_period_notes,
)


class TestCheckDeduction:
    """Receipt and documentation rules."""

    def test_below_threshold_is_not_flagged(self):
        check = check_deduction("clothing_laundry", Decimal("120"), None)
        assert not check.flagged
        assert check.reasons == []

    def test_over_threshold_without_receipt(self):
        check = check_deduction("clothing_laundry", Decimal("200"), None)
        assert check.flagged
        assert check.reasons == ["Receipt required for clothing_laundry claims over $150"]

    def test_zero_threshold_category(self):
        check = check_deduction("phone_internet", Decimal("50"), None)
        assert check.reasons == ["Receipt required for phone_internet claims over $0"]

    def test_large_claim_without_receipt(self):
        check = check_deduction("donations", Decimal("1500"), None)
        assert check.reasons == ["Large deduction without receipt - keep documentation"]

    def test_large_vehicle_claim_gets_both_reasons(self):
        check = check_deduction("vehicle", Decimal("1500"), None)
        assert len(check.reasons) == 2

    def test_wfh_needs_records(self):
        check = check_deduction("work_from_home", Decimal("300"), None)
        assert check.reasons == ["WFH claims require timesheet/diary records"]

    def test_receipt_clears_all_flags(self):
        check = check_deduction("vehicle", Decimal("5000"), "https://example.com/receipt.pdf")
        assert not check.flagged


class TestWfhCalculator:
    """Fixed rate method."""

    def test_default_weeks(self):
        calc = calculate_wfh(Decimal("10"))
        assert calc.weeks == 48
        assert calc.total_hours == Decimal("480")
        assert calc.deduction == Decimal("321.60")

    def test_description_and_details(self):
        calc = calculate_wfh(Decimal("10"), 48)
        assert wfh_description(calc) == "WFH: 480 hours @ $0.67/hr"
        assert calc.details() == {"hours_per_week": 10.0, "weeks": 48, "total_hours": 480.0, "rate": 0.67}

    def test_fractional_hours_round_to_cents(self):
        calc = calculate_wfh(Decimal("7.5"), 46)
        assert calc.total_hours == Decimal("345.0")
        assert calc.deduction == Decimal("231.15")

    def test_negative_hours_rejected(self):
        with pytest.raises(ValueError):
            calculate_wfh(Decimal("-1"))

    def test_period_notes(self):
        assert wfh_period_notes(date(2024, 7, 1), date(2025, 6, 30)) == "Period: 2024-07-01 to 2025-06-30"


class TestVehicleCalculator:
    """Cents per kilometre method."""

    def test_under_cap(self):
        calc = calculate_vehicle(Decimal("1000"))
        assert calc.deduction == Decimal("850.00")
        assert not calc.capped

    def test_capped_at_5000_km(self):
        calc = calculate_vehicle(Decimal("6000"))
        assert calc.claimable_km == Decimal("5000")
        assert calc.deduction == Decimal("4250.00")
        assert calc.capped
        assert vehicle_description(calc) == "Vehicle: 5000 km @ $0.85/km"
