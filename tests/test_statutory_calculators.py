"""
CreativeGroups Payroll - Statutory Calculator Tests

Unit tests for PF and ESI figures.
"""

from decimal import Decimal

import pytest

from app.services.statutory_calculators import (
    PF_WAGE_CEILING,
    ESI_WAGE_CEILING,
    calculate_pf_contribution,
    compute_ncp,
    esi_wages,
    round_rupees,
)


class TestRounding:
    """Whole-rupee rounding is half-up."""

    @pytest.mark.parametrize("amount,expected", [
        ("4.5", 5),
        ("4.49", 4),
        ("1249.5", 1250),
        ("0", 0),
    ])
    def test_round_half_up(self, amount, expected):
        assert round_rupees(Decimal(amount)) == expected


class TestPFCalculation:
    """Test PF contribution figures."""

    def test_above_ceiling(self):
        pf = calculate_pf_contribution(Decimal("20000"))

        assert pf.epf_wages == Decimal("20000")
        assert pf.eps_wages == PF_WAGE_CEILING
        assert pf.edli_wages == PF_WAGE_CEILING
        assert pf.employee_share == 2400
        assert pf.eps_contribution == 1250
        assert pf.employer_share == 1150
        assert pf.refund == 0

    def test_below_ceiling_with_half_rupee(self):
        pf = calculate_pf_contribution(Decimal("12537.50"))

        assert pf.eps_wages == Decimal("12537.50")
        assert pf.employee_share == 1505
        assert pf.eps_contribution == 1044
        assert pf.employer_share == 461

    def test_small_amount_rounds_half_up(self):
        pf = calculate_pf_contribution(Decimal("37.50"))

        assert pf.employee_share == 5
        assert pf.eps_contribution == 3
        assert pf.employer_share == 2

    def test_employer_share_is_remainder(self):
        for basic in ("0", "9999.99", "15000", "45000"):
            pf = calculate_pf_contribution(Decimal(basic))
            assert pf.employee_share == pf.eps_contribution + pf.employer_share


class TestESIWages:
    """Test ESI wage capping."""

    def test_below_ceiling(self):
        assert esi_wages(Decimal("18000")) == Decimal("18000")

    def test_above_ceiling(self):
        assert esi_wages(Decimal("25000")) == ESI_WAGE_CEILING


class TestNCP:
    """Test non contributing period."""

    def test_absent_days(self):
        assert compute_ncp(31, Decimal("26")) == Decimal("5")

    def test_fractional_days(self):
        assert compute_ncp(30, Decimal("27.5")) == Decimal("2.5")

    def test_over_reported_attendance_clamps_to_zero(self):
        assert compute_ncp(30, Decimal("31")) == Decimal("0")
