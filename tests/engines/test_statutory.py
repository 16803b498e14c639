"""
Tests for the statutory contribution tables and withholding tax.

SSS, PhilHealth and Pag-IBIG are percentage-of-base with caps; Pag-IBIG's
cap depends on the base.  Withholding tax walks six brackets and is waived
for minimum-wage earners.
"""

from decimal import Decimal

import pytest

from payroll_config.schema import WITHHOLDING_BRACKETS
from payroll_engines import statutory


class TestContributions:

    def test_caps_apply_at_high_base(self):
        base = Decimal("40000")
        assert statutory.sss(base) == Decimal("1350.00")
        assert statutory.philhealth(base) == Decimal("1000.00")
        assert statutory.pagibig(base) == Decimal("200.00")

    def test_below_caps(self):
        base = Decimal("4000")
        assert statutory.sss(base) == Decimal("200.00")
        assert statutory.philhealth(base) == Decimal("100.00")
        assert statutory.pagibig(base) == Decimal("80.00")

    def test_philhealth_cap(self):
        assert statutory.philhealth(Decimal("150000")) == Decimal("2500.00")

    def test_sss_exactly_at_cap(self):
        assert statutory.sss(Decimal("27000")) == Decimal("1350.00")

    def test_philhealth_rounds_half_up(self):
        # 29731.25 * 0.025 = 743.28125
        assert statutory.philhealth(Decimal("29731.25")) == Decimal("743.28")

    @pytest.mark.parametrize(
        "base, cap",
        [
            (Decimal("0"), Decimal("100")),
            (Decimal("5000"), Decimal("100")),
            (Decimal("5000.01"), Decimal("200")),
            (Decimal("20000"), Decimal("200")),
        ],
    )
    def test_pagibig_cap_by_base(self, base, cap):
        assert statutory.pagibig_cap(base) == cap

    def test_pagibig_at_low_ceiling(self):
        assert statutory.pagibig(Decimal("5000")) == Decimal("100.00")

    def test_pagibig_just_above_low_ceiling(self):
        assert statutory.pagibig(Decimal("6000")) == Decimal("120.00")

    def test_negative_base_contributes_nothing(self):
        base = Decimal("-500")
        assert statutory.sss(base) == Decimal("0.00")
        assert statutory.philhealth(base) == Decimal("0.00")
        assert statutory.pagibig(base) == Decimal("0.00")

    def test_blank_base_is_zero(self):
        assert statutory.sss("") == Decimal("0.00")


class TestMinimumWage:

    def test_at_minimum_is_exempt(self):
        assert statutory.is_below_minimum_wage(Decimal("685"))

    def test_below_minimum_is_exempt(self):
        assert statutory.is_below_minimum_wage(Decimal("600"))

    def test_above_minimum_is_not_exempt(self):
        assert not statutory.is_below_minimum_wage(Decimal("685.01"))

    def test_missing_rate_is_exempt(self):
        assert statutory.is_below_minimum_wage(None)


class TestWithholdingTax:

    @pytest.mark.parametrize(
        "taxable, expected",
        [
            (Decimal("0"), Decimal("0.00")),
            (Decimal("15000"), Decimal("0.00")),
            (Decimal("20833"), Decimal("0.00")),
            (Decimal("25000"), Decimal("833.40")),
            (Decimal("27437.97"), Decimal("1320.99")),
            (Decimal("50000"), Decimal("6666.75")),
            (Decimal("100000"), Decimal("20833.23")),
            (Decimal("500000"), Decimal("147499.89")),
            (Decimal("1000000"), Decimal("317499.88")),
        ],
    )
    def test_brackets(self, taxable, expected):
        assert statutory.withholding_tax(taxable, False) == expected

    def test_minimum_wage_earner_pays_nothing(self):
        assert statutory.withholding_tax(Decimal("50000"), True) == Decimal("0.00")

    def test_negative_taxable_pays_nothing(self):
        assert statutory.withholding_tax(Decimal("-100"), False) == Decimal("0.00")

    def test_gap_between_brackets_is_floored(self):
        # Between bracket 3's ceiling (66666) and bracket 4's excess point (66667).
        assert statutory.withholding_tax(Decimal("66666.50"), False) == Decimal("10833.33")

    def test_bracket_handover_is_continuous(self):
        below = statutory.withholding_tax(Decimal("33332"), False)
        above = statutory.withholding_tax(Decimal("33333"), False)
        assert below == Decimal("2499.80")
        assert above == Decimal("2500.00")

    def test_find_bracket(self):
        assert statutory.find_bracket(Decimal("20833"), WITHHOLDING_BRACKETS) is WITHHOLDING_BRACKETS[0]
        assert statutory.find_bracket(Decimal("20833.01"), WITHHOLDING_BRACKETS) is WITHHOLDING_BRACKETS[1]
        assert statutory.find_bracket(Decimal("9999999"), WITHHOLDING_BRACKETS) is WITHHOLDING_BRACKETS[-1]


class TestComputedAmountRange:
    """Bases derived from the largest accepted form values still compute."""

    def test_contributions_capped_for_large_base(self):
        base = Decimal("5e22")
        assert statutory.sss(base) == Decimal("1350.00")
        assert statutory.philhealth(base) == Decimal("1000.00")
        assert statutory.pagibig(base) == Decimal("200.00")

    def test_tax_on_large_taxable(self):
        top = WITHHOLDING_BRACKETS[-1]
        taxable = Decimal("5e22")
        expected = (top.base_tax + top.rate * (taxable - top.excess_over)).quantize(Decimal("0.01"))
        assert statutory.withholding_tax(taxable, False) == expected

    @pytest.mark.parametrize("raw", ["1e30", Decimal("1e999999999"), 1e300])
    def test_out_of_range_amounts_are_zero(self, raw):
        assert statutory.sss(raw) == Decimal("0.00")
        assert statutory.withholding_tax(raw, False) == Decimal("0.00")
