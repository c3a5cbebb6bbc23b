"""Tests for the progressive bracket tax."""

from decimal import Decimal

import pytest

from app.core.exceptions import InvalidTaxInputError
from app.services.tax_brackets import (
    NON_RESIDENT_BRACKETS,
    calculate_bracket_breakdown,
    calculate_bracket_tax,
)


class TestBracketTax:
    def test_zero_income_owes_nothing(self) -> None:
        assert calculate_bracket_tax(Decimal("0")) == Decimal("0")

    def test_top_of_first_bracket(self) -> None:
        assert calculate_bracket_tax(Decimal("11600")) == Decimal("1160.00")

    def test_top_of_second_bracket(self) -> None:
        # 1,160 + 35,550 * 12%
        assert calculate_bracket_tax(Decimal("47150")) == Decimal("5426.00")

    def test_one_million_matches_closed_form(self) -> None:
        expected = (
            Decimal("11600") * Decimal("0.10")
            + (Decimal("47150") - Decimal("11600")) * Decimal("0.12")
            + (Decimal("100525") - Decimal("47150")) * Decimal("0.22")
            + (Decimal("191950") - Decimal("100525")) * Decimal("0.24")
            + (Decimal("243725") - Decimal("191950")) * Decimal("0.32")
            + (Decimal("609350") - Decimal("243725")) * Decimal("0.35")
            + (Decimal("1000000") - Decimal("609350")) * Decimal("0.37")
        )
        assert calculate_bracket_tax(Decimal("1000000")) == expected
        assert expected == Decimal("328187.75")

    def test_strictly_increasing(self) -> None:
        points = [Decimal(p) for p in (
            "0", "1", "5000", "11599.99", "11600", "11600.01", "47150", "80000",
            "100525", "150000", "191950", "243725", "500000", "609350", "609351", "2000000",
        )]
        taxes = [calculate_bracket_tax(p) for p in points]
        assert all(a < b for a, b in zip(taxes, taxes[1:]))

    @pytest.mark.parametrize("rate,bound", NON_RESIDENT_BRACKETS[:-1])
    def test_continuous_at_each_boundary(self, rate: Decimal, bound: Decimal) -> None:
        step = Decimal("0.01")
        below = calculate_bracket_tax(bound - step)
        at = calculate_bracket_tax(bound)
        above = calculate_bracket_tax(bound + step)

        assert at - below == step * rate
        assert above - at > 0
        assert above - at < Decimal("0.01")

    def test_negative_income_rejected(self) -> None:
        with pytest.raises(InvalidTaxInputError):
            calculate_bracket_tax(Decimal("-1"))

    def test_no_rounding_inside_schedule(self) -> None:
        assert calculate_bracket_tax(Decimal("0.05")) == Decimal("0.005")


class TestBracketBreakdown:
    def test_slices_cover_taxable_income(self) -> None:
        slices = calculate_bracket_breakdown(Decimal("50000"))

        assert len(slices) == 3
        assert sum(s.taxable_amount for s in slices) == Decimal("50000")
        assert slices[-1].lower == Decimal("47150")
        assert slices[-1].upper == Decimal("100525")
        assert slices[-1].taxable_amount == Decimal("2850")
        assert slices[-1].tax_amount == Decimal("627.00")

    def test_top_bracket_is_open_ended(self) -> None:
        slices = calculate_bracket_breakdown(Decimal("700000"))

        assert len(slices) == 7
        assert slices[-1].upper is None
        assert slices[-1].rate == Decimal("0.37")

    def test_empty_for_zero_income(self) -> None:
        assert calculate_bracket_breakdown(Decimal("0")) == []
