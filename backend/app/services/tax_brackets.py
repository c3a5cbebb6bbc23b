"""
Progressive bracket tax for income effectively connected with a U.S. trade or business
"""

from typing import List, Tuple
from decimal import Decimal

from app.core.exceptions import InvalidTaxInputError
from app.models.tax import BracketSlice

# 2024 single-filer schedule, the one non-resident aliens use: (rate, upper bound)
NON_RESIDENT_BRACKETS: Tuple[Tuple[Decimal, Decimal], ...] = (
    (Decimal("0.10"), Decimal("11600")),
    (Decimal("0.12"), Decimal("47150")),
    (Decimal("0.22"), Decimal("100525")),
    (Decimal("0.24"), Decimal("191950")),
    (Decimal("0.32"), Decimal("243725")),
    (Decimal("0.35"), Decimal("609350")),
    (Decimal("0.37"), Decimal("Infinity")),
)


def calculate_bracket_breakdown(
    taxable_income: Decimal,
    brackets: Tuple[Tuple[Decimal, Decimal], ...] = NON_RESIDENT_BRACKETS
) -> List[BracketSlice]:
    """
    Split taxable income across the bracket schedule

    Args:
        taxable_income: Taxable income, already floored at zero by the caller
        brackets: Ascending (rate, upper bound) pairs, last bound infinite

    Returns:
        One slice per bracket that received income, lowest first
    """
    taxable_income = Decimal(taxable_income)
    if taxable_income < 0:
        raise InvalidTaxInputError(
            "Taxable income cannot be negative", field="taxable_income"
        )

    slices = []
    remaining = taxable_income
    lower = Decimal("0")

    for rate, upper in brackets:
        if remaining <= 0:
            break

        taxable_in_bracket = min(remaining, upper - lower)
        slices.append(BracketSlice(
            lower=lower,
            upper=upper if upper.is_finite() else None,
            rate=rate,
            taxable_amount=taxable_in_bracket,
            tax_amount=taxable_in_bracket * rate
        ))
        remaining -= taxable_in_bracket
        lower = upper

    return slices


def calculate_bracket_tax(
    taxable_income: Decimal,
    brackets: Tuple[Tuple[Decimal, Decimal], ...] = NON_RESIDENT_BRACKETS
) -> Decimal:
    """Tax owed on taxable income under the progressive schedule (unrounded)"""
    return sum(
        (s.tax_amount for s in calculate_bracket_breakdown(taxable_income, brackets)),
        Decimal("0")
    )
