"""
Itemized deductions (Schedule A, Form 1040-NR)
"""

from decimal import Decimal

SALT_MAX_DEDUCTION = Decimal("10000")
STANDARD_DEDUCTION = Decimal("14600")


def calculate_itemized_deduction(
    country: str,
    charitable_distributions: Decimal,
    state_local_taxes: Decimal
) -> Decimal:
    """Charitable gifts plus state and local taxes up to the SALT cap"""
    salt_deduction = min(state_local_taxes, SALT_MAX_DEDUCTION)
    itemized = charitable_distributions + salt_deduction

    # India treaty Article 21(2): students may take the standard deduction instead.
    # The only country-specific rule outside the treaty catalog.
    if country == "india":
        return max(STANDARD_DEDUCTION, itemized)

    return itemized
