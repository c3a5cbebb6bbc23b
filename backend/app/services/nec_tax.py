"""
Tax on income not effectively connected with a U.S. trade or business (Schedule NEC)
"""

from typing import Dict
from decimal import Decimal

from app.models.tax import IncomeCategory
from app.services.treaty_catalog import find_rate

DEFAULT_NEC_RATE = Decimal("0.30")


def calculate_nec_tax(
    country: str,
    capital_gains: Decimal,
    elected_rates: Dict[IncomeCategory, bool]
) -> Decimal:
    """Capital gains at the elected treaty rate when the country has one, else 30%"""
    if elected_rates.get(IncomeCategory.CAPITAL_GAINS):
        treaty_rate = find_rate(country, IncomeCategory.CAPITAL_GAINS)
        if treaty_rate is not None:
            return capital_gains * treaty_rate.rate

    return capital_gains * DEFAULT_NEC_RATE
