"""
Treaty exemption allocation across wages and scholarships
"""

from typing import Dict
from decimal import Decimal
import structlog

from app.models.tax import ExemptionAllocation, ExemptionTarget, IncomeTypeCode
from app.services.treaty_catalog import provisions_for

logger = structlog.get_logger()


def allocate_exemptions(
    country: str,
    wages: Decimal,
    scholarships: Decimal,
    elected: Dict[IncomeTypeCode, Decimal]
) -> ExemptionAllocation:
    """
    Compute the treaty-exempt portion of wages and scholarships

    Wages provisions are applied in catalog order, each limited by the wages
    not yet exempted, the claimed amount and the provision cap. Scholarship
    provisions contribute their claimed amount as-is.

    Args:
        country: Country of tax residency
        wages: Wages (Form 1040-NR line 1a)
        scholarships: Scholarship and fellowship grants
        elected: Claimed amount by income code

    Returns:
        Exempt wages and exempt scholarships
    """
    provisions = provisions_for(country)
    if not provisions:
        return ExemptionAllocation()

    exempt_wages = Decimal("0")
    exempt_scholarships = Decimal("0")
    remaining_wages = wages

    for provision in provisions:
        claimed = elected.get(provision.code)
        if not claimed:
            continue

        if provision.applies_to == ExemptionTarget.WAGES:
            amount = min(remaining_wages, claimed)
            if provision.cap is not None:
                amount = min(amount, provision.cap)
            amount = max(Decimal("0"), amount)
            exempt_wages += amount
            remaining_wages -= amount
        else:
            exempt_scholarships += claimed

    logger.debug("Treaty exemptions allocated",
                 country=country,
                 exempt_wages=str(exempt_wages),
                 exempt_scholarships=str(exempt_scholarships))

    return ExemptionAllocation(
        exempt_wages=exempt_wages,
        exempt_scholarships=exempt_scholarships
    )
