"""
Treaty Profile Catalog
Per-country treaty exemption articles and reduced-rate articles for students
"""

from typing import Dict, List, Optional, Tuple
from decimal import Decimal

from app.models.tax import (
    CountryOption,
    ExemptionTarget,
    IncomeCategory,
    IncomeTypeCode,
    TreatyExemptionProvision,
    TreatyRateProvision,
)

SCHOLARSHIP_GRANTS = "Treaty Benefits for Scholarship or Fellowship Grants"
TEACHING_RESEARCH = "Treaty Benefits for Teaching and Research"


def _load_treaty_exemptions() -> Dict[str, Tuple[TreatyExemptionProvision, ...]]:
    """Exemption articles by country, in the order they are offered and allocated"""
    return {
        "china": (
            TreatyExemptionProvision(
                code=IncomeTypeCode.STUDYING_TRAINING,
                name="Treaty Benefits for Studying and Training",
                cap=Decimal("5000"),
                applies_to=ExemptionTarget.WAGES,
            ),
            TreatyExemptionProvision(
                code=IncomeTypeCode.TEACHING_RESEARCH,
                name=TEACHING_RESEARCH,
                applies_to=ExemptionTarget.WAGES,
            ),
            TreatyExemptionProvision(
                code=IncomeTypeCode.SCHOLARSHIP_FELLOWSHIP,
                name=SCHOLARSHIP_GRANTS,
                applies_to=ExemptionTarget.SCHOLARSHIPS,
            ),
        ),
        "southKorea": (
            TreatyExemptionProvision(
                code=IncomeTypeCode.SCHOLARSHIP_FELLOWSHIP,
                name=SCHOLARSHIP_GRANTS,
                applies_to=ExemptionTarget.SCHOLARSHIPS,
            ),
            TreatyExemptionProvision(
                code=IncomeTypeCode.TEACHING_RESEARCH,
                name=TEACHING_RESEARCH,
                applies_to=ExemptionTarget.WAGES,
            ),
            TreatyExemptionProvision(
                code=IncomeTypeCode.STUDYING_TRAINING,
                name="Treaty Benefits for Studying and Training",
                cap=Decimal("2000"),
                applies_to=ExemptionTarget.WAGES,
            ),
        ),
        "india": (
            TreatyExemptionProvision(
                code=IncomeTypeCode.TEACHING_RESEARCH,
                name=TEACHING_RESEARCH,
                applies_to=ExemptionTarget.WAGES,
            ),
        ),
    }


def _load_treaty_rates() -> Dict[str, Tuple[TreatyRateProvision, ...]]:
    """Reduced-rate articles by country"""
    return {
        "southKorea": (
            TreatyRateProvision(
                category=IncomeCategory.CAPITAL_GAINS,
                name="Treaty Rate for Capital Gains",
                rate=Decimal("0.0"),
            ),
        ),
    }


# Loaded once at import and never mutated
TREATY_EXEMPTIONS = _load_treaty_exemptions()
TREATY_RATES = _load_treaty_rates()

COUNTRY_NAMES = {
    "china": "China, People's Republic of",
    "southKorea": "Korea, South",
    "india": "India",
    "other": "Other",
}


def provisions_for(country: str) -> Tuple[TreatyExemptionProvision, ...]:
    """Exemption provisions for a country; empty when there is no treaty relief"""
    return TREATY_EXEMPTIONS.get(country, ())


def rates_for(country: str) -> Tuple[TreatyRateProvision, ...]:
    """Reduced-rate provisions for a country; empty when there are none"""
    return TREATY_RATES.get(country, ())


def find_exemption(country: str, code: IncomeTypeCode) -> Optional[TreatyExemptionProvision]:
    for provision in provisions_for(country):
        if provision.code == code:
            return provision
    return None


def find_rate(country: str, category: IncomeCategory) -> Optional[TreatyRateProvision]:
    for provision in rates_for(country):
        if provision.category == category:
            return provision
    return None


def list_countries() -> List[CountryOption]:
    """Countries the calculator offers, treaty partners first"""
    return [
        CountryOption(
            code=code,
            name=name,
            has_tax_treaty=bool(provisions_for(code) or rates_for(code)),
        )
        for code, name in COUNTRY_NAMES.items()
    ]
