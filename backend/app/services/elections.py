"""
Treaty election maintenance

Every helper returns a new TaxpayerInput; the caller replaces its copy and
recomputes. Elections are kept consistent with the current country and income:
at most one wages exemption, claimed amounts re-clamped to min(cap, income),
capital gains never negative.
"""

from typing import Any, Dict
from decimal import Decimal, InvalidOperation
import structlog

from app.core.exceptions import InvalidTaxInputError
from app.models.tax import (
    ExemptionTarget,
    IncomeCategory,
    IncomeTypeCode,
    MAX_AMOUNT,
    TaxpayerInput,
    TreatyExemptionProvision,
)
from app.services.tax_validators import tax_input_validator
from app.services.treaty_catalog import find_exemption, find_rate, provisions_for

logger = structlog.get_logger()

INCOME_FIELDS = (
    "wages",
    "scholarships",
    "capital_gains",
    "charitable_distributions",
    "state_local_taxes",
)


def _replace(taxpayer: TaxpayerInput, **changes: Any) -> TaxpayerInput:
    """Build a fresh, validated input with some fields changed"""
    data = taxpayer.model_dump()
    data.update(changes)
    return TaxpayerInput.model_validate(data)


def _claim_limit(provision: TreatyExemptionProvision, taxpayer: TaxpayerInput) -> Decimal:
    income = (
        taxpayer.wages
        if provision.applies_to == ExemptionTarget.WAGES
        else taxpayer.scholarships
    )
    if provision.cap is not None:
        return min(provision.cap, income)
    return income


def recompute_dependents(taxpayer: TaxpayerInput) -> TaxpayerInput:
    """
    Bring the election maps back in line with the current inputs

    Drops elections the country does not offer, keeps only the first elected
    wages provision in catalog order, and re-clamps every claimed amount.
    """
    country = taxpayer.foreign_country
    elected_exemptions: Dict[IncomeTypeCode, Decimal] = {}
    wages_provision_kept = False

    for provision in provisions_for(country):
        if provision.code not in taxpayer.elected_exemptions:
            continue

        if provision.applies_to == ExemptionTarget.WAGES:
            if wages_provision_kept:
                continue
            wages_provision_kept = True

        elected_exemptions[provision.code] = _claim_limit(provision, taxpayer)

    elected_rates = {
        category: elected
        for category, elected in taxpayer.elected_rates.items()
        if find_rate(country, category) is not None
    }

    return _replace(
        taxpayer,
        elected_exemptions=elected_exemptions,
        elected_rates=elected_rates
    )


def elect_exemption(taxpayer: TaxpayerInput, code: IncomeTypeCode) -> TaxpayerInput:
    """Claim a treaty exemption at its full eligible amount"""
    provision = find_exemption(taxpayer.foreign_country, code)
    if provision is None:
        raise InvalidTaxInputError(
            f"Income code {code.value} has no treaty exemption for {taxpayer.foreign_country or 'this country'}",
            field="elected_exemptions"
        )

    elected_exemptions = dict(taxpayer.elected_exemptions)

    if provision.applies_to == ExemptionTarget.WAGES:
        # Only one wages article may be claimed at a time
        for other in provisions_for(taxpayer.foreign_country):
            if other.applies_to == ExemptionTarget.WAGES and other.code != code:
                elected_exemptions.pop(other.code, None)

    elected_exemptions[code] = _claim_limit(provision, taxpayer)

    logger.info("Treaty exemption elected",
                country=taxpayer.foreign_country,
                code=code.value,
                claimed=str(elected_exemptions[code]))

    return _replace(taxpayer, elected_exemptions=elected_exemptions)


def revoke_exemption(taxpayer: TaxpayerInput, code: IncomeTypeCode) -> TaxpayerInput:
    elected_exemptions = dict(taxpayer.elected_exemptions)
    elected_exemptions.pop(code, None)
    return _replace(taxpayer, elected_exemptions=elected_exemptions)


def set_rate_election(
    taxpayer: TaxpayerInput,
    category: IncomeCategory,
    elected: bool
) -> TaxpayerInput:
    """Toggle a reduced treaty rate"""
    if elected and find_rate(taxpayer.foreign_country, category) is None:
        raise InvalidTaxInputError(
            f"No treaty rate for {category.value} with {taxpayer.foreign_country or 'this country'}",
            field="elected_rates"
        )

    elected_rates = dict(taxpayer.elected_rates)
    elected_rates[category] = elected
    return _replace(taxpayer, elected_rates=elected_rates)


def _coerce_amount(value: Any, field: str) -> Decimal:
    """Numeric value from a non-text caller, held to the same limits as form text"""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidTaxInputError(f"{field}: Invalid currency format", field=field)

    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise InvalidTaxInputError(f"{field}: Invalid currency format", field=field)

    if not amount.is_finite():
        raise InvalidTaxInputError(f"{field}: Invalid currency format", field=field)
    if amount > MAX_AMOUNT:
        raise InvalidTaxInputError(f"{field}: Currency amount exceeds maximum", field=field)
    if amount < 0:
        if field != "capital_gains":
            raise InvalidTaxInputError(f"{field} cannot be negative", field=field)
        return Decimal("0")

    return amount


def update_income(taxpayer: TaxpayerInput, field: str, value: Any) -> TaxpayerInput:
    """
    Set one money field and re-clamp the elections that depend on it

    Args:
        taxpayer: Current input
        field: One of the TaxpayerInput money fields
        value: Raw form text or a number

    Returns:
        New input with elections recomputed
    """
    if field not in INCOME_FIELDS:
        raise InvalidTaxInputError(f"Unknown income field: {field}", field=field)

    if isinstance(value, str):
        amount = tax_input_validator.parse_currency(value, field=field)
    else:
        amount = _coerce_amount(value, field)

    return recompute_dependents(_replace(taxpayer, **{field: amount}))


def change_country(taxpayer: TaxpayerInput, country: str) -> TaxpayerInput:
    return recompute_dependents(_replace(taxpayer, foreign_country=country))
