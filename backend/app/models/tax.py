"""
Tax Computation Models
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict, List
from decimal import Decimal
from enum import Enum


# Largest amount the calculator accepts for any money field
MAX_AMOUNT = Decimal("999999999.99")


class IncomeTypeCode(str, Enum):
    """Income codes used on Schedule OI for treaty-exempt income"""
    SCHOLARSHIP_FELLOWSHIP = "16"
    TEACHING_RESEARCH = "19"
    STUDYING_TRAINING = "20"


class ExemptionTarget(str, Enum):
    """Income field a treaty exemption reduces"""
    WAGES = "wages"
    SCHOLARSHIPS = "scholarships"


class IncomeCategory(str, Enum):
    """Income categories eligible for a reduced treaty rate"""
    CAPITAL_GAINS = "capitalGains"


class TreatyExemptionProvision(BaseModel):
    """Treaty article exempting some or all of one income type"""
    code: IncomeTypeCode
    name: str
    cap: Optional[Decimal] = Field(None, ge=0)
    applies_to: ExemptionTarget

    class Config:
        frozen = True


class TreatyRateProvision(BaseModel):
    """Treaty article substituting a reduced flat rate"""
    category: IncomeCategory
    name: str
    rate: Decimal = Field(..., ge=0, le=1)

    class Config:
        frozen = True


class CountryOption(BaseModel):
    """Selectable country of tax residency"""
    code: str
    name: str
    has_tax_treaty: bool


class TaxpayerInput(BaseModel):
    """Validated income figures and treaty elections for one calculation"""
    foreign_country: str = ""
    wages: Decimal = Field(Decimal("0"), ge=0, le=MAX_AMOUNT)
    scholarships: Decimal = Field(Decimal("0"), ge=0, le=MAX_AMOUNT)
    capital_gains: Decimal = Field(Decimal("0"), le=MAX_AMOUNT)
    charitable_distributions: Decimal = Field(Decimal("0"), ge=0, le=MAX_AMOUNT)
    state_local_taxes: Decimal = Field(Decimal("0"), ge=0, le=MAX_AMOUNT)
    elected_exemptions: Dict[IncomeTypeCode, Decimal] = Field(default_factory=dict)
    elected_rates: Dict[IncomeCategory, bool] = Field(default_factory=dict)

    class Config:
        frozen = True

    @field_validator("capital_gains")
    @classmethod
    def clamp_capital_gains(cls, value: Decimal) -> Decimal:
        # Losses are not carried; negative gains count as zero
        return max(Decimal("0"), value)

    @field_validator("elected_exemptions")
    @classmethod
    def check_claimed_amounts(cls, value: Dict[IncomeTypeCode, Decimal]) -> Dict[IncomeTypeCode, Decimal]:
        for code, amount in value.items():
            if amount < 0:
                raise ValueError(f"Claimed amount for income code {code.value} cannot be negative")
            if amount > MAX_AMOUNT:
                raise ValueError(f"Claimed amount for income code {code.value} exceeds maximum")
        return value


class ExemptionAllocation(BaseModel):
    """Treaty-exempt portions of wages and scholarships"""
    exempt_wages: Decimal = Decimal("0")
    exempt_scholarships: Decimal = Decimal("0")

    class Config:
        frozen = True


class BracketSlice(BaseModel):
    """Portion of taxable income taxed within one bracket"""
    lower: Decimal
    upper: Optional[Decimal] = None  # None for the open-ended top bracket
    rate: Decimal
    taxable_amount: Decimal
    tax_amount: Decimal


class TaxResult(BaseModel):
    """Snapshot of every derived line for one TaxpayerInput"""
    exempt_wages: Decimal
    exempt_scholarships: Decimal
    effectively_connected_income: Decimal
    adjustments_to_income: Decimal
    adjusted_gross_income: Decimal
    itemized_deductions: Decimal
    taxable_income: Decimal
    tax_on_effectively_connected_income: Decimal
    tax_on_nec: Decimal
    total_tax: Decimal
    total_income: Decimal
    total_treaty_exempt_income: Decimal
    effective_tax_rate_percent: Decimal

    class Config:
        frozen = True


class LineItem(BaseModel):
    """One Form 1040-NR line"""
    line_code: str = Field(..., max_length=20)
    description: str = Field(..., max_length=200)
    amount: str


class TaxReport(BaseModel):
    """Line-item view of a TaxResult"""
    foreign_country: str
    tax_year: int
    ruleset_version: str
    line_items: List[LineItem]
    effective_tax_rate: str
    disclaimer: str


class ExemptionElectionRequest(BaseModel):
    """Elect or revoke one treaty exemption"""
    taxpayer: TaxpayerInput
    code: IncomeTypeCode
    elect: bool = True


class RateElectionRequest(BaseModel):
    """Toggle a reduced treaty rate"""
    taxpayer: TaxpayerInput
    category: IncomeCategory = IncomeCategory.CAPITAL_GAINS
    elect: bool = True


class IncomeUpdateRequest(BaseModel):
    """Replace one money field from raw form text"""
    taxpayer: TaxpayerInput
    field: str
    value: str = ""


class CountryUpdateRequest(BaseModel):
    """Change the country of tax residency"""
    taxpayer: TaxpayerInput
    foreign_country: str
