"""
Tax Rules Engine for Non-Resident Alien Students
Deterministic composition of treaty exemptions, deductions, bracket tax and NEC tax
"""

from decimal import Decimal
import structlog

from app.core.config import settings
from app.core.exceptions import InvalidTaxInputError, TaxEngineError
from app.models.tax import TaxpayerInput, TaxReport, TaxResult
from app.services.deductions import calculate_itemized_deduction
from app.services.exemption_allocator import allocate_exemptions
from app.services.form_lines import DISCLAIMER, build_line_items, format_percent
from app.services.nec_tax import calculate_nec_tax
from app.services.tax_brackets import calculate_bracket_tax

logger = structlog.get_logger()

# Years whose bracket, SALT and standard-deduction tables are encoded
SUPPORTED_TAX_YEARS = (2024,)

MONEY_FIELDS = (
    "wages",
    "scholarships",
    "capital_gains",
    "charitable_distributions",
    "state_local_taxes",
)


class TaxRulesEngine:
    """Deterministic tax rules engine for non-resident student returns"""

    def __init__(self, tax_year: int = None):
        self.tax_year = tax_year or settings.TAX_YEAR
        if self.tax_year not in SUPPORTED_TAX_YEARS:
            raise InvalidTaxInputError(
                f"Tax year {self.tax_year} is not supported; rules are encoded for "
                f"{', '.join(str(y) for y in SUPPORTED_TAX_YEARS)}",
                field="tax_year"
            )
        self.ruleset_version = f"v{self.tax_year}.1"

    def _check_domain(self, taxpayer: TaxpayerInput):
        """Reject negative money that bypassed model validation"""
        for field in MONEY_FIELDS:
            if getattr(taxpayer, field) < 0:
                raise InvalidTaxInputError(f"{field} cannot be negative", field=field)

        for code, amount in taxpayer.elected_exemptions.items():
            if amount < 0:
                raise InvalidTaxInputError(
                    f"Claimed amount for income code {code.value} cannot be negative",
                    field="elected_exemptions"
                )

    ### MOST IMPORTANT FUNCTION IN THE ENGINE ###
    def compute(self, taxpayer: TaxpayerInput) -> TaxResult:
        """
        Compute every derived line for a taxpayer

        Args:
            taxpayer: Validated income figures and treaty elections

        Returns:
            Full TaxResult snapshot, unrounded
        """
        self._check_domain(taxpayer)

        try:
            logger.info("Computing tax",
                        country=taxpayer.foreign_country,
                        tax_year=self.tax_year)

            country = taxpayer.foreign_country

            # Step 1: Treaty exemptions
            allocation = allocate_exemptions(
                country,
                taxpayer.wages,
                taxpayer.scholarships,
                taxpayer.elected_exemptions
            )

            # Step 2: Income and AGI
            effectively_connected_income = taxpayer.wages - allocation.exempt_wages
            adjustments_to_income = taxpayer.scholarships - allocation.exempt_scholarships
            adjusted_gross_income = effectively_connected_income + adjustments_to_income

            # Step 3: Deductions and taxable income
            itemized_deductions = calculate_itemized_deduction(
                country,
                taxpayer.charitable_distributions,
                taxpayer.state_local_taxes
            )
            taxable_income = max(Decimal("0"), adjusted_gross_income - itemized_deductions)

            # Step 4: Tax on ECI and NEC income
            tax_on_eci = calculate_bracket_tax(taxable_income)
            tax_on_nec = calculate_nec_tax(country, taxpayer.capital_gains, taxpayer.elected_rates)
            total_tax = tax_on_eci + tax_on_nec

            # Step 5: Effective rate over gross income
            total_income = taxpayer.wages + taxpayer.scholarships + taxpayer.capital_gains
            effective_rate = (total_tax / total_income * 100) if total_income > 0 else Decimal("0")

            result = TaxResult(
                exempt_wages=allocation.exempt_wages,
                exempt_scholarships=allocation.exempt_scholarships,
                effectively_connected_income=effectively_connected_income,
                adjustments_to_income=adjustments_to_income,
                adjusted_gross_income=adjusted_gross_income,
                itemized_deductions=itemized_deductions,
                taxable_income=taxable_income,
                tax_on_effectively_connected_income=tax_on_eci,
                tax_on_nec=tax_on_nec,
                total_tax=total_tax,
                total_income=total_income,
                total_treaty_exempt_income=allocation.exempt_wages + allocation.exempt_scholarships,
                effective_tax_rate_percent=effective_rate
            )

            logger.info("Tax computation completed",
                        country=country,
                        taxable_income=str(taxable_income),
                        total_tax=str(total_tax))

            return result

        except TaxEngineError:
            raise
        except Exception as e:
            logger.error("Tax computation failed", error=str(e))
            raise TaxEngineError(f"Failed to compute tax: {str(e)}") from e

    def build_report(self, taxpayer: TaxpayerInput) -> TaxReport:
        """Compute and lay out the Form 1040-NR line items"""
        result = self.compute(taxpayer)

        return TaxReport(
            foreign_country=taxpayer.foreign_country,
            tax_year=self.tax_year,
            ruleset_version=self.ruleset_version,
            line_items=build_line_items(taxpayer, result),
            effective_tax_rate=format_percent(result.effective_tax_rate_percent),
            disclaimer=DISCLAIMER
        )


def get_tax_rules_engine(tax_year: int = None) -> TaxRulesEngine:
    """Get tax rules engine instance for specific year"""
    return TaxRulesEngine(tax_year=tax_year)
