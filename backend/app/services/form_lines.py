"""
Form 1040-NR line items for a computed tax result
"""

from typing import List
from decimal import Decimal, ROUND_HALF_UP

from app.models.tax import LineItem, TaxpayerInput, TaxResult

CENTS = Decimal("0.01")

DISCLAIMER = (
    "This tax calculator is for informational purposes only and does not constitute tax advice. "
    "Everything here is not guaranteed to be accurate and does not apply to all situations. "
    "Please consult with a tax professional regarding your tax situation."
)


def format_money(amount: Decimal) -> str:
    """Two-decimal amount, half-up"""
    return str(Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP))


def format_percent(rate: Decimal) -> str:
    return f"{format_money(rate)}%"


def build_line_items(taxpayer: TaxpayerInput, result: TaxResult) -> List[LineItem]:
    """
    Lay a TaxResult out as the Form 1040-NR lines it fills

    Line 1k only appears when some income is treaty-exempt.
    """
    items = []

    if result.total_treaty_exempt_income > 0:
        items.append(LineItem(
            line_code="1k",
            description="Total income exempt by a treaty (Schedule OI, item L, line 1(e))",
            amount=format_money(result.total_treaty_exempt_income)
        ))

    deduction_label = "Itemized Deductions"
    if taxpayer.foreign_country == "india":
        deduction_label += " or, for certain residents of India, standard deduction"

    items.extend([
        LineItem(
            line_code="9",
            description="Total Effectively Connected Income",
            amount=format_money(result.effectively_connected_income)
        ),
        LineItem(
            line_code="10",
            description="Total Adjustments to Income",
            amount=format_money(result.adjustments_to_income)
        ),
        LineItem(
            line_code="11",
            description="Adjusted Gross Income",
            amount=format_money(result.adjusted_gross_income)
        ),
        LineItem(
            line_code="12",
            description=deduction_label,
            amount=format_money(result.itemized_deductions)
        ),
        LineItem(
            line_code="15",
            description="Taxable Income",
            amount=format_money(result.taxable_income)
        ),
        LineItem(
            line_code="16",
            description="Tax (on Income Effectively Connected With U.S. Trade or Business)",
            amount=format_money(result.tax_on_effectively_connected_income)
        ),
        LineItem(
            line_code="23a",
            description=(
                "Tax on income not effectively connected with a U.S. trade or business "
                "(Schedule NEC, line 15)"
            ),
            amount=format_money(result.tax_on_nec)
        ),
        LineItem(
            line_code="24",
            description="Total Tax",
            amount=format_money(result.total_tax)
        ),
    ])

    return items
