"""
Tax Input Validators - Deterministic validation of raw form text
"""

import re
from typing import Any, Dict, Tuple
from decimal import Decimal, InvalidOperation
import structlog

from app.core.exceptions import InvalidTaxInputError
from app.models.tax import MAX_AMOUNT

logger = structlog.get_logger()

# Fields whose negative entries are clamped to zero instead of rejected
CLAMPED_FIELDS = {"capital_gains"}


class TaxInputValidator:
    """Deterministic validator for money typed into the calculator"""

    def __init__(self):
        self.validation_rules = self._initialize_validation_rules()

    def _initialize_validation_rules(self) -> Dict[str, Dict[str, Any]]:
        """Initialize validation rules for different data types"""
        return {
            "currency": {
                "pattern": r"^(\d+\.?\d*|\.\d+)$",
                "range": {"min": Decimal("0"), "max": MAX_AMOUNT},
                "error_message": "Invalid currency amount"
            }
        }

    def validate_currency(self, value: str) -> Tuple[bool, str]:
        """Validate currency amount text"""
        rule = self.validation_rules["currency"]
        text = (value or "").strip()

        if text == "":
            return True, ""

        if text.startswith("-"):
            if re.match(rule["pattern"], text[1:]):
                return False, "Currency amount cannot be negative"
            return False, "Invalid currency format"

        if not re.match(rule["pattern"], text):
            return False, "Invalid currency format"

        try:
            amount = Decimal(text)
        except InvalidOperation:
            return False, "Invalid currency format"

        if amount > rule["range"]["max"]:
            return False, "Currency amount exceeds maximum"

        return True, ""

    def parse_currency(self, value: str, field: str = "amount") -> Decimal:
        """
        Parse a money field the way the form accepts it

        Blank means zero and leading zeros are dropped. Negative amounts are
        rejected, except for capital gains where they count as zero.

        Args:
            value: Raw text from the input widget
            field: Name of the TaxpayerInput field being set

        Returns:
            Non-negative amount
        """
        text = (value or "").strip()
        valid, message = self.validate_currency(text)

        if not valid:
            if message == "Currency amount cannot be negative" and field in CLAMPED_FIELDS:
                logger.debug("Clamped negative amount", field=field, value=text)
                return Decimal("0")

            logger.warning("Rejected currency input", field=field, value=text, reason=message)
            raise InvalidTaxInputError(f"{field}: {message}", field=field)

        text = text.lstrip("0")
        if text in ("", "."):
            return Decimal("0")

        return Decimal(text)


# Global validator instance
tax_input_validator = TaxInputValidator()
