"""
Tax engine error types
"""


class TaxEngineError(Exception):
    """Unexpected failure while computing a tax result"""


class InvalidTaxInputError(TaxEngineError, ValueError):
    """Input outside the engine's domain (negative money, malformed text, unknown election)"""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field
