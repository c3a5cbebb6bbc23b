# Models package - Export all models

from .tax import (
    IncomeTypeCode, ExemptionTarget, IncomeCategory,
    TreatyExemptionProvision, TreatyRateProvision, CountryOption,
    TaxpayerInput, ExemptionAllocation, BracketSlice, TaxResult,
    LineItem, TaxReport,
    ExemptionElectionRequest, RateElectionRequest, IncomeUpdateRequest, CountryUpdateRequest
)

from .common import (
    HealthStatus, ErrorResponse
)
