"""
Treaty Election Endpoints
Each call returns the replacement TaxpayerInput the client should keep
"""

from fastapi import APIRouter

from app.models.tax import (
    CountryUpdateRequest,
    ExemptionElectionRequest,
    IncomeUpdateRequest,
    RateElectionRequest,
    TaxpayerInput,
)
from app.monitoring.metrics import track_counter
from app.services.elections import (
    change_country,
    elect_exemption,
    recompute_dependents,
    revoke_exemption,
    set_rate_election,
    update_income,
)

router = APIRouter()


@router.post("/recompute", response_model=TaxpayerInput)
@track_counter("election_updates")
async def recompute(taxpayer: TaxpayerInput):
    """Re-clamp elections against the current inputs"""
    return recompute_dependents(taxpayer)


@router.post("/exemptions", response_model=TaxpayerInput)
@track_counter("election_updates")
async def update_exemption(request: ExemptionElectionRequest):
    """Elect or revoke a treaty exemption"""
    if request.elect:
        return elect_exemption(request.taxpayer, request.code)
    return revoke_exemption(request.taxpayer, request.code)


@router.post("/rates", response_model=TaxpayerInput)
@track_counter("election_updates")
async def update_rate(request: RateElectionRequest):
    """Toggle a reduced treaty rate"""
    return set_rate_election(request.taxpayer, request.category, request.elect)


@router.post("/income", response_model=TaxpayerInput)
@track_counter("election_updates")
async def update_income_field(request: IncomeUpdateRequest):
    """Set one money field from raw form text"""
    return update_income(request.taxpayer, request.field, request.value)


@router.post("/country", response_model=TaxpayerInput)
@track_counter("election_updates")
async def update_country(request: CountryUpdateRequest):
    """Change the country of tax residency"""
    return change_country(request.taxpayer, request.foreign_country)
