"""
Treaty Catalog Endpoints
"""

from fastapi import APIRouter
from typing import List

from app.models.tax import CountryOption, TreatyExemptionProvision, TreatyRateProvision
from app.monitoring.metrics import track_counter
from app.services.treaty_catalog import list_countries, provisions_for, rates_for

router = APIRouter()


@router.get("/countries", response_model=List[CountryOption])
async def get_countries():
    """Countries the calculator offers"""
    return list_countries()


@router.get("/{country}/exemptions", response_model=List[TreatyExemptionProvision])
@track_counter("treaty_lookups")
async def get_exemptions(country: str):
    """Treaty exemption provisions; empty for countries without a treaty"""
    return list(provisions_for(country))


@router.get("/{country}/rates", response_model=List[TreatyRateProvision])
@track_counter("treaty_lookups")
async def get_rates(country: str):
    """Reduced treaty rates; empty when the country has none"""
    return list(rates_for(country))
