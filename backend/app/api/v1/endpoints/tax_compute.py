"""
Tax Computation Endpoints
"""

from fastapi import APIRouter

from app.models.tax import TaxpayerInput, TaxReport, TaxResult
from app.monitoring.metrics import track_counter, track_timing
from app.services.tax_rules_engine import get_tax_rules_engine

router = APIRouter()


@router.post("/compute", response_model=TaxResult)
@track_timing("tax_computation")
@track_counter("tax_computations")
async def compute_tax(taxpayer: TaxpayerInput):
    """Compute every tax line for the submitted inputs"""
    return get_tax_rules_engine().compute(taxpayer)


@router.post("/report", response_model=TaxReport)
@track_timing("tax_report")
@track_counter("tax_reports")
async def compute_tax_report(taxpayer: TaxpayerInput):
    """Compute and return the Form 1040-NR line items"""
    return get_tax_rules_engine().build_report(taxpayer)
