"""
API v1 Router
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    monitoring,
    tax_compute,
    treaties,
    elections,
)

api_router = APIRouter()

# Include all endpoint routers with proper prefixes
api_router.include_router(monitoring.router, tags=["monitoring"])
api_router.include_router(treaties.router, prefix="/treaties", tags=["treaties"])
api_router.include_router(tax_compute.router, prefix="/tax-compute", tags=["tax-computation"])
api_router.include_router(elections.router, prefix="/elections", tags=["elections"])
