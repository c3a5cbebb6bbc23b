"""
Common Models and Utilities
"""

from pydantic import BaseModel
from typing import Optional, Dict, Any
from datetime import datetime


class HealthStatus(BaseModel):
    """Health check status"""
    status: str = "ok"
    timestamp: datetime
    version: str
    tax_year: int
    ruleset_version: str


class ErrorResponse(BaseModel):
    """Standard error response"""
    error: str
    message: str
    details: Optional[Dict[str, Any]] = None
    timestamp: datetime
