from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.tax import IncomeTypeCode, TaxpayerInput
from app.monitoring.metrics import metrics_collector
from app.services.tax_rules_engine import TaxRulesEngine


@pytest.fixture
def engine() -> TaxRulesEngine:
    return TaxRulesEngine(tax_year=2024)


@pytest.fixture
def china_student() -> TaxpayerInput:
    """China resident with $6,000 wages claiming the $5,000 studying and training article."""
    return TaxpayerInput(
        foreign_country="china",
        wages=Decimal("6000"),
        elected_exemptions={IncomeTypeCode.STUDYING_TRAINING: Decimal("5000")},
    )


@pytest.fixture
def client():
    metrics_collector.reset()
    with TestClient(app) as test_client:
        yield test_client
