"""HTTP tests for the calculator API."""

from decimal import Decimal

from app.services import tax_rules_engine as engine_module

API = "/api/v1"

CHINA_STUDENT = {
    "foreign_country": "china",
    "wages": 6000,
    "elected_exemptions": {"20": 5000},
}


def test_health(client) -> None:
    resp = client.get(f"{API}/health")

    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["tax_year"] == 2024


def test_countries(client) -> None:
    resp = client.get(f"{API}/treaties/countries")

    assert resp.status_code == 200
    assert [c["code"] for c in resp.json()] == ["china", "southKorea", "india", "other"]


def test_exemptions_for_china(client) -> None:
    resp = client.get(f"{API}/treaties/china/exemptions")

    assert resp.status_code == 200
    data = resp.json()
    assert [p["code"] for p in data] == ["20", "19", "16"]
    assert Decimal(data[0]["cap"]) == Decimal("5000")
    assert data[1]["cap"] is None
    assert data[2]["applies_to"] == "scholarships"


def test_unknown_country_has_empty_catalog(client) -> None:
    assert client.get(f"{API}/treaties/atlantis/exemptions").json() == []
    assert client.get(f"{API}/treaties/atlantis/rates").json() == []


def test_south_korea_rates(client) -> None:
    data = client.get(f"{API}/treaties/southKorea/rates").json()

    assert len(data) == 1
    assert data[0]["category"] == "capitalGains"
    assert Decimal(data[0]["rate"]) == Decimal("0")


def test_compute(client) -> None:
    resp = client.post(f"{API}/tax-compute/compute", json=CHINA_STUDENT)

    assert resp.status_code == 200
    data = resp.json()
    assert Decimal(data["exempt_wages"]) == Decimal("5000")
    assert Decimal(data["taxable_income"]) == Decimal("1000")
    assert Decimal(data["total_tax"]) == Decimal("100")


def test_compute_rejects_negative_wages(client) -> None:
    resp = client.post(f"{API}/tax-compute/compute", json={"foreign_country": "other", "wages": -1})
    assert resp.status_code == 422


def test_report_rejects_oversized_wages(client) -> None:
    resp = client.post(f"{API}/tax-compute/report", json={"foreign_country": "other", "wages": "1E+100"})
    assert resp.status_code == 422


def test_report_rejects_oversized_claim(client) -> None:
    resp = client.post(
        f"{API}/tax-compute/report",
        json={"foreign_country": "china", "wages": 6000, "elected_exemptions": {"19": "1E+100"}},
    )
    assert resp.status_code == 422


def test_report(client) -> None:
    resp = client.post(f"{API}/tax-compute/report", json=CHINA_STUDENT)

    assert resp.status_code == 200
    data = resp.json()
    assert data["effective_tax_rate"] == "1.67%"
    assert data["line_items"][0] == {
        "line_code": "1k",
        "description": "Total income exempt by a treaty (Schedule OI, item L, line 1(e))",
        "amount": "5000.00",
    }


def test_elect_exemption(client) -> None:
    taxpayer = {"foreign_country": "china", "wages": 6000}
    resp = client.post(f"{API}/elections/exemptions", json={"taxpayer": taxpayer, "code": "20"})

    assert resp.status_code == 200
    claimed = resp.json()["elected_exemptions"]
    assert list(claimed) == ["20"]
    assert Decimal(claimed["20"]) == Decimal("5000")


def test_elect_unavailable_exemption(client) -> None:
    taxpayer = {"foreign_country": "india", "wages": 6000}
    resp = client.post(f"{API}/elections/exemptions", json={"taxpayer": taxpayer, "code": "20"})

    assert resp.status_code == 422
    data = resp.json()
    assert data["error"] == "invalid_input"
    assert data["details"] == {"field": "elected_exemptions"}


def test_update_income_reclamps(client) -> None:
    resp = client.post(
        f"{API}/elections/income",
        json={"taxpayer": CHINA_STUDENT, "field": "wages", "value": "0003000"},
    )

    assert resp.status_code == 200
    data = resp.json()
    assert Decimal(data["wages"]) == Decimal("3000")
    assert Decimal(data["elected_exemptions"]["20"]) == Decimal("3000")


def test_rate_election_and_country_change(client) -> None:
    taxpayer = {"foreign_country": "southKorea", "capital_gains": 10000}
    elected = client.post(f"{API}/elections/rates", json={"taxpayer": taxpayer, "elect": True}).json()
    assert elected["elected_rates"] == {"capitalGains": True}

    moved = client.post(
        f"{API}/elections/country",
        json={"taxpayer": elected, "foreign_country": "other"},
    ).json()
    assert moved["elected_rates"] == {}


def test_metrics_count_computations(client) -> None:
    client.post(f"{API}/tax-compute/compute", json=CHINA_STUDENT)
    client.post(f"{API}/tax-compute/compute", json=CHINA_STUDENT)

    counters = client.get(f"{API}/metrics").json()["metrics"]["counters"]
    assert counters["tax_computations"] == 2


def test_metrics_count_rejected_input_separately(client) -> None:
    taxpayer = {"foreign_country": "india", "wages": 6000}
    client.post(f"{API}/elections/exemptions", json={"taxpayer": taxpayer, "code": "20"})
    client.post(f"{API}/elections/income", json={"taxpayer": taxpayer, "field": "wages", "value": "3000"})

    metrics = client.get(f"{API}/metrics").json()["metrics"]
    assert metrics["counters"]["rejected_inputs"] == 1
    assert metrics["counters"]["election_updates"] == 1
    assert metrics["counters"]["errors"] == 0


def test_engine_failure_recorded_once(client, monkeypatch) -> None:
    def broken(*args, **kwargs):
        raise RuntimeError("rate table unavailable")

    monkeypatch.setattr(engine_module, "calculate_nec_tax", broken)

    resp = client.post(f"{API}/tax-compute/compute", json=CHINA_STUDENT)
    assert resp.status_code == 500
    assert resp.json()["error"] == "tax_engine_error"

    metrics = client.get(f"{API}/metrics").json()["metrics"]
    assert metrics["counters"]["tax_computations"] == 0
    assert metrics["counters"]["errors"] == 1
    assert metrics["error_counts"] == {"TaxEngineError": 1}
    assert "tax_computation" not in metrics["timing_stats"]


def test_metrics_timing_stats(client) -> None:
    client.post(f"{API}/tax-compute/report", json=CHINA_STUDENT)

    stats = client.get(f"{API}/metrics").json()["metrics"]["timing_stats"]["tax_report"]
    assert stats["count"] == 1
    assert stats["min_ms"] <= stats["avg_ms"] <= stats["max_ms"]
