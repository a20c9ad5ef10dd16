"""Integration tests for API endpoints"""

import logging
from decimal import Decimal
from unittest.mock import patch
from fastapi.testclient import TestClient
from amortisation_service.domain.strategies.reducing_balance import ReducingBalanceStrategy


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient, home_loan_payload: dict):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/amortisation/calculate", json=home_loan_payload)

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "amortisation_calculation_total" in response.text


def test_calculate_endpoint(client: TestClient, home_loan_payload: dict):
    """Test POST /v1/amortisation/calculate returns a full schedule"""
    response = client.post("/v1/amortisation/calculate", json=home_loan_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["loan_id"] == "LN-2001"
    assert data["calculation_method"] == "REDUCING_BALANCE"
    assert data["installment_count"] == 240
    assert len(data["schedule"]) == 240
    assert data["schedule"][0]["due_date"] == "2024-02-01"
    assert Decimal(data["schedule"][-1]["closing_balance"]) == Decimal("0")
    assert Decimal(data["total_payment"]) == Decimal("1000000") + Decimal(data["total_interest"])
    assert data["cached"] is False
    assert data["request_id"] == response.headers["X-Request-ID"]
    assert "Regulatory Version: RBI-2024-v1" in data["audit_trail"]


def test_calculate_reuses_caller_request_id(client: TestClient, home_loan_payload: dict):
    """Test X-Request-ID from the caller is echoed back"""
    response = client.post(
        "/v1/amortisation/calculate",
        json=home_loan_payload,
        headers={"X-Request-ID": "trace-123"},
    )

    assert response.headers["X-Request-ID"] == "trace-123"
    assert response.json()["request_id"] == "trace-123"


def test_calculate_accepts_json_numbers(client: TestClient, home_loan_payload: dict):
    """Test numeric JSON values are read as exact decimals"""
    payload = dict(home_loan_payload, principal=120000, interest_rate=0, tenure=12)
    response = client.post("/v1/amortisation/calculate", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["emi"]) == Decimal("10000.00")
    assert Decimal(data["total_interest"]) == Decimal("0")


def test_calculate_validation_errors(client: TestClient, home_loan_payload: dict):
    """Test domain validation failures map to 400"""
    cases = [
        ({"tenure": 361}, "360"),
        ({"principal": "0"}, "Principal"),
        ({"interest_rate": "-1"}, "Interest rate"),
        ({"loan_id": ""}, "Loan ID"),
        ({"amortisation_method": "BALLOON"}, "Amortisation method"),
        ({"amortisation_method": "DAILY_REDUCING"}, "not supported"),
    ]
    for overrides, fragment in cases:
        response = client.post("/v1/amortisation/calculate", json=dict(home_loan_payload, **overrides))

        assert response.status_code == 400, overrides
        assert fragment in response.json()["detail"]


def test_calculate_malformed_body(client: TestClient, home_loan_payload: dict):
    """Test unparseable fields are bad input too"""
    response = client.post(
        "/v1/amortisation/calculate",
        json=dict(home_loan_payload, principal="lots", start_date="not-a-date"),
    )

    assert response.status_code == 400
    assert "detail" in response.json()


def test_calculate_rejects_overlong_loan_id(client: TestClient, home_loan_payload: dict):
    """Test loan ids longer than the stored column are bad input"""
    response = client.post("/v1/amortisation/calculate", json=dict(home_loan_payload, loan_id="L" * 65))

    assert response.status_code == 400
    assert "loan_id" in response.json()["detail"]


def test_calculate_unknown_product_type(client: TestClient, home_loan_payload: dict):
    """Test product type outside the enumeration is rejected"""
    response = client.post(
        "/v1/amortisation/calculate",
        json=dict(home_loan_payload, product_type="YACHT_LOAN"),
    )

    assert response.status_code == 400


@patch.object(ReducingBalanceStrategy, "_calculate", side_effect=ArithmeticError("overflow"))
def test_calculate_internal_failure(mock_calculate, client: TestClient, home_loan_payload: dict):
    """Test calculation faults map to 500 and nothing is cached"""
    response = client.post("/v1/amortisation/calculate", json=home_loan_payload)

    assert response.status_code == 500
    assert mock_calculate.called
    assert client.get("/v1/amortisation/schedule/LN-2001").status_code == 404


@patch.object(ReducingBalanceStrategy, "_calculate", side_effect=ArithmeticError("overflow"))
def test_calculate_failure_logged_once_as_error(mock_calculate, client: TestClient, home_loan_payload: dict, caplog):
    """Test a calculation fault produces one error record and a route warning"""
    caplog.set_level(logging.WARNING)
    client.post("/v1/amortisation/calculate", json=home_loan_payload)

    errors = [record for record in caplog.records if record.levelname == "ERROR"]
    warnings = [record for record in caplog.records if record.levelname == "WARNING"]
    assert len(errors) == 1
    assert errors[0].loan_id == "LN-2001"
    assert any(getattr(record, "loan_id", None) == "LN-2001" for record in warnings)


def test_get_schedule_endpoint(client: TestClient, home_loan_payload: dict):
    """Test GET /v1/amortisation/schedule/{loan_id} returns the cached copy"""
    calculated = client.post("/v1/amortisation/calculate", json=home_loan_payload).json()

    response = client.get("/v1/amortisation/schedule/LN-2001")

    assert response.status_code == 200
    data = response.json()
    assert data["cached"] is True
    assert data["loan_id"] == "LN-2001"
    assert Decimal(data["emi"]) == Decimal(calculated["emi"])
    assert Decimal(data["total_interest"]) == Decimal(calculated["total_interest"])
    assert data["installment_count"] == 240
    assert data["schedule"][0]["payment_status"] == "scheduled"
    assert data["audit_trail"] == calculated["audit_trail"]


def test_recalculation_replaces_cached_schedule(client: TestClient, home_loan_payload: dict):
    """Test the latest calculation for a loan wins"""
    client.post("/v1/amortisation/calculate", json=home_loan_payload)
    client.post("/v1/amortisation/calculate", json=dict(home_loan_payload, tenure=120))

    data = client.get("/v1/amortisation/schedule/LN-2001").json()

    assert data["installment_count"] == 120


def test_get_schedule_not_found(client: TestClient):
    """Test GET /v1/amortisation/schedule/{loan_id} for an unknown loan"""
    response = client.get("/v1/amortisation/schedule/LN-UNKNOWN")
    assert response.status_code == 404
