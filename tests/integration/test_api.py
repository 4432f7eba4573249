"""Integration tests for API endpoints"""

from unittest.mock import patch
from fastapi.testclient import TestClient


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"

    generated = client.get("/health")
    assert generated.headers["X-Request-ID"]


def test_settlement_plan_endpoint(client: TestClient, trip_payload: dict):
    """Test POST /v1/settlement-plan with expenses and a recorded settlement"""
    response = client.post("/v1/settlement-plan", json=trip_payload)

    assert response.status_code == 200
    data = response.json()

    balances = {b["member"]["id"]: b for b in data["balances"]}
    assert [b["member"]["id"] for b in data["balances"]] == ["alice", "bob", "carol"]
    assert balances["alice"]["total_paid"] == 300.0
    assert balances["alice"]["total_owed"] == 170.0
    assert balances["alice"]["balance"] == 130.0
    assert balances["bob"]["balance"] == -60.0
    assert balances["carol"]["balance"] == -70.0

    # Display name falls back to email
    assert balances["bob"]["member"]["name"] == "bob@example.com"

    assert data["settled"] is False
    assert [(t["from"]["id"], t["to"]["id"], t["amount"]) for t in data["transactions"]] == [
        ("carol", "alice", 70.0),
        ("bob", "alice", 60.0),
    ]


def test_settlement_plan_all_settled(client: TestClient):
    payload = {
        "members": [{"id": "a", "name": "A"}, {"id": "b", "name": "B"}],
        "expenses": [
            {
                "amount": 100.0,
                "payer_id": "a",
                "splits": [{"member_id": "a", "amount": 50.0}, {"member_id": "b", "amount": 50.0}],
            }
        ],
        "settlements": [{"from_id": "b", "to_id": "a", "amount": 50.0}],
    }

    response = client.post("/v1/settlement-plan", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert [b["balance"] for b in data["balances"]] == [0.0, 0.0]
    assert data["transactions"] == []
    assert data["settled"] is True


def test_settlement_plan_rejects_mismatched_splits(client: TestClient, trip_payload: dict):
    trip_payload["expenses"][1]["splits"][0]["amount"] = 5.0

    response = client.post("/v1/settlement-plan", json=trip_payload)

    assert response.status_code == 422
    assert "Splits must sum to total amount" in response.json()["detail"]


def test_settlement_plan_rejects_duplicate_members(client: TestClient):
    payload = {"members": [{"id": "a", "name": "A"}, {"id": "a", "name": "Again"}]}

    response = client.post("/v1/settlement-plan", json=payload)

    assert response.status_code == 422


def test_settlement_plan_rejects_duplicate_split_members(client: TestClient, trip_payload: dict):
    """A member can only be charged once per expense"""
    trip_payload["expenses"][1]["splits"] = [
        {"member_id": "bob", "amount": 30.0},
        {"member_id": "bob", "amount": 30.0},
    ]

    response = client.post("/v1/settlement-plan", json=trip_payload)

    assert response.status_code == 422


def test_settlement_plan_rejects_non_positive_amount(client: TestClient, trip_payload: dict):
    trip_payload["expenses"][0]["amount"] = 0

    response = client.post("/v1/settlement-plan", json=trip_payload)

    assert response.status_code == 422


def test_settlement_plan_ignores_unknown_members(client: TestClient):
    """Unknown payer is excluded from balances and counted in metrics"""
    payload = {
        "members": [{"id": "a", "name": "A"}, {"id": "b", "name": "B"}],
        "expenses": [
            {
                "amount": 40.0,
                "payer_id": "ghost",
                "splits": [{"member_id": "a", "amount": 20.0}, {"member_id": "b", "amount": 20.0}],
            }
        ],
    }

    response = client.post("/v1/settlement-plan", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert [b["balance"] for b in data["balances"]] == [-20.0, -20.0]
    assert data["transactions"] == []

    metrics = client.get("/metrics").text
    assert 'groupsplit_unknown_member_references_total{source="payer"}' in metrics


def test_metrics_endpoint(client: TestClient, trip_payload: dict):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/settlement-plan", json=trip_payload)

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "groupsplit_settlement_plan_total" in response.text
    assert "groupsplit_suggested_transactions" in response.text


def test_balances_endpoint(client: TestClient, trip_payload: dict):
    """Test POST /v1/balances"""
    response = client.post("/v1/balances", json=trip_payload)

    assert response.status_code == 200
    balances = response.json()["balances"]
    assert [b["balance"] for b in balances] == [130.0, -60.0, -70.0]
    assert sum(b["balance"] for b in balances) == 0.0


@patch("groupsplit.api.v1.plan.calculate_balances", side_effect=RuntimeError("boom"))
def test_balances_endpoint_unexpected_error(mock_calculate, client: TestClient, trip_payload: dict):
    """Unexpected failures are logged and returned as 500"""
    response = client.post("/v1/balances", json=trip_payload)

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"
    mock_calculate.assert_called_once()


def test_balances_endpoint_empty_group(client: TestClient):
    response = client.post("/v1/balances", json={"members": []})

    assert response.status_code == 200
    assert response.json()["balances"] == []


def test_simplify_endpoint(client: TestClient):
    """Test POST /v1/debts/simplify"""
    payload = {
        "balances": [
            {"member": {"id": "a", "name": "A"}, "balance": 60.0},
            {"member": {"id": "b", "name": "B"}, "balance": -30.0},
            {"member": {"id": "c", "name": "C"}, "balance": -30.0},
        ]
    }

    response = client.post("/v1/debts/simplify", json=payload)

    assert response.status_code == 200
    transactions = response.json()["transactions"]
    assert [(t["from"]["name"], t["to"]["name"], t["amount"]) for t in transactions] == [
        ("B", "A", 30.0),
        ("C", "A", 30.0),
    ]


def test_splits_endpoint_equal(client: TestClient):
    """Test POST /v1/splits"""
    response = client.post(
        "/v1/splits",
        json={"amount": 100.0, "split_type": "equal", "member_ids": ["a", "b", "c"]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["split_type"] == "equal"
    assert [s["amount"] for s in data["splits"]] == [33.33, 33.33, 33.34]


def test_splits_endpoint_percentage_invalid(client: TestClient):
    response = client.post(
        "/v1/splits",
        json={"amount": 100.0, "split_type": "percentage", "values": {"a": 50, "b": 40}},
    )

    assert response.status_code == 422
    assert "Percentages must sum to 100%" in response.json()["detail"]


def test_splits_endpoint_unknown_type(client: TestClient):
    response = client.post(
        "/v1/splits",
        json={"amount": 100.0, "split_type": "thirds", "member_ids": ["a"]},
    )

    assert response.status_code == 422
