"""Integration tests for API endpoints"""

import pytest
from datetime import datetime
from unittest.mock import patch
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from finance_tracker.api.dependencies import get_now


def create_transaction(client: TestClient, amount: float, date: str, category: str = "food", description: str = "Test"):
    response = client.post(
        "/v1/transactions",
        json={"amount": amount, "date": date, "description": description, "category": category},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def seeded_client(client: TestClient) -> TestClient:
    """Current month is March 2025 (pinned in conftest)"""
    create_transaction(client, -150.0, "2025-03-02T10:00:00", "food", "Groceries")
    create_transaction(client, -40.0, "2025-03-08T18:30:00", "transportation", "Fuel")
    create_transaction(client, -100.0, "2025-02-11T09:00:00", "food", "Restaurant")
    create_transaction(client, -60.0, "2025-01-20T12:00:00", "shopping", "Shoes")
    create_transaction(client, 2500.0, "2025-03-01T08:00:00", "other", "Salary")
    return client


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "finance_transaction_writes_total" in response.text


def test_request_id_header(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"
    assert client.get("/health").headers["X-Request-ID"]


def test_create_transaction(client: TestClient):
    data = create_transaction(client, -12.5, "2025-03-03T12:00:00", "food", "Coffee")

    assert data["id"]
    assert data["amount"] == -12.5
    assert data["description"] == "Coffee"
    assert data["category"] == "food"
    assert "createdAt" in data
    assert "updatedAt" in data


def test_create_transaction_rejects_zero_amount(client: TestClient):
    response = client.post(
        "/v1/transactions",
        json={"amount": 0, "date": "2025-03-03T12:00:00", "description": "Nothing", "category": "food"},
    )
    assert response.status_code == 422


def test_create_transaction_rejects_missing_fields(client: TestClient):
    response = client.post("/v1/transactions", json={"amount": -5, "category": "food"})
    assert response.status_code == 422


def test_list_transactions_newest_first(seeded_client: TestClient):
    response = seeded_client.get("/v1/transactions")

    assert response.status_code == 200
    dates = [t["date"] for t in response.json()]
    assert len(dates) == 5
    assert dates == sorted(dates, reverse=True)


def test_list_transactions_limit(seeded_client: TestClient):
    assert len(seeded_client.get("/v1/transactions?limit=2").json()) == 2
    assert seeded_client.get("/v1/transactions?limit=0").status_code == 422


def test_update_transaction(client: TestClient):
    created = create_transaction(client, -20.0, "2025-03-04T12:00:00", "food", "Lunch")

    response = client.put(
        f"/v1/transactions/{created['id']}",
        json={"amount": -35.0, "date": "2025-03-05T12:00:00", "description": "Dinner", "category": "entertainment"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == created["id"]
    assert data["amount"] == -35.0
    assert data["description"] == "Dinner"
    assert data["category"] == "entertainment"


def test_update_transaction_not_found(client: TestClient):
    fake_uuid = "00000000-0000-0000-0000-000000000000"
    response = client.put(
        f"/v1/transactions/{fake_uuid}",
        json={"amount": -1.0, "date": "2025-03-05T12:00:00", "description": "x", "category": "food"},
    )
    assert response.status_code == 404


def test_delete_transaction(client: TestClient):
    created = create_transaction(client, -20.0, "2025-03-04T12:00:00")

    response = client.delete(f"/v1/transactions/{created['id']}")
    assert response.status_code == 204
    assert client.get("/v1/transactions").json() == []

    # Second delete reports not-found, not a validation error
    assert client.delete(f"/v1/transactions/{created['id']}").status_code == 404


def test_delete_transaction_invalid_id(client: TestClient):
    response = client.delete("/v1/transactions/not-a-uuid")
    assert response.status_code == 400


def test_summary(seeded_client: TestClient):
    response = seeded_client.get("/v1/transactions/summary")

    assert response.status_code == 200
    data = response.json()
    assert data["totalExpenses"] == 350.0
    assert data["monthlyExpenses"] == 190.0
    assert data["transactionCount"] == 4
    assert data["topCategory"] == {"category": "food", "amount": 250.0}


def test_summary_empty(client: TestClient):
    data = client.get("/v1/transactions/summary").json()
    assert data["totalExpenses"] == 0
    assert data["transactionCount"] == 0
    assert data["topCategory"] is None


def test_category_breakdown(seeded_client: TestClient):
    data = seeded_client.get("/v1/transactions/categories").json()

    assert [c["category"] for c in data] == ["food", "shopping", "transportation"]
    assert sum(c["amount"] for c in data) == 350.0
    assert sum(c["percentage"] for c in data) == pytest.approx(100.0)


def test_monthly_trend(seeded_client: TestClient):
    data = seeded_client.get("/v1/transactions/monthly").json()

    assert len(data) == 6
    assert data[0]["month"] == "Oct 2024"
    assert data[-1] == {"month": "Mar 2025", "totalExpense": 190.0}
    assert data[-2]["totalExpense"] == 100.0
    assert data[-3]["totalExpense"] == 60.0


def test_save_and_list_budgets(client: TestClient):
    response = client.post(
        "/v1/budgets",
        json={"budgets": [{"category": "food", "amount": 300}, {"category": "bills", "amount": 150}]},
    )
    assert response.status_code == 200
    assert response.json() == {"success": True}

    budgets = client.get("/v1/budgets").json()
    assert budgets == [{"category": "food", "amount": 300.0}, {"category": "bills", "amount": 150.0}]


def test_save_budgets_replaces_whole_set(client: TestClient):
    client.post("/v1/budgets", json={"budgets": [{"category": "food", "amount": 300}]})
    client.post("/v1/budgets", json={"budgets": [{"category": "travel", "amount": 500}]})

    assert client.get("/v1/budgets").json() == [{"category": "travel", "amount": 500.0}]

    client.post("/v1/budgets", json={"budgets": []})
    assert client.get("/v1/budgets").json() == []


def test_save_budgets_rejects_invalid(client: TestClient):
    negative = client.post("/v1/budgets", json={"budgets": [{"category": "food", "amount": -1}]})
    duplicate = client.post(
        "/v1/budgets",
        json={"budgets": [{"category": "food", "amount": 10}, {"category": "food", "amount": 20}]},
    )
    missing = client.post("/v1/budgets", json={})

    assert negative.status_code == 422
    assert duplicate.status_code == 422
    assert missing.status_code == 422


def test_no_budgets_returns_empty_collections(seeded_client: TestClient):
    for path in ("/v1/budgets/progress", "/v1/budgets/comparison", "/v1/budgets/insights"):
        response = seeded_client.get(path)
        assert response.status_code == 200
        assert response.json() == []


def test_budget_progress(seeded_client: TestClient):
    seeded_client.post(
        "/v1/budgets",
        json={"budgets": [{"category": "food", "amount": 100}, {"category": "transportation", "amount": 50}, {"category": "bills", "amount": 80}]},
    )

    data = seeded_client.get("/v1/budgets/progress").json()

    assert [(p["category"], p["status"]) for p in data] == [
        ("food", "over"),
        ("transportation", "near"),
        ("bills", "under"),
    ]
    assert data[0]["spent"] == 150.0
    assert data[0]["percentage"] == pytest.approx(150.0)
    assert data[2]["spent"] == 0


def test_budget_comparison(seeded_client: TestClient):
    seeded_client.post("/v1/budgets", json={"budgets": [{"category": "food", "amount": 200}]})

    data = seeded_client.get("/v1/budgets/comparison").json()

    # transportation has spending but no budget, so it is left out
    assert data == [{"category": "food", "budgeted": 200.0, "actual": 150.0}]


def test_budget_insights(seeded_client: TestClient):
    seeded_client.post("/v1/budgets", json={"budgets": [{"category": "food", "amount": 100}]})

    data = seeded_client.get("/v1/budgets/insights").json()

    # 150 this month vs 100 last month: exceeded, and up 50%
    assert [i["kind"] for i in data] == ["danger", "info"]
    assert "150.00" in data[0]["description"]
    assert "150.0%" in data[0]["description"]
    assert "increased by 50.0%" in data[1]["description"]


def test_categories_registry(client: TestClient):
    data = client.get("/v1/categories").json()
    assert data[0] == {"id": "food", "name": "Food & Dining", "color": "#FF6B6B", "icon": "🍽️"}
    assert data[-1]["id"] == "other"


def test_unknown_category_lookup_falls_back(client: TestClient):
    response = client.get("/v1/categories/xyz")
    assert response.status_code == 200
    assert response.json()["id"] == "other"


def test_storage_failure_returns_500(client: TestClient):
    with patch(
        "finance_tracker.infrastructure.database.repositories.TransactionRepository.list_expenses",
        side_effect=OperationalError("SELECT", {}, Exception("connection refused")),
    ):
        response = client.get("/v1/transactions/summary")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


def test_storage_failure_on_write_returns_500(client: TestClient):
    with patch(
        "finance_tracker.infrastructure.database.repositories.BudgetRepository.replace_all",
        side_effect=OperationalError("DELETE", {}, Exception("connection refused")),
    ):
        response = client.post("/v1/budgets", json={"budgets": [{"category": "food", "amount": 10}]})

    assert response.status_code == 500


@pytest.mark.parametrize("amount", ["-1e309", "1e309", "NaN", "-Infinity"])
def test_create_transaction_rejects_non_finite_amount(client: TestClient, amount: str):
    body = '{"amount": %s, "date": "2025-03-03T12:00:00", "description": "Bad", "category": "food"}' % amount
    response = client.post("/v1/transactions", content=body, headers={"Content-Type": "application/json"})

    assert response.status_code == 422
    assert response.json()["detail"][0]["loc"] == ["body", "amount"]
    assert client.get("/v1/transactions").json() == []


@pytest.mark.parametrize("amount", ["1e309", "NaN", "Infinity"])
def test_save_budgets_rejects_non_finite_amount(client: TestClient, amount: str):
    body = '{"budgets": [{"category": "food", "amount": %s}]}' % amount
    response = client.post("/v1/budgets", content=body, headers={"Content-Type": "application/json"})

    assert response.status_code == 422
    assert client.get("/v1/budgets").json() == []


def test_offset_dated_transaction_counts_in_its_utc_month(client: TestClient):
    """18:00 on Mar 31 at UTC-7 is 01:00 on Apr 1 UTC"""
    client.app.dependency_overrides[get_now] = lambda: datetime(2025, 4, 1, 1, 30)
    create_transaction(client, -25.0, "2025-03-31T18:00:00-07:00", "food", "Late dinner")
    create_transaction(client, -10.0, "2025-03-31T22:00:00+00:00", "food", "Snack")

    summary = client.get("/v1/transactions/summary").json()
    monthly = client.get("/v1/transactions/monthly").json()

    assert summary["monthlyExpenses"] == 25.0
    assert monthly[-1] == {"month": "Apr 2025", "totalExpense": 25.0}
    assert monthly[-2] == {"month": "Mar 2025", "totalExpense": 10.0}


def test_offset_dated_transaction_counts_in_current_budget_month(client: TestClient):
    """00:30 on Apr 1 at UTC+2 is still March in UTC"""
    client.post("/v1/budgets", json={"budgets": [{"category": "food", "amount": 100}]})
    create_transaction(client, -90.0, "2025-04-01T00:30:00+02:00", "food", "Groceries")

    progress = client.get("/v1/budgets/progress").json()

    assert progress[0]["spent"] == 90.0
    assert progress[0]["status"] == "near"
