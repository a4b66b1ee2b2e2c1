"""
Tests for budget and expense endpoints.
"""
import pytest


@pytest.fixture
def trip_url(trip):
    return f"/trips/{trip['id']}"


def make_budget(client, headers, trip_url, category="FOOD", planned="500.00", currency="EUR"):
    response = client.post(
        f"{trip_url}/budgets",
        json={"category": category, "planned_amount": planned, "currency": currency},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


def make_expense(client, headers, trip_url, amount="40.00", category="Dinner", **extra):
    payload = {
        "description": "Pasteis and coffee",
        "amount": amount,
        "currency": "EUR",
        "date": "2025-06-03",
        "category": category,
        **extra,
    }
    return client.post(f"{trip_url}/expenses", json=payload, headers=headers)


def test_duplicate_budget_category(client, auth_headers, trip_url):
    """Test one budget per category per trip."""
    make_budget(client, auth_headers, trip_url)
    response = client.post(
        f"{trip_url}/budgets",
        json={"category": "FOOD", "planned_amount": "100.00", "currency": "EUR"},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "A budget for category FOOD already exists for this trip"


def test_empty_budget_summary(client, auth_headers, trip_url):
    """Test that an empty plan reports zero percent used."""
    response = client.get(f"{trip_url}/budgets", headers=auth_headers)
    assert response.status_code == 200
    summary = response.json()["summary"]
    assert float(summary["total_planned"]) == 0
    assert summary["percentage_used"] == 0
    assert summary["mixed_currencies"] is False


def test_budget_actuals(client, auth_headers, trip_url):
    """Test that linked expenses roll up into the budget."""
    budget = make_budget(client, auth_headers, trip_url, planned="200.00")
    make_expense(client, auth_headers, trip_url, amount="50.00", budget_id=budget["id"])
    make_expense(client, auth_headers, trip_url, amount="30.00")

    listed = client.get(f"{trip_url}/budgets", headers=auth_headers).json()
    assert float(listed["items"][0]["actual_amount"]) == 50.0
    assert listed["items"][0]["expense_count"] == 1
    assert float(listed["summary"]["remaining"]) == 150.0
    assert listed["summary"]["percentage_used"] == 25.0

    detail = client.get(f"{trip_url}/budgets/{budget['id']}", headers=auth_headers).json()
    assert len(detail["expenses"]) == 1


def test_mixed_currency_flag(client, auth_headers, trip_url):
    """Test that summaries flag totals spanning currencies."""
    make_budget(client, auth_headers, trip_url, category="FOOD", currency="EUR")
    make_budget(client, auth_headers, trip_url, category="SHOPPING", currency="USD")
    summary = client.get(f"{trip_url}/budgets", headers=auth_headers).json()["summary"]
    assert summary["currencies"] == ["EUR", "USD"]
    assert summary["mixed_currencies"] is True


def test_delete_budget_unlinks_expenses(client, auth_headers, trip_url):
    """Test that expenses survive their budget."""
    budget = make_budget(client, auth_headers, trip_url)
    expense = make_expense(client, auth_headers, trip_url, budget_id=budget["id"]).json()
    assert expense["budget"]["category"] == "FOOD"

    response = client.delete(f"{trip_url}/budgets/{budget['id']}", headers=auth_headers)
    assert response.status_code == 200

    fetched = client.get(f"{trip_url}/expenses/{expense['id']}", headers=auth_headers)
    assert fetched.status_code == 200
    assert fetched.json()["budget_id"] is None
    assert fetched.json()["budget"] is None


def test_expense_budget_from_other_trip(client, auth_headers, trip_url, trip_payload):
    """Test that an expense cannot point at another trip's budget."""
    other_trip = client.post("/trips", json=trip_payload, headers=auth_headers).json()
    foreign = make_budget(client, auth_headers, f"/trips/{other_trip['id']}")
    response = make_expense(client, auth_headers, trip_url, budget_id=foreign["id"])
    assert response.status_code == 404
    assert response.json()["message"] == "Budget not found"


def test_expense_outside_trip(client, auth_headers, trip_url):
    """Test that expense dates must sit inside the trip."""
    response = make_expense(client, auth_headers, trip_url, date="2025-07-01")
    assert response.status_code == 400


def test_expense_summary(client, auth_headers, trip_url):
    """Test per-category totals."""
    make_expense(client, auth_headers, trip_url, amount="40.00", category="Dinner")
    make_expense(client, auth_headers, trip_url, amount="10.00", category="Dinner")
    make_expense(client, auth_headers, trip_url, amount="5.50", category="Metro")

    summary = client.get(f"{trip_url}/expenses", headers=auth_headers).json()["summary"]
    assert float(summary["total_spent"]) == 55.5
    assert summary["total_expenses"] == 3
    totals = {row["category"]: (float(row["total"]), row["count"]) for row in summary["category_totals"]}
    assert totals == {"Dinner": (50.0, 2), "Metro": (5.5, 1)}


def test_expense_unlink_budget_with_null(client, auth_headers, trip_url):
    """Test that an explicit null detaches an expense from its budget."""
    budget = make_budget(client, auth_headers, trip_url)
    expense = make_expense(client, auth_headers, trip_url, budget_id=budget["id"]).json()
    response = client.put(f"{trip_url}/expenses/{expense['id']}", json={"budget_id": None}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["budget_id"] is None


def test_change_budget_to_taken_category(client, auth_headers, trip_url):
    """Test that a budget cannot be moved onto a category already budgeted."""
    make_budget(client, auth_headers, trip_url, category="FOOD")
    shopping = make_budget(client, auth_headers, trip_url, category="SHOPPING")
    url = f"{trip_url}/budgets/{shopping['id']}"

    response = client.put(url, json={"category": "FOOD"}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "A budget for category FOOD already exists for this trip"

    unchanged = client.put(url, json={"category": "SHOPPING", "planned_amount": "80.00"}, headers=auth_headers)
    assert unchanged.status_code == 200
    assert float(unchanged.json()["planned_amount"]) == 80.0


def test_move_expense_outside_trip(client, auth_headers, trip_url):
    """Test that an expense date update is checked against the trip."""
    expense = make_expense(client, auth_headers, trip_url).json()
    response = client.put(f"{trip_url}/expenses/{expense['id']}", json={"date": "2025-05-20"}, headers=auth_headers)
    assert response.status_code == 400
    assert "within the trip dates" in response.json()["message"]
