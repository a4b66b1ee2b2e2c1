"""
Tests for the trip dashboard.
"""


def test_empty_dashboard(client, auth_headers, trip):
    """Test a trip with nothing planned yet."""
    response = client.get(f"/trips/{trip['id']}/dashboard", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["trip"]["duration_days"] == 10
    assert body["completion_percentage"] == 0
    assert body["progress"]["itinerary"]["target"] == 5
    assert body["stats"]["budget"]["percentage_used"] == 0


def test_dashboard_progress(client, auth_headers, trip, make_activity):
    """Test module completion and stats after some planning."""
    url = f"/trips/{trip['id']}"
    client.post(
        f"{url}/accommodation",
        json={"name": "Casa", "type": "APARTMENT", "check_in_date": "2025-06-01",
              "check_out_date": "2025-06-10", "total_price": "900.00"},
        headers=auth_headers,
    )
    client.post(f"{url}/budgets", json={"category": "FOOD", "planned_amount": "300.00", "currency": "EUR"},
                headers=auth_headers)
    client.post(f"{url}/notes", json={"content": "Pack sunscreen"}, headers=auth_headers)
    activity = make_activity()
    client.post(f"{url}/itineraries", json={"date": "2025-06-02", "activities": [{"activity_id": activity["id"]}]},
                headers=auth_headers)

    body = client.get(f"{url}/dashboard", headers=auth_headers).json()
    progress = body["progress"]
    assert progress["accommodation"]["completed"] is True
    assert progress["budget"]["completed"] is True
    assert progress["notes"]["completed"] is True
    assert progress["activities"] == {"current": 1, "target": 5, "completed": False}
    assert body["completion_percentage"] == 38
    assert float(body["stats"]["accommodation"]["total_cost"]) == 900.0
    assert body["stats"]["activities"]["scheduled"] == 1
    assert body["stats"]["itinerary"] == {"days": 1, "activities": 1, "planned_days": 1}


def test_dashboard_other_user(client, trip, other_headers):
    """Test that dashboards are private."""
    assert client.get(f"/trips/{trip['id']}/dashboard", headers=other_headers).status_code == 404
