"""
Tests for trip endpoints.
"""
def test_create_trip(client, auth_headers, trip_payload):
    """Test trip creation defaults."""
    response = client.post("/trips", json=trip_payload, headers=auth_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "PLANNING"
    assert body["duration_days"] == 10
    assert body["counts"] == {"activities": 0, "transportation": 0, "accommodation": 0, "photos": 0}


def test_create_trip_end_before_start(client, auth_headers, trip_payload):
    """Test that the end date must come after the start date."""
    payload = dict(trip_payload, start_date="2025-06-10", end_date="2025-06-01")
    response = client.post("/trips", json=payload, headers=auth_headers)
    assert response.status_code == 400


def test_create_trip_bad_cover_url(client, auth_headers, trip_payload):
    """Test that the cover image must be an http(s) URL."""
    payload = dict(trip_payload, cover_image_url="not a url")
    response = client.post("/trips", json=payload, headers=auth_headers)
    assert response.status_code == 400


def test_list_trips_search_and_pagination(client, auth_headers, trip_payload):
    """Test listing with search and page metadata."""
    for name in ("Porto Weekend", "Madrid Break", "Porto Again"):
        client.post("/trips", json=dict(trip_payload, name=name), headers=auth_headers)

    response = client.get("/trips", params={"search": "porto", "limit": 1}, headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["pagination"] == {"page": 1, "limit": 1, "total": 2, "pages": 2}
    assert len(body["items"]) == 1


def test_list_trips_invalid_pagination(client, auth_headers):
    """Test that non-numeric or out-of-range paging is rejected."""
    assert client.get("/trips", params={"page": "abc"}, headers=auth_headers).status_code == 400
    assert client.get("/trips", params={"page": 0}, headers=auth_headers).status_code == 400
    assert client.get("/trips", params={"limit": 101}, headers=auth_headers).status_code == 400


def test_trip_detail(client, auth_headers, trip):
    """Test the trip detail view."""
    response = client.get(f"/trips/{trip['id']}", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Lisbon Summer"
    assert body["transportation"] == []
    assert body["recent_activities"] == []


def test_other_users_trip_is_not_found(client, trip, other_headers):
    """Test that a trip owned by someone else looks missing."""
    response = client.get(f"/trips/{trip['id']}", headers=other_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Trip not found"

    response = client.get(f"/trips/{trip['id']}/activities", headers=other_headers)
    assert response.status_code == 404


def test_update_trip(client, auth_headers, trip, trip_payload):
    """Test a full trip update."""
    payload = dict(trip_payload, name="Lisbon and Sintra", status="ACTIVE")
    response = client.put(f"/trips/{trip['id']}", json=payload, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Lisbon and Sintra"
    assert response.json()["status"] == "ACTIVE"


def test_delete_trip_cascades(client, auth_headers, trip, make_activity):
    """Test that deleting a trip removes its nested records."""
    activity = make_activity()
    client.post(
        f"/trips/{trip['id']}/itineraries",
        json={"date": "2025-06-02", "activities": [{"activity_id": activity["id"]}]},
        headers=auth_headers,
    )
    response = client.delete(f"/trips/{trip['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Trip deleted successfully"
    assert client.get(f"/trips/{trip['id']}", headers=auth_headers).status_code == 404
