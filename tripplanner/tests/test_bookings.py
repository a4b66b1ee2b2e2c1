"""
Tests for transportation and accommodation endpoints.
"""
import pytest


def stay(check_in, check_out, name="Casa do Rio"):
    return {"name": name, "type": "HOTEL", "check_in_date": check_in, "check_out_date": check_out}


@pytest.fixture
def trip_url(trip):
    return f"/trips/{trip['id']}"


def test_accommodation_overlap(client, auth_headers, trip_url):
    """Test half-open stays: back-to-back is fine, a shared night is not."""
    first = client.post(f"{trip_url}/accommodation", json=stay("2025-06-02", "2025-06-05"), headers=auth_headers)
    assert first.status_code == 201
    assert first.json()["nights"] == 3

    adjacent = client.post(f"{trip_url}/accommodation", json=stay("2025-06-05", "2025-06-07"), headers=auth_headers)
    assert adjacent.status_code == 201

    clash = client.post(f"{trip_url}/accommodation", json=stay("2025-06-04", "2025-06-06"), headers=auth_headers)
    assert clash.status_code == 400
    assert clash.json()["message"] == "Dates overlap with another accommodation on this trip"


def test_accommodation_containing_existing_stay(client, auth_headers, trip_url):
    """Test that a stay swallowing another one is rejected."""
    client.post(f"{trip_url}/accommodation", json=stay("2025-06-03", "2025-06-04"), headers=auth_headers)
    response = client.post(f"{trip_url}/accommodation", json=stay("2025-06-02", "2025-06-06"), headers=auth_headers)
    assert response.status_code == 400


def test_accommodation_outside_trip(client, auth_headers, trip_url):
    """Test that stays must sit inside the trip dates."""
    response = client.post(f"{trip_url}/accommodation", json=stay("2025-06-08", "2025-06-12"), headers=auth_headers)
    assert response.status_code == 400
    assert "within the trip dates" in response.json()["message"]


def test_accommodation_update_ignores_itself(client, auth_headers, trip_url):
    """Test that moving a stay is not blocked by its own dates."""
    created = client.post(f"{trip_url}/accommodation", json=stay("2025-06-02", "2025-06-05"), headers=auth_headers)
    response = client.put(
        f"{trip_url}/accommodation/{created.json()['id']}",
        json={"check_out_date": "2025-06-06"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["nights"] == 4


def test_accommodation_search(client, auth_headers, trip_url):
    """Test case-insensitive search on accommodation."""
    client.post(f"{trip_url}/accommodation", json=stay("2025-06-02", "2025-06-04", "Alfama Loft"), headers=auth_headers)
    client.post(f"{trip_url}/accommodation", json=stay("2025-06-04", "2025-06-06", "Baixa Inn"), headers=auth_headers)
    response = client.get(f"{trip_url}/accommodation", params={"search": "ALFAMA"}, headers=auth_headers)
    assert response.status_code == 200
    assert [a["name"] for a in response.json()["items"]] == ["Alfama Loft"]


def test_transportation_crud(client, auth_headers, trip_url):
    """Test creating, reading, updating and deleting a booking."""
    payload = {
        "type": "FLIGHT",
        "company": "TAP",
        "departure_location": "London",
        "arrival_location": "Lisbon",
        "departure_datetime": "2025-06-01T08:00:00Z",
        "arrival_datetime": "2025-06-01T10:45:00Z",
        "price": "120.00",
        "currency": "EUR",
    }
    created = client.post(f"{trip_url}/transportation", json=payload, headers=auth_headers)
    assert created.status_code == 201
    transport_id = created.json()["id"]

    fetched = client.get(f"{trip_url}/transportation/{transport_id}", headers=auth_headers)
    assert fetched.json()["company"] == "TAP"
    assert float(fetched.json()["price"]) == 120.0

    updated = client.put(
        f"{trip_url}/transportation/{transport_id}",
        json={"confirmation_code": "ABC123"},
        headers=auth_headers,
    )
    assert updated.json()["confirmation_code"] == "ABC123"

    deleted = client.delete(f"{trip_url}/transportation/{transport_id}", headers=auth_headers)
    assert deleted.json() == {"message": "Transportation deleted successfully"}
    assert client.get(f"{trip_url}/transportation/{transport_id}", headers=auth_headers).status_code == 404


def test_transportation_arrival_before_departure(client, auth_headers, trip_url):
    """Test that arrival must come after departure."""
    payload = {
        "type": "TRAIN",
        "departure_location": "Lisbon",
        "arrival_location": "Porto",
        "departure_datetime": "2025-06-05T12:00:00",
        "arrival_datetime": "2025-06-05T09:00:00",
    }
    response = client.post(f"{trip_url}/transportation", json=payload, headers=auth_headers)
    assert response.status_code == 400


def test_transportation_outside_trip(client, auth_headers, trip_url):
    """Test that bookings outside the trip dates are refused."""
    payload = {
        "type": "BUS",
        "departure_location": "Lisbon",
        "arrival_location": "Sintra",
        "departure_datetime": "2025-06-11T09:00:00",
        "arrival_datetime": "2025-06-11T10:00:00",
    }
    response = client.post(f"{trip_url}/transportation", json=payload, headers=auth_headers)
    assert response.status_code == 400


def test_transportation_update_arrival_before_stored_departure(client, auth_headers, trip_url):
    """Test that a lone arrival update is checked against the stored departure."""
    payload = {
        "type": "TRAIN",
        "departure_location": "Lisbon",
        "arrival_location": "Porto",
        "departure_datetime": "2025-06-05T09:00:00",
        "arrival_datetime": "2025-06-05T12:00:00",
    }
    created = client.post(f"{trip_url}/transportation", json=payload, headers=auth_headers).json()
    response = client.put(
        f"{trip_url}/transportation/{created['id']}",
        json={"arrival_datetime": "2025-06-05T08:00:00"},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Arrival must be after departure"
