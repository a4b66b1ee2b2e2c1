"""
Tests that every field sent on create reads back unchanged.
"""
import pytest

AMOUNT_FIELDS = {"price", "price_per_night", "total_price", "planned_amount", "amount"}


def assert_reads_back(sent, stored):
    for field, value in sent.items():
        if field in AMOUNT_FIELDS:
            assert float(stored[field]) == float(value), field
        else:
            assert stored[field] == value, field


@pytest.fixture
def trip_url(trip):
    return f"/trips/{trip['id']}"


@pytest.fixture
def create_and_fetch(client, auth_headers, trip_url):
    def _round_trip(resource, payload):
        created = client.post(f"{trip_url}/{resource}", json=payload, headers=auth_headers)
        assert created.status_code == 201
        fetched = client.get(f"{trip_url}/{resource}/{created.json()['id']}", headers=auth_headers)
        assert fetched.status_code == 200
        assert_reads_back(payload, created.json())
        assert_reads_back(payload, fetched.json())
        return fetched.json()
    return _round_trip


def test_trip_round_trip(client, auth_headers, trip_payload):
    payload = dict(trip_payload, cover_image_url="https://img.tripmail.com/lisbon.jpg")
    created = client.post("/trips", json=payload, headers=auth_headers).json()
    fetched = client.get(f"/trips/{created['id']}", headers=auth_headers).json()
    assert_reads_back(payload, fetched)


def test_activity_round_trip(create_and_fetch):
    create_and_fetch("activities", {
        "name": "Fado night",
        "category": "ENTERTAINMENT",
        "address": "Rua de Sao Miguel 1",
        "latitude": 38.711,
        "longitude": -9.13,
        "price": "35.00",
        "currency": "EUR",
        "duration_hours": 2.5,
        "opening_hours": "20:00-23:00",
        "website_url": "https://fado.tripmail.com",
        "phone": "+351 21 000 0000",
        "notes": "Dinner included",
        "rating": 4,
    })


def test_transportation_round_trip(create_and_fetch):
    create_and_fetch("transportation", {
        "type": "TRAIN",
        "company": "CP",
        "departure_location": "Lisbon Santa Apolonia",
        "arrival_location": "Porto Campanha",
        "departure_datetime": "2025-06-06T09:00:00",
        "arrival_datetime": "2025-06-06T11:50:00",
        "confirmation_code": "CP-4411",
        "price": "31.20",
        "currency": "EUR",
        "notes": "Seat 42",
    })


def test_accommodation_round_trip(create_and_fetch):
    create_and_fetch("accommodation", {
        "name": "Alfama Loft",
        "type": "APARTMENT",
        "address": "Beco do Carneiro 3",
        "latitude": 38.712,
        "longitude": -9.128,
        "check_in_date": "2025-06-01",
        "check_out_date": "2025-06-06",
        "price_per_night": "110.00",
        "total_price": "550.00",
        "currency": "EUR",
        "booking_url": "https://stays.tripmail.com/alfama",
        "confirmation_code": "AL-99",
        "rating": 5,
        "notes": "Key box code by email",
    })


def test_budget_round_trip(create_and_fetch):
    create_and_fetch("budgets", {
        "category": "ACTIVITIES",
        "planned_amount": "250.00",
        "currency": "EUR",
        "notes": "Museums and tours",
    })


def test_expense_round_trip(create_and_fetch):
    budget = create_and_fetch("budgets", {"category": "FOOD", "planned_amount": "300.00", "currency": "EUR"})
    create_and_fetch("expenses", {
        "description": "Seafood lunch",
        "amount": "48.60",
        "currency": "EUR",
        "date": "2025-06-04",
        "category": "Meals",
        "location": "Cervejaria Ramiro",
        "receipt_url": "https://receipts.tripmail.com/r/1",
        "notes": "Shared with Bob",
        "budget_id": budget["id"],
    })


def test_document_round_trip(create_and_fetch):
    create_and_fetch("documents", {
        "name": "Travel insurance",
        "type": "INSURANCE",
        "file_url": "/uploads/insurance.pdf",
        "file_type": "application/pdf",
        "file_size": 51200,
        "expiry_date": "2030-01-15T12:00:00",
        "notes": "Policy 12345",
    })


def test_photo_round_trip(create_and_fetch):
    create_and_fetch("photos", {
        "file_url": "/uploads/tram.jpg",
        "thumbnail_url": "/uploads/tram-thumb.jpg",
        "caption": "Tram 28",
        "taken_at": "2025-06-03T16:20:00",
        "latitude": 38.713,
        "longitude": -9.133,
    })


def test_note_round_trip(create_and_fetch):
    create_and_fetch("notes", {"title": "Packing", "content": "Adapters and sunscreen", "type": "REMINDER"})


def test_itinerary_round_trip(create_and_fetch):
    create_and_fetch("itineraries", {"date": "2025-06-07", "notes": "Day trip to Sintra"})
