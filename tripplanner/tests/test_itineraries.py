"""
Tests for activity, itinerary and scheduled activity endpoints.
"""
import pytest


@pytest.fixture
def trip_url(trip):
    return f"/trips/{trip['id']}"


@pytest.fixture
def make_itinerary(client, auth_headers, trip_url):
    def _make(day="2025-06-02", activities=()):
        response = client.post(
            f"{trip_url}/itineraries",
            json={"date": day, "activities": [{"activity_id": a["id"]} for a in activities]},
            headers=auth_headers,
        )
        assert response.status_code == 201
        return response.json()
    return _make


def orders(client, headers, trip_url, itinerary_id):
    response = client.get(f"{trip_url}/itineraries/{itinerary_id}/activities", headers=headers)
    assert response.status_code == 200
    return [(row["activity"]["name"], row["order"]) for row in response.json()]


def test_activity_crud(client, auth_headers, trip_url, make_activity):
    """Test the activity catalog."""
    activity = make_activity(price="15.00", currency="EUR", website_url="https://www.torrebelem.pt")
    assert activity["itinerary_count"] == 0

    updated = client.put(
        f"{trip_url}/activities/{activity['id']}",
        json={"rating": 5, "website_url": ""},
        headers=auth_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["rating"] == 5
    assert updated.json()["website_url"] is None

    listed = client.get(f"{trip_url}/activities", params={"category": "CULTURAL"}, headers=auth_headers)
    assert listed.json()["pagination"]["total"] == 1


def test_activity_delete_blocked_while_scheduled(client, auth_headers, trip_url, make_activity, make_itinerary):
    """Test that a scheduled activity cannot be deleted and the count is reported."""
    activity = make_activity()
    make_itinerary("2025-06-02", [activity])
    make_itinerary("2025-06-03", [activity])

    response = client.delete(f"{trip_url}/activities/{activity['id']}", headers=auth_headers)
    assert response.status_code == 400
    body = response.json()
    assert body["count"] == 2
    assert body["message"] == "Activity is used in 2 itineraries and cannot be deleted"


def test_activity_delete_when_unused(client, auth_headers, trip_url, make_activity):
    """Test deleting an activity nobody schedules."""
    activity = make_activity()
    response = client.delete(f"{trip_url}/activities/{activity['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert client.get(f"{trip_url}/activities/{activity['id']}", headers=auth_headers).status_code == 404


def test_itinerary_date_unique(client, auth_headers, trip_url, make_itinerary):
    """Test one itinerary per day."""
    make_itinerary("2025-06-02")
    response = client.post(f"{trip_url}/itineraries", json={"date": "2025-06-02"}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "An itinerary already exists for this date"


def test_itinerary_date_with_time_component(client, auth_headers, trip_url, make_itinerary):
    """Test that a timestamp lands on its calendar day."""
    make_itinerary("2025-06-02")
    response = client.post(
        f"{trip_url}/itineraries", json={"date": "2025-06-02T18:30:00Z"}, headers=auth_headers
    )
    assert response.status_code == 400


def test_itinerary_date_outside_trip(client, auth_headers, trip_url):
    """Test that the day must be inside the trip."""
    response = client.post(f"{trip_url}/itineraries", json={"date": "2025-05-31"}, headers=auth_headers)
    assert response.status_code == 400


def test_itinerary_inline_activities(client, auth_headers, trip_url, make_activity, make_itinerary):
    """Test that inline activities keep the order given."""
    first = make_activity("Jeronimos Monastery")
    second = make_activity("LX Factory", "SHOPPING")
    itinerary = make_itinerary("2025-06-02", [second, first])
    assert [(a["activity"]["name"], a["order"]) for a in itinerary["activities"]] == [
        ("LX Factory", 1),
        ("Jeronimos Monastery", 2),
    ]

    listed = client.get(f"{trip_url}/itineraries", headers=auth_headers).json()
    assert listed["statistics"]["total_days"] == 1
    assert listed["statistics"]["total_activities"] == 2


def test_itinerary_inline_activity_from_other_trip(client, auth_headers, trip_url, trip_payload):
    """Test that inline activities must belong to the trip."""
    other = client.post("/trips", json=trip_payload, headers=auth_headers).json()
    foreign = client.post(
        f"/trips/{other['id']}/activities", json={"name": "Elsewhere"}, headers=auth_headers
    ).json()
    response = client.post(
        f"{trip_url}/itineraries",
        json={"date": "2025-06-02", "activities": [{"activity_id": foreign["id"]}]},
        headers=auth_headers,
    )
    assert response.status_code == 404


def test_add_and_remove_scheduled_activities(client, auth_headers, trip_url, make_activity, make_itinerary):
    """Test appending activities and closing gaps after a removal."""
    a, b, c = make_activity("A"), make_activity("B"), make_activity("C")
    itinerary = make_itinerary("2025-06-04")
    base = f"{trip_url}/itineraries/{itinerary['id']}/activities"

    ids = []
    for activity in (a, b, c):
        response = client.post(base, json={"activity_id": activity["id"]}, headers=auth_headers)
        assert response.status_code == 201
        ids.append(response.json()["id"])
    assert orders(client, auth_headers, trip_url, itinerary["id"]) == [("A", 1), ("B", 2), ("C", 3)]

    duplicate = client.post(base, json={"activity_id": a["id"]}, headers=auth_headers)
    assert duplicate.status_code == 400

    removed = client.delete(f"{base}/{ids[1]}", headers=auth_headers)
    assert removed.json() == {"message": "Activity removed from itinerary"}
    assert orders(client, auth_headers, trip_url, itinerary["id"]) == [("A", 1), ("C", 2)]


def test_remove_last_scheduled_activity(client, auth_headers, trip_url, make_activity, make_itinerary):
    """Test that removing the only activity leaves an empty day."""
    itinerary = make_itinerary("2025-06-05", [make_activity()])
    item_id = itinerary["activities"][0]["id"]
    response = client.delete(
        f"{trip_url}/itineraries/{itinerary['id']}/activities/{item_id}", headers=auth_headers
    )
    assert response.status_code == 200
    assert orders(client, auth_headers, trip_url, itinerary["id"]) == []


def test_reorder_scheduled_activities(client, auth_headers, trip_url, make_activity, make_itinerary):
    """Test moving the last activity to the front."""
    itinerary = make_itinerary("2025-06-06", [make_activity("A"), make_activity("B"), make_activity("C")])
    last = itinerary["activities"][2]["id"]
    base = f"{trip_url}/itineraries/{itinerary['id']}/activities"

    response = client.put(f"{base}/reorder", json={"items": [{"id": last, "order": 1}]}, headers=auth_headers)
    assert response.status_code == 200
    assert [(row["activity"]["name"], row["order"]) for row in response.json()] == [("C", 1), ("A", 2), ("B", 3)]

    unknown = client.put(f"{base}/reorder", json={"items": [{"id": 9999, "order": 1}]}, headers=auth_headers)
    assert unknown.status_code == 404


def test_update_scheduled_activity_times(client, auth_headers, trip_url, make_activity, make_itinerary):
    """Test that an item's end time must follow its start time."""
    itinerary = make_itinerary("2025-06-07", [make_activity()])
    url = f"{trip_url}/itineraries/{itinerary['id']}/activities/{itinerary['activities'][0]['id']}"

    response = client.put(url, json={"start_time": "09:00", "end_time": "11:30"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["start_time"] == "09:00:00"

    response = client.put(url, json={"start_time": "12:00"}, headers=auth_headers)
    assert response.status_code == 400


def test_delete_itinerary_cascades(client, auth_headers, trip_url, make_activity, make_itinerary):
    """Test that deleting a day frees its activities for deletion."""
    activity = make_activity()
    itinerary = make_itinerary("2025-06-08", [activity])
    response = client.delete(f"{trip_url}/itineraries/{itinerary['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert client.delete(f"{trip_url}/activities/{activity['id']}", headers=auth_headers).status_code == 200


def test_category_distribution_counts_each_activity_once(client, auth_headers, trip_url, make_activity, make_itinerary):
    """Test that an activity scheduled on two days counts once in the distribution."""
    activity = make_activity()
    make_itinerary("2025-06-02", [activity])
    make_itinerary("2025-06-03", [activity])

    statistics = client.get(f"{trip_url}/itineraries", headers=auth_headers).json()["statistics"]
    assert statistics["total_days"] == 2
    assert statistics["total_activities"] == 2
    assert statistics["category_distribution"] == [{"category": "CULTURAL", "count": 1}]


def test_move_itinerary_to_taken_or_outside_day(client, auth_headers, trip_url, make_itinerary):
    """Test that moving a day re-checks uniqueness and the trip range."""
    make_itinerary("2025-06-02")
    itinerary = make_itinerary("2025-06-03")
    url = f"{trip_url}/itineraries/{itinerary['id']}"

    taken = client.put(url, json={"date": "2025-06-02"}, headers=auth_headers)
    assert taken.status_code == 400
    assert taken.json()["message"] == "An itinerary already exists for this date"

    outside = client.put(url, json={"date": "2025-06-11"}, headers=auth_headers)
    assert outside.status_code == 400

    same_day = client.put(url, json={"date": "2025-06-03", "notes": "Sintra"}, headers=auth_headers)
    assert same_day.status_code == 200
    assert same_day.json()["notes"] == "Sintra"


def test_filter_itineraries_by_date(client, auth_headers, trip_url, make_itinerary):
    """Test the date filter on the itinerary list."""
    make_itinerary("2025-06-02")
    make_itinerary("2025-06-04")
    response = client.get(f"{trip_url}/itineraries", params={"date": "2025-06-04"}, headers=auth_headers)
    assert response.status_code == 200
    assert [i["date"] for i in response.json()["items"]] == ["2025-06-04"]
