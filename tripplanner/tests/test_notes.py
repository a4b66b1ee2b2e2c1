"""
Tests for trip note endpoints.
"""


def test_note_crud_and_statistics(client, auth_headers, trip):
    """Test notes with type counts."""
    url = f"/trips/{trip['id']}/notes"
    created = client.post(url, json={"title": "Tram", "content": "Buy a Viva Viagem card"}, headers=auth_headers)
    assert created.status_code == 201
    assert created.json()["type"] == "GENERAL"
    client.post(url, json={"content": "Book Belem tickets", "type": "REMINDER"}, headers=auth_headers)

    listed = client.get(url, headers=auth_headers).json()
    assert listed["statistics"] == {"total": 2, "recent": 2, "by_type": {"GENERAL": 1, "REMINDER": 1}}

    searched = client.get(url, params={"search": "viva"}, headers=auth_headers).json()
    assert [n["title"] for n in searched["items"]] == ["Tram"]

    note_id = created.json()["id"]
    updated = client.put(f"{url}/{note_id}", json={"type": "IMPORTANT"}, headers=auth_headers)
    assert updated.json()["type"] == "IMPORTANT"

    assert client.delete(f"{url}/{note_id}", headers=auth_headers).json() == {"message": "Note deleted successfully"}
    assert client.get(f"{url}/{note_id}", headers=auth_headers).status_code == 404


def test_note_requires_content(client, auth_headers, trip):
    """Test that empty notes are refused."""
    response = client.post(f"/trips/{trip['id']}/notes", json={"content": ""}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "content"
