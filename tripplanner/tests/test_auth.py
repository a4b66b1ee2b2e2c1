"""
Tests for authentication endpoints.
"""
def test_register(client):
    """Test user registration."""
    response = client.post(
        "/auth/register",
        json={"email": "carol@tripmail.com", "username": "carol", "password": "longenough1"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "carol"
    assert "hashed_password" not in body


def test_register_duplicate_email(client, register):
    """Test that an email can only be registered once."""
    register()
    response = client.post(
        "/auth/register",
        json={"email": "alice@tripmail.com", "username": "alice2", "password": "supersecret1"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Email already registered"


def test_register_short_password(client):
    """Test that short passwords are rejected with field errors."""
    response = client.post(
        "/auth/register",
        json={"email": "dave@tripmail.com", "username": "dave", "password": "short"},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid data"
    assert body["errors"][0]["field"] == "password"


def test_login_and_me(client, register):
    """Test login followed by reading the current account."""
    headers = register()
    response = client.get("/auth/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["email"] == "alice@tripmail.com"


def test_login_invalid_credentials(client, register):
    """Test login with a wrong password."""
    register()
    response = client.post("/auth/login", json={"email": "alice@tripmail.com", "password": "wrongpassword"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_missing_token(client):
    """Test that trip endpoints require a bearer token."""
    response = client.get("/trips")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_garbage_token(client):
    """Test that a malformed token is rejected."""
    response = client.get("/trips", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
