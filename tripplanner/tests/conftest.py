"""
Shared fixtures: a fresh SQLite database per test and an authenticated client.
"""
import asyncio
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./tripplanner-test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

import tripplanner.models  # noqa: F401
from tripplanner.core.database import Base, get_db
from tripplanner.main import app

TRIP_PAYLOAD = {
    "name": "Lisbon Summer",
    "destination": "Lisbon, Portugal",
    "description": "Two weeks of tiles and tarts",
    "start_date": "2025-06-01",
    "end_date": "2025-06-10",
}


@pytest.fixture
def client(tmp_path):
    # NullPool: TestClient runs the app on its own event loop
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)

    async def create_tables():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_tables())
    TestingSession = sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)

    async def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            await db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    asyncio.run(engine.dispose())


def _register_and_login(client, email, username, password):
    response = client.post(
        "/auth/register",
        json={"email": email, "username": username, "password": password},
    )
    assert response.status_code == 201
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def register(client):
    def _register(email="alice@tripmail.com", username="alice", password="supersecret1"):
        return _register_and_login(client, email, username, password)
    return _register


@pytest.fixture
def auth_headers(register):
    return register()


@pytest.fixture
def other_headers(register):
    return register(email="bob@tripmail.com", username="bob")


@pytest.fixture
def trip_payload():
    return dict(TRIP_PAYLOAD)


@pytest.fixture
def trip(client, auth_headers):
    response = client.post("/trips", json=TRIP_PAYLOAD, headers=auth_headers)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def make_activity(client, auth_headers, trip):
    def _make(name="Belem Tower", category="CULTURAL", **extra):
        response = client.post(
            f"/trips/{trip['id']}/activities",
            json={"name": name, "category": category, **extra},
            headers=auth_headers,
        )
        assert response.status_code == 201
        return response.json()
    return _make
