from typing import Dict, Generator

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app

TEST_SECRET = "test-secret"


@pytest.fixture
def settings() -> Settings:
    """Fresh in-memory database and the cheapest bcrypt cost per test."""
    return Settings(
        _env_file=None,
        SECRET_KEY=TEST_SECRET,
        ALGORITHM="HS256",
        ACCESS_TOKEN_EXPIRE_MINUTES=60,
        BCRYPT_ROUNDS=4,
        DATABASE_URL="sqlite://",
        API_PREFIX="",
        FRONTEND_URL=None,
        LOG_LEVEL="warning",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    # Entering the context runs the lifespan hook, which creates the tables
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app, client):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def register_user(client: TestClient, username="admin", password="password123", email="admin@example.com"):
    return client.post(
        "/auth/register",
        json={"username": username, "password": password, "email": email},
    )


def login_user(client: TestClient, username="admin", password="password123"):
    return client.post("/auth/login", json={"username": username, "password": password})


@pytest.fixture
def auth_headers(client) -> Dict[str, str]:
    assert register_user(client).status_code == 201
    token = login_user(client).json()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def project(client, auth_headers) -> dict:
    resp = client.post(
        "/projects",
        json={"name": "Website Redesign", "description": "Complete overhaul of company website"},
        headers=auth_headers,
    )
    assert resp.status_code == 201
    return resp.json()
