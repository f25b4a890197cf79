"""
Pytest configuration and fixtures for chore calendar tests.

Every test gets its own in-memory SQLite database. ``StaticPool`` keeps the
single connection alive so the app and the test see the same tables.
"""

import os

# Must be set before the app (and its settings) are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "development"

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import chore_calendar.models  # noqa: F401
from chore_calendar.db.session import Base, enable_sqlite_foreign_keys, get_db
from main import app

WEEK = "2026-02-15"


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(scope="function")
def client(engine) -> Generator[TestClient, None, None]:
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    # Not used as a context manager so the startup hook does not touch the real database
    yield TestClient(app)
    app.dependency_overrides.clear()


def create_family(client: TestClient, name: str = "Smith Family", email: str = "admin@x.com", password: str = "pw123") -> dict:
    response = client.post(
        "/families",
        json={"name": name, "adminEmail": email, "adminPassword": password},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def family(client) -> dict:
    """Response body of a freshly created family"""
    return create_family(client)


@pytest.fixture
def family_id(family) -> str:
    return family["family"]["id"]


@pytest.fixture
def admin_headers(family) -> dict:
    return auth(family["token"])


@pytest.fixture
def person(client, family_id, admin_headers) -> dict:
    response = client.post(
        f"/people/family/{family_id}",
        json={"name": "Jo", "email": "jo@x.com", "phone": "555-0100"},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def member_headers(client, person) -> dict:
    response = client.post("/auth/user/login", json={"email": person["email"]})
    assert response.status_code == 200, response.text
    return auth(response.json()["token"])


@pytest.fixture
def chores_by_label(family) -> dict:
    return {chore["label"]: chore for chore in family["family"]["chores"]}


@pytest.fixture
def other_family(client) -> dict:
    return create_family(client, name="Jones Family", email="boss@y.com", password="secret")
