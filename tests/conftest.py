"""
Pytest configuration for the SmartDine API tests.
Runs the app against an in-memory SQLite database rebuilt for every test.
"""

import os

# must be set before the app (and its engine) is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "development"
os.environ["ADMIN_EMAIL"] = ""
os.environ["ADMIN_PASSWORD"] = ""

from typing import Any, Callable, Dict

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from smartdine.application.services.auth_service import create_user
from smartdine.application.services.token_service import get_token_service
from smartdine.domain.models.user import User, UserRole
from smartdine.infrastructure.database import Base, SessionLocal, engine
from smartdine.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from smartdine.main import app

API = "/api"


@pytest.fixture
def db_session() -> Session:
    """Fresh schema per test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session: Session) -> TestClient:
    """Create a test client for the FastAPI app"""
    return TestClient(app)


@pytest.fixture
def register(client: TestClient) -> Callable[..., Dict[str, Any]]:
    """Register an owner through the API and return id, token and headers."""

    def _register(email: str = "owner@example.com", name: str = "Owner", password: str = "secret1"):
        response = client.post(
            f"{API}/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return {
            "id": body["data"]["user"]["id"],
            "token": body["token"],
            "headers": {"Authorization": f"Bearer {body['token']}"},
        }

    return _register


@pytest.fixture
def owner(register) -> Dict[str, Any]:
    return register("owner@example.com", "Owner")


@pytest.fixture
def other_owner(register) -> Dict[str, Any]:
    return register("rival@example.com", "Rival")


@pytest.fixture
def admin(db_session: Session) -> Dict[str, Any]:
    user = create_user(
        SQLAlchemyUserRepository(db_session, User),
        name="Admin",
        email="admin@example.com",
        password="admin-pass",
        role=UserRole.ADMIN,
        verified=True,
    )
    token = get_token_service().issue(user.id)
    return {"id": user.id, "token": token, "headers": {"Authorization": f"Bearer {token}"}}


@pytest.fixture
def make_restaurant(client: TestClient) -> Callable[..., Dict[str, Any]]:
    """Create a restaurant for the given owner and return its JSON."""

    def _make(owner: Dict[str, Any], name: str = "Cafe Deja Vu", publish: bool = False, **fields):
        response = client.post(f"{API}/restaurants", json={"name": name, **fields}, headers=owner["headers"])
        assert response.status_code == 201, response.text
        restaurant = response.json()["data"]["restaurant"]
        if publish:
            toggled = client.put(f"{API}/restaurants/{restaurant['id']}/toggle-publish", headers=owner["headers"])
            assert toggled.status_code == 200, toggled.text
            restaurant = toggled.json()["data"]["restaurant"]
        return restaurant

    return _make
