"""Pytest configuration and fixtures.

Every test gets a fresh in-memory SQLite database wired in through the
``get_db`` dependency, so nothing touches the configured DATABASE_URL.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from devconnector.db.session import Base, get_db
from devconnector.main import app


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session):
    """FastAPI test client bound to the per-test database."""
    def _get_test_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_test_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register a user and return the auth header for them."""
    def _register(name="Alice", email="a@x.com", password="secret1"):
        response = client.post(
            "/api/users", json={"name": name, "email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"x-auth-token": response.json()["token"]}

    return _register


@pytest.fixture
def alice(register):
    return register()


@pytest.fixture
def bob(register):
    return register(name="Bob", email="b@x.com", password="secret2")
