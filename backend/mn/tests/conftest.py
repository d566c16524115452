"""
Shared fixtures: an in-memory SQLite database recreated for every test and a
TestClient bound to it.
"""
import os

os.environ.setdefault("MN_SECRET_KEY", "test-secret")
os.environ["MN_DATABASE_URL"] = "sqlite://"
os.environ["MN_BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient
from mn.core.security import TokenConfig
from mn.db.base import Base
from mn.db.session import SessionLocal, engine, init_db
from mn.main import create_app
from mn.services import user_service

TOKEN_CONFIG = TokenConfig(secret="test-secret", expire_in=3600, leeway=60)


@pytest.fixture(autouse=True)
def reset_database():
    """Start every test from empty tables."""
    Base.metadata.drop_all(bind=engine)
    init_db()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def token_config():
    return TOKEN_CONFIG


@pytest.fixture
def client():
    return TestClient(create_app(token_config=TOKEN_CONFIG, debug=True))


@pytest.fixture
def alice(db):
    return user_service.create_user("alice", "pw1", db)


@pytest.fixture
def bob(db):
    return user_service.create_user("bob", "pw2", db)


def login(client, username, password):
    """Log in through the API and return the authorization headers."""
    response = client.post(
        "/api/v1/user/auth",
        json={"username": username, "password": password}
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def alice_headers(client, alice):
    return login(client, "alice", "pw1")


@pytest.fixture
def bob_headers(client, bob):
    return login(client, "bob", "pw2")
