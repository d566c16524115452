"""
Tests for authentication endpoints and request binding.
"""
from mn.main import create_app
from fastapi.testclient import TestClient


def test_login(client, alice):
    """Test user login."""
    response = client.post(
        "/api/v1/user/auth",
        json={
            "username": "alice",
            "password": "pw1"
        }
    )
    assert response.status_code == 200
    assert "token" in response.json()


def test_login_invalid_credentials(client, alice):
    """Test login with invalid credentials."""
    response = client.post(
        "/api/v1/user/auth",
        json={
            "username": "alice",
            "password": "wrongpassword"
        }
    )
    assert response.status_code == 401

    response = client.post(
        "/api/v1/user/auth",
        json={
            "username": "nonexistent",
            "password": "pw1"
        }
    )
    assert response.status_code == 401


def test_profile(client, alice, alice_headers):
    """Test the profile of the token's user is returned without the hash."""
    response = client.get("/api/v1/user/profile", headers=alice_headers)
    assert response.status_code == 200
    assert response.json() == {"id": alice.id, "username": "alice"}


def test_missing_token(client):
    """Test a request without credentials."""
    response = client.get("/api/v1/node")
    assert response.status_code == 400


def test_malformed_scheme(client, alice_headers):
    """Test a credential without the Bearer scheme."""
    token = alice_headers["Authorization"].split(" ", 1)[1]
    response = client.get("/api/v1/node", headers={"Authorization": f"Token {token}"})
    assert response.status_code == 400


def test_multiple_tokens(client, alice_headers):
    """Test a request carrying two credentials."""
    value = alice_headers["Authorization"]
    response = client.get(
        "/api/v1/node",
        headers=[("Authorization", value), ("Authorization", value)]
    )
    assert response.status_code == 400


def test_tampered_token(client, alice_headers):
    """Test a token with a broken signature."""
    value = alice_headers["Authorization"]
    tampered = value[:-3] + ("AAA" if not value.endswith("AAA") else "BBB")
    response = client.get("/api/v1/node", headers={"Authorization": tampered})
    assert response.status_code == 401


def test_missing_token_config():
    """Test an application without token configuration fails internally."""
    app = create_app(debug=True)
    app.state.token_config = None
    client = TestClient(app)
    response = client.get("/api/v1/node", headers={"Authorization": "Bearer abc"})
    assert response.status_code == 500


def test_error_message_hidden_outside_debug():
    """Test error details are only exposed in debug mode."""
    client = TestClient(create_app(debug=False))
    response = client.get("/api/v1/node")
    assert response.status_code == 400
    assert response.content == b""
