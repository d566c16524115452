"""
Tests for password hashing, token issuance and request binding.
"""
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
import pytest
from mn.core.errors import AuthFailure, AuthTokenError
from mn.core.security import (
    TokenConfig, claims_from_authorization, create_access_token,
    decode_access_token, get_password_hash, verify_password
)

USER = SimpleNamespace(id=1, username="foobar")


def test_password_hash_round_trip():
    """Test a password verifies against its own hash only."""
    hashed = get_password_hash("secret", rounds=4)
    assert hashed != "secret"
    assert verify_password("secret", hashed)
    assert not verify_password("Secret", hashed)


def test_password_hash_is_salted():
    """Test two hashes of the same password differ."""
    assert get_password_hash("secret", rounds=4) != get_password_hash("secret", rounds=4)


def test_long_password_is_supported():
    """Test passwords beyond bcrypt's 72 byte limit are fully significant."""
    base = "x" * 100
    hashed = get_password_hash(base + "a", rounds=4)
    assert verify_password(base + "a", hashed)
    assert not verify_password(base + "b", hashed)


def test_token_round_trip(token_config):
    """Test a freshly issued token yields the user's claims."""
    token = create_access_token(USER, token_config)
    claims = decode_access_token(token, token_config)
    assert claims.user_id == 1
    assert claims.username == "foobar"


def test_token_expiry(token_config):
    """Test the expiry is issue time plus the configured lifetime."""
    now = datetime.now(timezone.utc)
    token = create_access_token(USER, token_config, now=now)
    claims = decode_access_token(token, token_config)
    assert claims.exp == int((now + timedelta(seconds=token_config.expire_in)).timestamp())


def test_expired_token_within_leeway_is_accepted():
    """Test a token that expired less than the leeway ago is still valid."""
    config = TokenConfig(secret="s", expire_in=10, leeway=60)
    issued = datetime.now(timezone.utc) - timedelta(seconds=30)
    token = create_access_token(USER, config, now=issued)
    assert decode_access_token(token, config).user_id == 1


def test_expired_token_beyond_leeway_is_rejected():
    """Test a token that expired longer than the leeway ago is invalid."""
    config = TokenConfig(secret="s", expire_in=10, leeway=5)
    issued = datetime.now(timezone.utc) - timedelta(seconds=100)
    token = create_access_token(USER, config, now=issued)
    with pytest.raises(AuthTokenError) as exc_info:
        decode_access_token(token, config)
    assert exc_info.value.reason == AuthFailure.INVALID


def test_token_with_other_secret_is_rejected(token_config):
    """Test a token signed with another secret is invalid."""
    token = create_access_token(USER, TokenConfig(secret="other", expire_in=100))
    with pytest.raises(AuthTokenError) as exc_info:
        decode_access_token(token, token_config)
    assert exc_info.value.reason == AuthFailure.INVALID


def test_tampered_token_is_rejected(token_config):
    """Test changing the payload breaks the signature."""
    token = create_access_token(USER, token_config)
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload[:-2] + ("A" if payload[-2] != "A" else "B") + payload[-1], signature])
    with pytest.raises(AuthTokenError) as exc_info:
        decode_access_token(tampered, token_config)
    assert exc_info.value.reason == AuthFailure.INVALID


def test_garbage_token_is_rejected(token_config):
    """Test a string that is not a JWT is invalid."""
    with pytest.raises(AuthTokenError) as exc_info:
        decode_access_token("not-a-token", token_config)
    assert exc_info.value.reason == AuthFailure.INVALID


@pytest.mark.parametrize("headers, reason", [
    ([], AuthFailure.MISSING),
    (["Bearer a", "Bearer b"], AuthFailure.BAD_COUNT),
    (["Token abc"], AuthFailure.MISSING),
    (["Bearer abc"], AuthFailure.INVALID),
])
def test_authorization_failures(token_config, headers, reason):
    """Test each way a request can fail to bind to a user."""
    with pytest.raises(AuthTokenError) as exc_info:
        claims_from_authorization(headers, token_config)
    assert exc_info.value.reason == reason


def test_authorization_without_config():
    """Test a missing token configuration is an internal failure."""
    with pytest.raises(AuthTokenError) as exc_info:
        claims_from_authorization(["Bearer abc"], None)
    assert exc_info.value.reason == AuthFailure.INTERNAL


def test_authorization_success(token_config):
    """Test a single well formed bearer token binds the request."""
    token = create_access_token(USER, token_config)
    claims = claims_from_authorization([f"Bearer {token}"], token_config)
    assert claims.user_id == USER.id
