"""
Security utilities for JWT authentication and password hashing.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence
import base64
import hashlib
import logging
import bcrypt
from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError
from mn.core.config import settings
from mn.core.errors import AuthFailure, AuthTokenError
from mn.schemas.user import Claims

logger = logging.getLogger(__name__)

# The header scheme including the whitespace separating it from the token.
BEARER_PREFIX = "Bearer "


class TokenConfig(BaseModel):
    """Signing configuration shared by token issuance and verification."""
    secret: str
    expire_in: int  # seconds a token stays valid after being issued
    leeway: int = 0  # seconds an expired token is still accepted
    algorithm: str = "HS256"


def token_config_from_settings() -> TokenConfig:
    """Build the token configuration from the application settings."""
    return TokenConfig(
        secret=settings.SECRET_KEY,
        expire_in=settings.ACCESS_TOKEN_EXPIRE_SECONDS,
        leeway=settings.TOKEN_LEEWAY_SECONDS,
        algorithm=settings.ALGORITHM,
    )


def _pre_hash_password(password: str) -> bytes:
    """
    Pre-hash password with SHA256 to support passwords longer than 72 bytes.
    The digest is base64 encoded (44 bytes) so it never contains NUL bytes
    and stays under bcrypt's 72-byte limit.
    """
    digest = hashlib.sha256(password.encode('utf-8')).digest()
    return base64.b64encode(digest)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    pre_hashed = _pre_hash_password(plain_password)
    return bcrypt.checkpw(pre_hashed, hashed_password.encode('utf-8'))


def get_password_hash(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with a fresh salt. Returns the hash as a string for storage."""
    pre_hashed = _pre_hash_password(password)
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(pre_hashed, salt)
    return hashed.decode('utf-8')


def create_access_token(user, config: TokenConfig, now: Optional[datetime] = None) -> str:
    """
    Create a signed JWT for the given user.

    The token carries the user id as subject, the username and an expiry of
    ``now + config.expire_in``.
    """
    issued_at = now or datetime.now(timezone.utc)
    expire = issued_at + timedelta(seconds=config.expire_in)
    to_encode = {
        "sub": str(user.id),
        "username": user.username,
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(to_encode, config.secret, algorithm=config.algorithm)


def decode_access_token(token: str, config: TokenConfig) -> Claims:
    """
    Decode and verify a JWT token.

    Raises ``AuthTokenError`` with reason ``INVALID`` if the signature does not
    match, the payload is malformed or the token expired more than
    ``config.leeway`` seconds ago.
    """
    try:
        payload = jwt.decode(
            token,
            config.secret,
            algorithms=[config.algorithm],
            options={"leeway": config.leeway, "require_exp": True, "require_sub": True},
        )
        return Claims(
            user_id=payload.get("sub"),
            username=payload.get("username"),
            exp=payload.get("exp"),
        )
    except (JWTError, ValidationError) as e:
        raise AuthTokenError(AuthFailure.INVALID, f"Invalid token: {e}") from e


def claims_from_authorization(
    header_values: Sequence[str],
    config: Optional[TokenConfig],
) -> Claims:
    """
    Bind a request to a user from its ``Authorization`` header values.

    Exactly one ``Bearer`` credential must be present.
    """
    if config is None:
        logger.error("Token configuration is not available")
        raise AuthTokenError(AuthFailure.INTERNAL)

    if len(header_values) == 0:
        logger.warning("Token missing")
        raise AuthTokenError(AuthFailure.MISSING)
    if len(header_values) > 1:
        logger.warning(f"More than 1 token given ({len(header_values)})")
        raise AuthTokenError(AuthFailure.BAD_COUNT)

    header = header_values[0]
    if not header.startswith(BEARER_PREFIX):
        logger.warning("Invalid authorization scheme, expected Bearer")
        raise AuthTokenError(AuthFailure.MISSING)

    try:
        return decode_access_token(header[len(BEARER_PREFIX):], config)
    except AuthTokenError as e:
        logger.warning(f"Rejected token: {e}")
        raise
