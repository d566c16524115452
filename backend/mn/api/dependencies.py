"""
Request dependencies binding a call to its authenticated user.
"""
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from mn.core.errors import AuthFailure, AuthTokenError
from mn.core.security import TokenConfig, claims_from_authorization
from mn.db.session import get_db, transaction
from mn.models.user import User
from mn.schemas.user import Claims
from mn.services import user_service


def get_token_config(request: Request) -> TokenConfig:
    """Get the token configuration registered on the application."""
    config = getattr(request.app.state, "token_config", None)
    if config is None:
        raise AuthTokenError(AuthFailure.INTERNAL)
    return config


def get_current_claims(request: Request) -> Claims:
    """Verify the single bearer token of the request and return its claims."""
    config = getattr(request.app.state, "token_config", None)
    return claims_from_authorization(request.headers.getlist("authorization"), config)


def get_current_user(
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db)
) -> User:
    """
    Load the user the request's token was issued for.

    The lookup commits right away so the connection goes back to the pool
    before the handler runs.
    """
    with transaction(db):
        user = user_service.get_user_by_id(claims.user_id, db)
    return user
