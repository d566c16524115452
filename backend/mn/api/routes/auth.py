"""
Authentication routes for login and the user's own profile.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from mn.api.dependencies import get_current_user, get_token_config
from mn.core.errors import InvalidCredentialsError
from mn.core.security import TokenConfig, create_access_token
from mn.db.session import get_db
from mn.models.user import User
from mn.schemas.user import AuthResponse, Credentials, UserResponse
from mn.services import user_service

router = APIRouter(prefix="/user", tags=["user"])


@router.post("/auth", response_model=AuthResponse)
def auth(
    credentials: Credentials,
    token_config: TokenConfig = Depends(get_token_config),
    db: Session = Depends(get_db)
):
    """Login and get a signed token."""
    user = user_service.verify_user(credentials.username, credentials.password, db)
    if user is None:
        raise InvalidCredentialsError()

    return {"token": create_access_token(user, token_config)}


@router.get("/profile", response_model=UserResponse)
def profile(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user
