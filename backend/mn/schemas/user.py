"""
Pydantic schemas for User entity and authentication.
"""
from pydantic import BaseModel


class UserResponse(BaseModel):
    """Schema for user response. The password hash is never exposed."""
    id: int
    username: str

    class Config:
        from_attributes = True


class Credentials(BaseModel):
    """Schema for user login."""
    username: str
    password: str


class AuthResponse(BaseModel):
    """Schema for the login response carrying the signed token."""
    token: str


class Claims(BaseModel):
    """Verified payload of an identity token."""
    user_id: int
    username: str
    exp: int
