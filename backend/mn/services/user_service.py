"""
User service storing user records and checking credentials.
"""
import logging
from typing import Optional
from sqlalchemy.orm import Session
from mn.core.errors import ConflictError, InvalidValueError, NotFoundError
from mn.core.security import get_password_hash, verify_password
from mn.db.session import transaction
from mn.models.user import User

logger = logging.getLogger(__name__)


def get_user_by_id(user_id: int, db: Session) -> User:
    """Get the user with the given id. Raises ``NotFoundError`` if absent."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError(f"User {user_id} not found")
    return user


def get_user_by_username(username: str, db: Session) -> User:
    """Get the user with the given username. Raises ``NotFoundError`` if absent."""
    user = db.query(User).filter(User.username == username).first()
    if not user:
        raise NotFoundError(f"User '{username}' not found")
    return user


def create_user(username: str, password: str, db: Session) -> User:
    """Create a new user. Only a salted hash of the password is stored."""
    if not username or not username.strip():
        raise InvalidValueError("Username must not be empty")
    if not password:
        raise InvalidValueError("Password must not be empty")

    password_hash = get_password_hash(password)
    with transaction(db):
        if db.query(User.id).filter(User.username == username).first():
            raise ConflictError(f"Username '{username}' already exists")

        db.add(User(username=username, password_hash=password_hash))
        db.flush()
        user = get_user_by_username(username, db)

    logger.info(f"Created user '{user.username}' (id: {user.id})")
    return user


def verify_user(username: str, password: str, db: Session) -> Optional[User]:
    """
    Check a username and password combination.

    Returns the user if the combination is correct and ``None`` if the user
    does not exist or the password is wrong. Any other failure propagates.
    """
    with transaction(db):
        try:
            user = get_user_by_username(username, db)
        except NotFoundError:
            return None

    if verify_password(password, user.password_hash):
        return user
    return None


def change_password(user_id: int, new_password: str, db: Session) -> User:
    """Replace the password of the user. Raises ``NotFoundError`` if no user was updated."""
    if not new_password:
        raise InvalidValueError("Password must not be empty")

    password_hash = get_password_hash(new_password)
    with transaction(db):
        count = db.query(User).filter(User.id == user_id).update(
            {User.password_hash: password_hash}
        )
        if count < 1:
            raise NotFoundError(f"User {user_id} not found")

        user = get_user_by_id(user_id, db)
        db.refresh(user)

    logger.info(f"Changed password of user {user_id}")
    return user


def delete_user(user_id: int, db: Session):
    """
    Delete the user and, through the store's cascade, everything they own.
    Raises ``NotFoundError`` if no user was deleted.
    """
    with transaction(db):
        count = db.query(User).filter(User.id == user_id).delete()
        if count < 1:
            raise NotFoundError(f"User {user_id} not found")

    logger.info(f"Deleted user {user_id}")
