"""
Domain error taxonomy shared by the services and the HTTP layer.

Services raise these exceptions for expected domain conditions. Mapping them
to transport status codes is left to ``mn.api.errors``.
"""
import enum


class BackendError(Exception):
    """Base class of every error raised by the backend core."""

    message = "Internal error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)


class NotFoundError(BackendError):
    """An entity or path segment does not exist for the owner, or a write hit zero rows."""

    message = "Entity not found"


class ConflictError(BackendError):
    """A uniqueness rule would be violated."""

    message = "Conflict"


class DirectoryNotEmptyError(ConflictError):
    """A non-recursive delete targeted a directory that still has children."""

    message = "Directory is not empty"


class InvalidValueError(BackendError):
    """Input is well-typed but rejected by a domain rule."""

    message = "Invalid value"


class InvalidCredentialsError(BackendError):
    """Login attempt with an unknown username or a wrong password."""

    message = "Invalid credentials"


class StoreError(BackendError):
    """The backing store failed for a reason unrelated to the request data."""

    message = "Store error"


class AuthFailure(str, enum.Enum):
    """Reasons a request could not be bound to a user."""
    MISSING = "missing"
    BAD_COUNT = "bad_count"
    INVALID = "invalid"
    INTERNAL = "internal"


class AuthTokenError(BackendError):
    """Authentication failure, kept apart from the authorization errors above."""

    message = "Authentication failed"

    def __init__(self, reason: AuthFailure, message: str = None):
        self.reason = reason
        super().__init__(message or f"{self.message}: {reason.value}")
