"""
Translation of domain errors into HTTP responses.
"""
import logging
from fastapi import Request
from fastapi.responses import JSONResponse, Response
from mn.core.errors import (
    AuthFailure, AuthTokenError, BackendError, ConflictError,
    InvalidCredentialsError, InvalidValueError, NotFoundError
)

logger = logging.getLogger(__name__)

ERROR_STATUS = [
    (NotFoundError, 404),
    (ConflictError, 409),
    (InvalidValueError, 422),
    (InvalidCredentialsError, 401),
]

AUTH_FAILURE_STATUS = {
    AuthFailure.MISSING: 400,
    AuthFailure.BAD_COUNT: 400,
    AuthFailure.INVALID: 401,
    AuthFailure.INTERNAL: 500,
}


def status_for(error: BackendError) -> int:
    """Get the HTTP status code for a domain error."""
    if isinstance(error, AuthTokenError):
        return AUTH_FAILURE_STATUS[error.reason]
    for error_class, status_code in ERROR_STATUS:
        if isinstance(error, error_class):
            return status_code
    return 500


async def backend_error_handler(request: Request, exc: BackendError):
    """Respond with the mapped status. The message is only exposed in debug mode."""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"Respond {status_code} for error \"{exc}\"")
    else:
        logger.info(f"Respond {status_code} for error \"{exc}\"")

    if getattr(request.app.state, "debug", False):
        return JSONResponse(status_code=status_code, content={"err": str(exc)})
    return Response(status_code=status_code)
