"""Translation of domain errors into HTTP responses."""

import logfire
from fastapi import HTTPException, status

from forum.domain.error import (
    DepthExceededError,
    DomainError,
    InvariantViolationError,
    NotAuthenticatedError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)

_STATUS_BY_ERROR: list[tuple[type[Exception], int]] = [
    (NotAuthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    # Also covers TargetNotFoundError and ParentNotFoundError
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DepthExceededError, status.HTTP_400_BAD_REQUEST),
    (InvariantViolationError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    # Malformed UUIDs and pydantic validation failures
    (ValueError, status.HTTP_400_BAD_REQUEST),
]


def to_http_exception(error: DomainError | ValueError) -> HTTPException:
    """Map a domain or validation error to an HTTPException.

    Args:
        error: Error raised by a use case

    Returns:
        HTTPException carrying the matching status code and the error message
    """
    status_code = next(
        (
            code
            for error_type, code in _STATUS_BY_ERROR
            if isinstance(error, error_type)
        ),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )

    if status_code == status.HTTP_409_CONFLICT:
        logfire.error("Vote state conflict", error=str(error))
    elif status_code >= 500:
        logfire.error(
            "Unmapped domain error", error=str(error), error_type=type(error).__name__
        )
    else:
        logfire.warn(
            "Request rejected",
            error=str(error),
            error_type=type(error).__name__,
            status_code=status_code,
        )

    return HTTPException(status_code=status_code, detail=str(error))
