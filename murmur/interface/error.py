"""Interface layer errors and their HTTP translation."""

from fastapi import HTTPException, status

from murmur.adapter.error import AdapterError
from murmur.domain.error import (
    DomainError,
    GuestNotFoundError,
    InvalidAppKeyError,
    InvalidTokenError,
    NotFoundError,
    OriginNotAllowedError,
    SocialAuthDisabledError,
    UserBannedError,
    ValidationError,
)

_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (InvalidAppKeyError, status.HTTP_404_NOT_FOUND),
    (OriginNotAllowedError, status.HTTP_403_FORBIDDEN),
    (InvalidTokenError, status.HTTP_401_UNAUTHORIZED),
    (SocialAuthDisabledError, status.HTTP_403_FORBIDDEN),
    (GuestNotFoundError, status.HTTP_404_NOT_FOUND),
    (UserBannedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
]


def http_error(error: DomainError | AdapterError) -> HTTPException:
    """Translate a domain or adapter error into an HTTP error.

    Args:
        error: Error raised by a use case

    Returns:
        HTTPException carrying the error message as detail
    """
    if isinstance(error, AdapterError):
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Identity provider unavailable",
        )
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
