"""Domain errors raised by services and mapped to HTTP responses at the API boundary."""

from fastapi import status


class CustomerApiError(Exception):
    """Base class for errors that carry their own HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ResourceNotFoundError(CustomerApiError):
    """No entity exists with the requested identifier."""

    status_code = status.HTTP_404_NOT_FOUND


class DuplicateResourceError(CustomerApiError):
    """The request would violate a uniqueness rule (e.g. email already taken)."""

    status_code = status.HTTP_409_CONFLICT


class RequestValidationError(CustomerApiError):
    """The request is malformed or would not change anything."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationFailedError(CustomerApiError):
    """Missing, invalid or expired bearer token."""

    status_code = status.HTTP_403_FORBIDDEN


class BadCredentialsError(AuthenticationFailedError):
    """Login attempt with an unknown email or a wrong password."""

    status_code = status.HTTP_401_UNAUTHORIZED
