"""
Typed API errors.

Every failure surfaced to a client is one of these. The exception
handlers in server.py render them as ``{statusCode, message, success}``.
"""

import uuid
from typing import Optional

from fastapi import status


class ApiError(Exception):
    """Base error carrying an HTTP status code and a client-safe message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Something went wrong"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.status_code}, {self.message!r})"


class BadRequestError(ApiError):
    """Malformed input: empty required field, malformed identifier."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class UnauthorizedError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "User needs to be logged in"


class ForbiddenError(ApiError):
    """Authenticated caller is not the owner of the resource."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not own this resource"


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class PersistenceError(ApiError):
    """A database operation failed or returned no value where one was required."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database operation failed"


class AggregationError(PersistenceError):
    """One of the channel statistics sub-aggregations failed."""

    default_message = "Something went wrong while computing channel stats"


def parse_uuid(value: str, label: str) -> uuid.UUID:
    """
    Parse an identifier from a path or query parameter.

    Args:
        value: Raw identifier string.
        label: Human label used in the error message, e.g. "video".

    Raises:
        BadRequestError: If the value is not a valid UUID.
    """
    try:
        return uuid.UUID(str(value))
    except (ValueError, AttributeError, TypeError):
        raise BadRequestError(f"Invalid {label} ID")
