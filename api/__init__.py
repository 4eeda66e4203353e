"""
HTTP-facing helpers for the video sharing backend.

Exports:
- errors: ApiError hierarchy rendered as {statusCode, message}
- schemas: Pydantic request/response models
- policies: Result and ownership policies
- dependencies: FastAPI dependencies (current user, media clients)
"""

from api.errors import (
    ApiError,
    BadRequestError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    AggregationError,
    PersistenceError,
)

__all__ = [
    "ApiError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "AggregationError",
    "PersistenceError",
]
