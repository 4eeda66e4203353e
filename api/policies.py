"""
Response and access policies.

Two rules live here so they can be changed without touching query code:

- Empty-result policy: list endpoints treat "no rows" as 404 Not Found
  instead of an empty success. Controlled by the EMPTY_RESULT_NOT_FOUND
  flag (default on).
- Ownership policy: only the owner may modify or delete a resource.
"""

import logging
import uuid
from typing import Optional, Sequence, TypeVar

from api.errors import ForbiddenError, NotFoundError
from config import config

logger = logging.getLogger(__name__)

T = TypeVar("T")


def require_results(
    items: Sequence[T],
    message: str,
    enabled: Optional[bool] = None,
) -> Sequence[T]:
    """
    Apply the empty-result policy to a list result.

    Args:
        items: Rows returned by a list query.
        message: Not-found message shown to the client.
        enabled: Override for the EMPTY_RESULT_NOT_FOUND flag.

    Returns:
        ``items`` unchanged.

    Raises:
        NotFoundError: If the policy is enabled and ``items`` is empty.
    """
    if enabled is None:
        enabled = config.flags.empty_result_not_found

    if not items and enabled:
        logger.debug(f"Empty result reported as not found: {message}")
        raise NotFoundError(message)
    return items


def ensure_owner(owner_id: uuid.UUID, user_id: uuid.UUID, message: str) -> None:
    """
    Raise ForbiddenError unless ``user_id`` owns the resource.

    Args:
        owner_id: Owner recorded on the resource.
        user_id: Authenticated caller.
        message: Forbidden message shown to the client.
    """
    if owner_id != user_id:
        logger.warning(f"Ownership check failed: owner={owner_id}, caller={user_id}")
        raise ForbiddenError(message)
