"""
FastAPI dependencies.

The caller identity comes from the ``X-User-Id`` header; authentication
itself is handled upstream. Media clients are provided as dependencies
so tests can override them.
"""

import logging
import os
import uuid
from functools import lru_cache
from typing import Optional

import aiofiles
from fastapi import Depends, Header, UploadFile
from sqlalchemy.orm import Session

from api.errors import UnauthorizedError
from clients.media_probe import FFProbe
from clients.media_storage import LocalMediaStorage
from config import config
from db.models import User
from db.session import get_db

logger = logging.getLogger(__name__)


def get_current_user_id(
    x_user_id: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> uuid.UUID:
    """
    Resolve the authenticated caller.

    Raises:
        UnauthorizedError: Missing, malformed or unknown user id.
    """
    if not x_user_id:
        raise UnauthorizedError("User needs to be logged in")

    try:
        user_id = uuid.UUID(x_user_id)
    except ValueError:
        raise UnauthorizedError("Invalid user id")

    if db.get(User, user_id) is None:
        logger.warning(f"Request with unknown user id {user_id}")
        raise UnauthorizedError("Invalid user id")

    return user_id


@lru_cache
def get_media_storage() -> LocalMediaStorage:
    return LocalMediaStorage()


@lru_cache
def get_media_probe() -> FFProbe:
    return FFProbe()


async def spool_upload(upload: UploadFile, temp_dir: Optional[str] = None) -> str:
    """
    Write an uploaded file to the temp directory and return its path.

    The caller owns the returned file; media storage removes it on upload.
    """
    temp_dir = temp_dir or config.media.temp_dir
    os.makedirs(temp_dir, exist_ok=True)

    ext = os.path.splitext(upload.filename or "")[1]
    path = os.path.join(temp_dir, f"{uuid.uuid4().hex}{ext}")

    async with aiofiles.open(path, "wb") as out:
        while chunk := await upload.read(1024 * 1024):
            await out.write(chunk)

    logger.debug(f"Spooled upload {upload.filename!r} to {path}")
    return path
