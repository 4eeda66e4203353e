"""
Media storage client.

Stores uploaded video and thumbnail files under a local directory that
the server exposes as static files. Returns a durable URL plus a public
id that can later be passed to ``delete``.

Contract:
- ``upload`` returns None on failure instead of raising, and always
  removes the local temporary file, on success and on failure.
- ``delete`` never raises; failures are logged and reported as False.
"""

import logging
import os
import shutil
import uuid
from dataclasses import dataclass
from typing import Optional

from config import config

logger = logging.getLogger(__name__)


@dataclass
class StoredMedia:
    """Reference to a stored media object."""

    url: str
    public_id: str


class LocalMediaStorage:
    """
    Filesystem-backed media storage.

    Files are moved into ``root_dir`` under a random public id (keeping
    the uploaded file's extension) and served from ``base_url``.
    """

    def __init__(
        self,
        root_dir: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> None:
        self.root_dir = root_dir or config.media.storage_dir
        self.base_url = (base_url or config.media.base_url).rstrip("/")
        os.makedirs(self.root_dir, exist_ok=True)
        logger.info(f"LocalMediaStorage initialized at {self.root_dir}")

    def _path_for(self, public_id: str) -> str:
        # public ids are generated here; reject anything that escapes root_dir
        path = os.path.abspath(os.path.join(self.root_dir, public_id))
        if os.path.dirname(path) != os.path.abspath(self.root_dir):
            raise ValueError(f"Invalid public id: {public_id!r}")
        return path

    def upload(self, local_path: Optional[str]) -> Optional[StoredMedia]:
        """
        Store a local file.

        Args:
            local_path: Path of the temporary upload on this server.

        Returns:
            StoredMedia on success, None on failure.
        """
        if not local_path:
            return None

        try:
            ext = os.path.splitext(local_path)[1]
            public_id = f"{uuid.uuid4().hex}{ext}"
            shutil.copyfile(local_path, self._path_for(public_id))
            stored = StoredMedia(
                url=f"{self.base_url}/{public_id}",
                public_id=public_id,
            )
            logger.info(f"Media stored: {stored.url}")
            return stored
        except OSError as e:
            logger.error(f"Media upload failed for {local_path}: {e}")
            return None
        finally:
            _remove_quietly(local_path)

    def delete(self, public_id: Optional[str]) -> bool:
        """
        Delete a stored object.

        Returns:
            True if the object was removed, False otherwise.
        """
        if not public_id:
            return False

        try:
            os.remove(self._path_for(public_id))
            logger.info(f"Media deleted: {public_id}")
            return True
        except (OSError, ValueError) as e:
            logger.warning(f"Error deleting media {public_id}: {e}")
            return False


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove temporary file {path}: {e}")
