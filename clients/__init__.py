"""
External media clients.

Provides the media storage and media probe collaborators used when
publishing videos.
"""

from .media_storage import LocalMediaStorage, StoredMedia
from .media_probe import FFProbe, MediaProbeError

__all__ = ["LocalMediaStorage", "StoredMedia", "FFProbe", "MediaProbeError"]
