"""
Media probe client.

Reads the duration of a local media file with ``ffprobe``. The probe
runs as an asyncio subprocess bounded by MEDIA_PROBE_TIMEOUT.
"""

import asyncio
import logging
from typing import Optional

from config import config

logger = logging.getLogger(__name__)


class MediaProbeError(Exception):
    """Raised when the duration of a media file cannot be determined."""


class FFProbe:
    """Async wrapper around the ffprobe binary."""

    def __init__(
        self,
        binary: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.binary = binary or config.media.ffprobe_binary
        self.timeout = timeout if timeout is not None else config.media.probe_timeout

    async def probe_duration(self, path: str) -> float:
        """
        Return the duration of ``path`` in seconds.

        Raises:
            MediaProbeError: If ffprobe is missing, fails, times out,
                or prints something that is not a number.
        """
        cmd = [
            self.binary,
            "-v",
            "error",
            "-show_entries",
            "format=duration",
            "-of",
            "default=noprint_wrappers=1:nokey=1",
            path,
        ]

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise MediaProbeError(f"Could not run {self.binary}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            proc.kill()
            await proc.wait()
            raise MediaProbeError(
                f"ffprobe timed out after {self.timeout}s") from e

        if proc.returncode != 0:
            tail = stderr.decode(errors="replace")[-500:]
            raise MediaProbeError(f"Error extracting video duration: {tail}")

        raw = stdout.decode(errors="replace").strip()
        try:
            duration = float(raw)
        except ValueError as e:
            raise MediaProbeError(f"Unexpected ffprobe output: {raw!r}") from e

        logger.debug(f"Probed duration {duration}s for {path}")
        return duration
