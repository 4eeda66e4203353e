"""
Unit tests for the media storage and media probe clients.
"""

import asyncio
import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from clients.media_probe import FFProbe, MediaProbeError
from clients.media_storage import LocalMediaStorage


# =============================================================================
# Media Storage
# =============================================================================

class TestLocalMediaStorage:

    @pytest.fixture
    def storage(self, tmp_path):
        return LocalMediaStorage(root_dir=str(tmp_path / "store"), base_url="/media/")

    def test_upload_stores_file_and_removes_temp(self, storage, tmp_path):
        temp = tmp_path / "upload.mp4"
        temp.write_bytes(b"video-bytes")

        stored = storage.upload(str(temp))

        assert stored is not None
        assert stored.public_id.endswith(".mp4")
        assert stored.url == f"/media/{stored.public_id}"
        assert not temp.exists()
        with open(os.path.join(storage.root_dir, stored.public_id), "rb") as f:
            assert f.read() == b"video-bytes"

    def test_upload_missing_file_returns_none(self, storage, tmp_path):
        assert storage.upload(str(tmp_path / "missing.mp4")) is None

    def test_upload_without_path_returns_none(self, storage):
        assert storage.upload(None) is None

    def test_upload_failure_still_removes_temp(self, storage, tmp_path):
        temp = tmp_path / "upload.jpg"
        temp.write_bytes(b"img")

        with patch("clients.media_storage.shutil.copyfile", side_effect=OSError("disk full")):
            assert storage.upload(str(temp)) is None

        assert not temp.exists()

    def test_delete_removes_stored_file(self, storage, tmp_path):
        temp = tmp_path / "thumb.jpg"
        temp.write_bytes(b"img")
        stored = storage.upload(str(temp))

        assert storage.delete(stored.public_id) is True
        assert not os.path.exists(os.path.join(storage.root_dir, stored.public_id))

    def test_delete_unknown_is_non_fatal(self, storage):
        assert storage.delete("does-not-exist.jpg") is False

    def test_delete_rejects_path_traversal(self, storage):
        assert storage.delete("../outside.txt") is False


# =============================================================================
# Media Probe
# =============================================================================

def _fake_process(stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0):
    proc = MagicMock()
    proc.communicate = AsyncMock(return_value=(stdout, stderr))
    proc.returncode = returncode
    proc.wait = AsyncMock(return_value=returncode)
    return proc


class TestFFProbe:

    @pytest.mark.asyncio
    async def test_parses_duration(self):
        proc = _fake_process(stdout=b"12.480000\n")
        with patch(
            "clients.media_probe.asyncio.create_subprocess_exec",
            new=AsyncMock(return_value=proc),
        ) as mock_exec:
            duration = await FFProbe(binary="ffprobe", timeout=5).probe_duration("/tmp/a.mp4")

        assert duration == pytest.approx(12.48)
        args = mock_exec.call_args.args
        assert args[0] == "ffprobe"
        assert args[-1] == "/tmp/a.mp4"

    @pytest.mark.asyncio
    async def test_nonzero_exit_raises(self):
        proc = _fake_process(stderr=b"Invalid data found", returncode=1)
        with patch(
            "clients.media_probe.asyncio.create_subprocess_exec",
            new=AsyncMock(return_value=proc),
        ):
            with pytest.raises(MediaProbeError, match="Error extracting video duration"):
                await FFProbe(timeout=5).probe_duration("/tmp/a.mp4")

    @pytest.mark.asyncio
    async def test_garbage_output_raises(self):
        proc = _fake_process(stdout=b"N/A\n")
        with patch(
            "clients.media_probe.asyncio.create_subprocess_exec",
            new=AsyncMock(return_value=proc),
        ):
            with pytest.raises(MediaProbeError, match="Unexpected ffprobe output"):
                await FFProbe(timeout=5).probe_duration("/tmp/a.mp4")

    @pytest.mark.asyncio
    async def test_missing_binary_raises(self):
        with patch(
            "clients.media_probe.asyncio.create_subprocess_exec",
            new=AsyncMock(side_effect=FileNotFoundError("ffprobe")),
        ):
            with pytest.raises(MediaProbeError, match="Could not run"):
                await FFProbe(binary="ffprobe", timeout=5).probe_duration("/tmp/a.mp4")

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self):
        async def hang():
            await asyncio.sleep(10)

        proc = _fake_process()
        proc.communicate = hang
        with patch(
            "clients.media_probe.asyncio.create_subprocess_exec",
            new=AsyncMock(return_value=proc),
        ):
            with pytest.raises(MediaProbeError, match="timed out"):
                await FFProbe(timeout=0.01).probe_duration("/tmp/a.mp4")

        proc.kill.assert_called_once()
