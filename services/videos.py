"""
Video service — publish, read, update, delete and publish-toggle.

Ownership: only the owner may update, delete or toggle a video.
Media: stored objects are removed on delete and when a thumbnail is
replaced; removal failures are logged and never block the database
change.
"""

import logging
import os
from typing import Optional
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from api.errors import BadRequestError, NotFoundError, PersistenceError
from api.policies import ensure_owner
from api.schemas import OwnerSummary, VideoDetail, VideoOut
from clients.media_probe import FFProbe, MediaProbeError
from clients.media_storage import LocalMediaStorage
from db.models import User, Video
from db.session import commit_or_raise

logger = logging.getLogger(__name__)


def _require_text(value: Optional[str], field_name: str) -> str:
    if value is None or not value.strip():
        raise BadRequestError(f"{field_name} should not be empty")
    return value.strip()


def _discard_temp_files(*paths: Optional[str]) -> None:
    for path in paths:
        if path and os.path.exists(path):
            os.remove(path)


# -------------------------------------------------------------------------
# READ
# -------------------------------------------------------------------------

def get_video_or_404(session: Session, video_id: UUID) -> Video:
    video = session.get(Video, video_id)
    if video is None:
        raise NotFoundError("Video not found")
    return video


def get_owned_video(session: Session, video_id: UUID, user_id: UUID) -> Video:
    """Fetch a video and check that ``user_id`` owns it."""
    video = get_video_or_404(session, video_id)
    ensure_owner(video.owner_id, user_id, "You can only modify your own videos")
    return video


def get_video_detail(session: Session, video_id: UUID) -> VideoDetail:
    """Return a video with its owner summary."""
    video = get_video_or_404(session, video_id)
    owner = session.get(User, video.owner_id)

    detail = VideoDetail.model_validate(video)
    if owner is not None:
        detail.owner = OwnerSummary.model_validate(owner)
    return detail


def list_channel_videos(session: Session, owner_id: UUID) -> list[Video]:
    """All videos owned by ``owner_id``, newest first."""
    return list(
        session.scalars(
            select(Video)
            .where(Video.owner_id == owner_id)
            .order_by(desc(Video.created_at), desc(Video.id))
        )
    )


# -------------------------------------------------------------------------
# WRITE
# -------------------------------------------------------------------------

async def publish_video(
    session: Session,
    owner_id: UUID,
    title: Optional[str],
    description: Optional[str],
    video_path: str,
    thumbnail_path: str,
    storage: LocalMediaStorage,
    probe: FFProbe,
) -> Video:
    """
    Probe, store and record a new video.

    The probe runs on the local file before upload. Both temporary files
    are gone when this returns, whatever the outcome.

    Raises:
        BadRequestError: Empty title/description, or a storage upload failed.
        PersistenceError: Duration could not be read or the insert failed.
    """
    try:
        title = _require_text(title, "Title")
        description = _require_text(description, "Description")

        try:
            duration = await probe.probe_duration(video_path)
        except MediaProbeError as e:
            logger.error(f"Duration probe failed for {video_path}: {e}")
            raise PersistenceError("Error extracting video duration") from e

        video_media = storage.upload(video_path)
        if video_media is None:
            raise BadRequestError("Media storage error: video file upload failed")

        thumbnail_media = storage.upload(thumbnail_path)
        if thumbnail_media is None:
            storage.delete(video_media.public_id)
            raise BadRequestError("Media storage error: thumbnail upload failed")
    finally:
        _discard_temp_files(video_path, thumbnail_path)

    video = Video(
        owner_id=owner_id,
        title=title,
        description=description,
        video_file=video_media.url,
        video_file_public_id=video_media.public_id,
        thumbnail=thumbnail_media.url,
        thumbnail_public_id=thumbnail_media.public_id,
        duration=duration,
    )
    session.add(video)
    try:
        commit_or_raise(session, "publishing a video")
    except PersistenceError:
        storage.delete(video_media.public_id)
        storage.delete(thumbnail_media.public_id)
        raise

    session.refresh(video)
    logger.info(
        f"Video published: id={video.id}, owner={owner_id}, "
        f"title={title!r}, duration={duration}"
    )
    return video


def update_video(
    session: Session,
    video_id: UUID,
    user_id: UUID,
    title: Optional[str],
    description: Optional[str],
    thumbnail_path: Optional[str],
    storage: LocalMediaStorage,
) -> Video:
    """
    Update title, description and/or thumbnail of an owned video.

    Fields left as None are unchanged; empty strings are rejected. The
    new thumbnail is stored only after the text fields pass, and is
    removed again if the update cannot be committed. The temporary
    thumbnail file is gone when this returns.

    Raises:
        BadRequestError: Empty title/description, or the thumbnail upload failed.
        PersistenceError: The update could not be committed.
    """
    try:
        video = get_owned_video(session, video_id, user_id)
        if title is not None:
            title = _require_text(title, "Title")
        if description is not None:
            description = _require_text(description, "Description")

        thumbnail = None
        if thumbnail_path:
            thumbnail = storage.upload(thumbnail_path)
            if thumbnail is None:
                raise BadRequestError("Error while uploading thumbnail")
    finally:
        _discard_temp_files(thumbnail_path)

    if title is not None:
        video.title = title
    if description is not None:
        video.description = description

    old_thumbnail_id = None
    if thumbnail is not None:
        old_thumbnail_id = video.thumbnail_public_id
        video.thumbnail = thumbnail.url
        video.thumbnail_public_id = thumbnail.public_id

    try:
        commit_or_raise(session, "updating the video")
    except PersistenceError:
        if thumbnail is not None:
            storage.delete(thumbnail.public_id)
        raise

    session.refresh(video)

    if old_thumbnail_id:
        storage.delete(old_thumbnail_id)

    logger.info(f"Video updated: id={video.id}")
    return video


def delete_video(
    session: Session,
    video_id: UUID,
    user_id: UUID,
    storage: LocalMediaStorage,
) -> VideoOut:
    """Delete an owned video and its stored media. Returns the deleted record."""
    video = get_owned_video(session, video_id, user_id)
    deleted = VideoOut.model_validate(video)
    public_ids = (video.video_file_public_id, video.thumbnail_public_id)

    session.delete(video)
    commit_or_raise(session, "deleting the video")

    for public_id in public_ids:
        if public_id and not storage.delete(public_id):
            logger.warning(
                f"Stored media {public_id} for deleted video {video_id} was not removed")

    logger.info(f"Video deleted: id={video_id}")
    return deleted


def toggle_publish_status(session: Session, video_id: UUID, user_id: UUID) -> Video:
    """Flip ``is_published`` on an owned video."""
    video = get_owned_video(session, video_id, user_id)
    video.is_published = not video.is_published

    commit_or_raise(session, "toggling publish status")
    session.refresh(video)

    logger.info(f"Video {video.id} is_published={video.is_published}")
    return video
