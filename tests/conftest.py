"""
Shared pytest fixtures for the video sharing test suite.

Provides reusable fixtures for:
- An in-memory SQLite database shared across threads (StaticPool)
- A TestClient with database and media dependencies overridden
- Factories for users, videos, subscriptions, tweets, comments, likes
"""

import os
import tempfile

# Must be set before any project module reads config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("MEDIA_STORAGE_DIR", tempfile.mkdtemp(prefix="videoshare-media-"))
os.environ.setdefault("MEDIA_TEMP_DIR", tempfile.mkdtemp(prefix="videoshare-tmp-"))

import uuid
from datetime import datetime, timedelta
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from api.dependencies import get_media_probe, get_media_storage
from clients.media_storage import LocalMediaStorage
from db.base import Base
from db.models import Comment, Like, Subscription, Tweet, User, Video
from db.session import get_db
from server import app


BASE_TIME = datetime(2026, 1, 1, 12, 0, 0)


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# Media Fixtures
# =============================================================================

@pytest.fixture
def media_storage(tmp_path):
    """Real filesystem storage rooted in a per-test directory."""
    return LocalMediaStorage(root_dir=str(tmp_path / "media"), base_url="/media")


@pytest.fixture
def media_probe():
    """Probe stub reporting a 42.5 second duration."""
    probe = MagicMock()
    probe.probe_duration = AsyncMock(return_value=42.5)
    return probe


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture
def client(session_factory, media_storage, media_probe):
    """TestClient wired to the per-test database and media stubs."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_storage] = lambda: media_storage
    app.dependency_overrides[get_media_probe] = lambda: media_probe

    yield TestClient(app)

    app.dependency_overrides.clear()


def auth(user: User) -> dict[str, str]:
    """Headers identifying ``user`` as the caller."""
    return {"X-User-Id": str(user.id)}


# =============================================================================
# Factories
# =============================================================================

def make_user(session, username: str = "creator", full_name: Optional[str] = None) -> User:
    user = User(
        username=username,
        email=f"{username}@example.com",
        full_name=full_name or username.title(),
    )
    session.add(user)
    session.commit()
    return user


def make_video(
    session,
    owner_id: uuid.UUID,
    title: str = "Untitled",
    views: int = 0,
    created_at: Optional[datetime] = None,
    duration: float = 60.0,
    is_published: bool = True,
) -> Video:
    video = Video(
        owner_id=owner_id,
        title=title,
        description=f"About {title}",
        video_file=f"/media/{uuid.uuid4().hex}.mp4",
        thumbnail=f"/media/{uuid.uuid4().hex}.jpg",
        duration=duration,
        views=views,
        is_published=is_published,
    )
    if created_at is not None:
        video.created_at = created_at
        video.updated_at = created_at
    session.add(video)
    session.commit()
    return video


def make_videos(session, owner_id: uuid.UUID, count: int, prefix: str = "Video") -> list[Video]:
    """``count`` videos created one hour apart, oldest first."""
    return [
        make_video(
            session,
            owner_id,
            title=f"{prefix} {i}",
            views=i,
            created_at=BASE_TIME + timedelta(hours=i),
        )
        for i in range(count)
    ]


def make_tweet(session, owner_id: uuid.UUID, content: str = "hello", created_at: Optional[datetime] = None) -> Tweet:
    tweet = Tweet(owner_id=owner_id, content=content)
    if created_at is not None:
        tweet.created_at = created_at
        tweet.updated_at = created_at
    session.add(tweet)
    session.commit()
    return tweet


def make_comment(session, owner_id: uuid.UUID, video_id: uuid.UUID, content: str = "nice") -> Comment:
    comment = Comment(owner_id=owner_id, video_id=video_id, content=content)
    session.add(comment)
    session.commit()
    return comment


def make_like(session, liked_by_id: uuid.UUID, target) -> Like:
    like = Like.for_target(liked_by_id, target)
    session.add(like)
    session.commit()
    return like


def subscribe(session, subscriber_id: uuid.UUID, channel_id: uuid.UUID) -> Subscription:
    sub = Subscription(subscriber_id=subscriber_id, channel_id=channel_id)
    session.add(sub)
    session.commit()
    return sub
