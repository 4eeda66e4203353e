"""
Like model and its target variant.

A like points at exactly one of a video, a tweet or a comment. The row
keeps one nullable foreign key per target kind (so each stays a real
foreign key) and a CHECK constraint guarantees exactly one is set.
Code outside this module works with the ``LikeTarget`` variant instead
of probing the three columns.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Union

from sqlalchemy import CheckConstraint, ForeignKey, Index, Uuid, DateTime, func
from sqlalchemy.orm import InstrumentedAttribute, Mapped, mapped_column

from db.base import Base


@dataclass(frozen=True)
class VideoTarget:
    id: uuid.UUID


@dataclass(frozen=True)
class TweetTarget:
    id: uuid.UUID


@dataclass(frozen=True)
class CommentTarget:
    id: uuid.UUID


LikeTarget = Union[VideoTarget, TweetTarget, CommentTarget]


class Like(Base):
    __tablename__ = "likes"
    __table_args__ = (
        Index("idx_likes_video_id", "video_id"),
        Index("idx_likes_tweet_id", "tweet_id"),
        Index("idx_likes_comment_id", "comment_id"),
        CheckConstraint(
            "(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END)"
            " + (CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END)"
            " + (CASE WHEN comment_id IS NULL THEN 0 ELSE 1 END) = 1",
            name="exactly_one_target",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4)
    liked_by_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    video_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("videos.id", ondelete="CASCADE"), nullable=True)
    tweet_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("tweets.id", ondelete="CASCADE"), nullable=True)
    comment_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now())

    @classmethod
    def for_target(cls, liked_by_id: uuid.UUID, target: LikeTarget) -> "Like":
        """Build a like row pointing at ``target``."""
        like = cls(liked_by_id=liked_by_id)
        match target:
            case VideoTarget(id=target_id):
                like.video_id = target_id
            case TweetTarget(id=target_id):
                like.tweet_id = target_id
            case CommentTarget(id=target_id):
                like.comment_id = target_id
            case _:
                raise TypeError(f"Unknown like target: {target!r}")
        return like

    @property
    def target(self) -> LikeTarget:
        """Return the variant this like points at."""
        if self.video_id is not None:
            return VideoTarget(self.video_id)
        if self.tweet_id is not None:
            return TweetTarget(self.tweet_id)
        if self.comment_id is not None:
            return CommentTarget(self.comment_id)
        raise ValueError(f"Like {self.id} has no target")


def like_column_for(kind: type) -> InstrumentedAttribute:
    """Return the ``likes`` foreign key column that stores targets of ``kind``."""
    if kind is VideoTarget:
        return Like.video_id
    if kind is TweetTarget:
        return Like.tweet_id
    if kind is CommentTarget:
        return Like.comment_id
    raise TypeError(f"Unknown like target kind: {kind!r}")
