"""
Channel Stats — aggregate counts for a channel's dashboard.

Computes five independent counts and one summed metric for a channel
(a user in their capacity as content owner):

  - videos owned by the channel
  - subscriptions to the channel
  - likes on the channel's videos / tweets / comments
  - total views across the channel's videos

Likes reference their target, not the target's owner, so each like
count resolves the channel's owned ids first and then counts likes
whose target is in that set.

Every read is validated: an exception from the database or a missing
value where a count was required raises AggregationError naming the
failing step. A channel with no videos has total_views == 0.
"""

import logging
from typing import Any, Callable, Optional
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api.errors import AggregationError
from api.schemas import ChannelStats
from db.models import (
    Comment,
    CommentTarget,
    Like,
    Subscription,
    Tweet,
    TweetTarget,
    Video,
    VideoTarget,
    like_column_for,
)

logger = logging.getLogger(__name__)

# Content model owning each like target kind
_OWNED_CONTENT = {
    VideoTarget: Video,
    TweetTarget: Tweet,
    CommentTarget: Comment,
}


def _owned_ids(model: Any, owner_id: UUID) -> Select:
    """Id projection of ``model`` rows owned by ``owner_id``."""
    return select(model.id).where(model.owner_id == owner_id)


def _count(session: Session, stmt: Select) -> Optional[int]:
    return session.scalar(select(func.count()).select_from(stmt.subquery()))


def _checked(step: str, read: Callable[[], Optional[int]]) -> int:
    """
    Run one sub-aggregation and validate its result.

    Raises:
        AggregationError: If the read raises or returns None.
    """
    try:
        value = read()
    except SQLAlchemyError as e:
        logger.error(f"[ChannelStats] {step} failed: {e}")
        raise AggregationError(
            f"Something went wrong while counting {step}") from e

    if value is None:
        logger.error(f"[ChannelStats] {step} returned no value")
        raise AggregationError(f"Something went wrong while counting {step}")

    return int(value)


def count_videos(session: Session, owner_id: UUID) -> Optional[int]:
    return _count(session, _owned_ids(Video, owner_id))


def count_subscribers(session: Session, owner_id: UUID) -> Optional[int]:
    return _count(
        session,
        select(Subscription.id).where(Subscription.channel_id == owner_id),
    )


def count_target_likes(
    session: Session, owner_id: UUID, kind: type
) -> Optional[int]:
    """
    Count likes whose ``kind`` target is owned by ``owner_id``.

    Args:
        session: Database session.
        owner_id: Channel owner.
        kind: One of VideoTarget, TweetTarget, CommentTarget.
    """
    column = like_column_for(kind)
    owned = _owned_ids(_OWNED_CONTENT[kind], owner_id)
    return _count(session, select(Like.id).where(column.in_(owned)))


def sum_views(session: Session, owner_id: UUID) -> int:
    """
    Sum ``views`` over the channel's videos.

    Grouped by owner, so a channel without videos yields no row; that
    is reported as 0, not as a failure.
    """
    row = session.execute(
        select(func.sum(Video.views).label("total_views"))
        .where(Video.owner_id == owner_id)
        .group_by(Video.owner_id)
    ).first()
    if row is None:
        return 0
    return row.total_views


def compute_channel_stats(session: Session, owner_id: UUID) -> ChannelStats:
    """
    Compute the dashboard statistics for a channel.

    The reads are independent and run one after another on the given
    session.

    Args:
        session: Database session.
        owner_id: UUID of the channel owner.

    Returns:
        ChannelStats for the channel.

    Raises:
        AggregationError: If any sub-aggregation fails.
    """
    stats = ChannelStats(
        total_videos=_checked(
            "total videos", lambda: count_videos(session, owner_id)),
        total_subscribers=_checked(
            "total subscribers", lambda: count_subscribers(session, owner_id)),
        total_video_likes=_checked(
            "total video likes",
            lambda: count_target_likes(session, owner_id, VideoTarget)),
        total_tweet_likes=_checked(
            "total tweet likes",
            lambda: count_target_likes(session, owner_id, TweetTarget)),
        total_comment_likes=_checked(
            "total comment likes",
            lambda: count_target_likes(session, owner_id, CommentTarget)),
        total_views=_checked(
            "total views", lambda: sum_views(session, owner_id)),
    )

    logger.info(
        f"[ChannelStats] owner={owner_id}: videos={stats.total_videos}, "
        f"subscribers={stats.total_subscribers}, views={stats.total_views}"
    )
    return stats
