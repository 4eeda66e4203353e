"""
Tweet service — create, list, update and delete short text updates.

Only the owner of a tweet may update or delete it.
"""

import logging
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from api.errors import NotFoundError
from api.policies import ensure_owner
from api.schemas import TweetOut
from db.models import Tweet
from db.session import commit_or_raise

logger = logging.getLogger(__name__)


def _get_owned_tweet(session: Session, tweet_id: UUID, user_id: UUID, action: str) -> Tweet:
    tweet = session.get(Tweet, tweet_id)
    if tweet is None:
        raise NotFoundError("Tweet not found")
    ensure_owner(tweet.owner_id, user_id, f"You can only {action} your own tweets")
    return tweet


def create_tweet(session: Session, owner_id: UUID, content: str) -> Tweet:
    tweet = Tweet(owner_id=owner_id, content=content)
    session.add(tweet)
    commit_or_raise(session, "creating a tweet")
    session.refresh(tweet)

    logger.info(f"Tweet created: id={tweet.id}, owner={owner_id}")
    return tweet


def list_user_tweets(session: Session, owner_id: UUID) -> list[Tweet]:
    """Tweets by ``owner_id``, newest first."""
    return list(
        session.scalars(
            select(Tweet)
            .where(Tweet.owner_id == owner_id)
            .order_by(desc(Tweet.created_at), desc(Tweet.id))
        )
    )


def update_tweet(session: Session, tweet_id: UUID, user_id: UUID, content: str) -> Tweet:
    tweet = _get_owned_tweet(session, tweet_id, user_id, "update")
    tweet.content = content
    commit_or_raise(session, "updating the tweet")
    session.refresh(tweet)

    logger.info(f"Tweet updated: id={tweet.id}")
    return tweet


def delete_tweet(session: Session, tweet_id: UUID, user_id: UUID) -> TweetOut:
    """Delete an owned tweet. Returns the deleted record."""
    tweet = _get_owned_tweet(session, tweet_id, user_id, "delete")
    deleted = TweetOut.model_validate(tweet)

    session.delete(tweet)
    commit_or_raise(session, "deleting a tweet")

    logger.info(f"Tweet deleted: id={tweet_id}")
    return deleted
