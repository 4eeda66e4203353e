"""
SQLAlchemy models for the video sharing backend.

Models:
- User: Platform users (a user with content is a channel)
- Video: Uploaded videos with media references and view counts
- Subscription: Subscriber -> channel edges
- Tweet: Short text updates
- Comment: Comments on videos
- Like: Likes on a video, tweet or comment (see LikeTarget)
"""

from db.models.user import User
from db.models.video import Video
from db.models.subscription import Subscription
from db.models.tweet import Tweet
from db.models.comment import Comment
from db.models.like import (
    Like,
    LikeTarget,
    VideoTarget,
    TweetTarget,
    CommentTarget,
    like_column_for,
)

__all__ = [
    "User",
    "Video",
    "Subscription",
    "Tweet",
    "Comment",
    "Like",
    "LikeTarget",
    "VideoTarget",
    "TweetTarget",
    "CommentTarget",
    "like_column_for",
]
