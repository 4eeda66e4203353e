"""
Pydantic schemas for the video sharing API.

Defines all request/response models. JSON keys are camelCase
(``totalViews``, ``isPublished``); Python attributes stay snake_case.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model: camelCase aliases, populated from ORM rows or by name."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# Domain Schemas
# =============================================================================

class OwnerSummary(ApiModel):
    """Minimal owner identity embedded in video payloads."""

    id: uuid.UUID
    username: str
    full_name: Optional[str] = None
    avatar: Optional[str] = None


class ChannelStats(ApiModel):
    """
    Aggregate statistics for a channel.

    Computed fresh on every request; each field is an independent
    point-in-time read.
    """

    total_videos: int = Field(..., ge=0, description="Videos owned by the channel")
    total_subscribers: int = Field(..., ge=0, description="Subscriptions to the channel")
    total_video_likes: int = Field(..., ge=0, description="Likes on the channel's videos")
    total_tweet_likes: int = Field(..., ge=0, description="Likes on the channel's tweets")
    total_comment_likes: int = Field(..., ge=0, description="Likes on the channel's comments")
    total_views: int = Field(..., ge=0, description="Sum of views across the channel's videos")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "totalVideos": 3,
                "totalSubscribers": 12,
                "totalVideoLikes": 40,
                "totalTweetLikes": 5,
                "totalCommentLikes": 2,
                "totalViews": 15,
            }
        }
    )


class VideoSummary(ApiModel):
    """Display projection of a video returned by the query engine."""

    id: uuid.UUID
    video_file: str
    thumbnail: str
    title: str
    description: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime
    owner: Optional[OwnerSummary] = Field(
        default=None,
        description="Owning user; null only if the owner row is missing"
    )


class VideoOut(ApiModel):
    """Full video record."""

    id: uuid.UUID
    owner_id: uuid.UUID
    title: str
    description: str
    video_file: str
    thumbnail: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime
    updated_at: datetime


class VideoDetail(VideoOut):
    owner: Optional[OwnerSummary] = None


class TweetCreate(ApiModel):
    content: str = Field(
        ...,
        min_length=1,
        max_length=280,
        description="Tweet text",
        examples=["Shipping a new video tonight"]
    )


class TweetUpdate(TweetCreate):
    pass


class TweetOut(ApiModel):
    id: uuid.UUID
    owner_id: uuid.UUID
    content: str
    created_at: datetime
    updated_at: datetime


# =============================================================================
# Response Envelopes
# =============================================================================

class ApiResponse(ApiModel):
    """
    Common success envelope.

    Concrete responses subclass this and add a typed ``data`` field.
    """

    status_code: int = Field(default=200, description="HTTP status code")
    message: str = Field(default="Success", description="Human readable result")
    success: bool = Field(default=True)


class ErrorResponse(ApiModel):
    """Error envelope rendered for every ApiError."""

    status_code: int
    message: str
    success: bool = False


class ChannelStatsResponse(ApiResponse):
    data: ChannelStats


class VideoListResponse(ApiResponse):
    data: list[VideoOut]


class VideoPageResponse(ApiResponse):
    data: list[VideoSummary]
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)


class VideoResponse(ApiResponse):
    data: VideoOut


class VideoDetailResponse(ApiResponse):
    data: VideoDetail


class TweetResponse(ApiResponse):
    data: TweetOut


class TweetListResponse(ApiResponse):
    data: list[TweetOut]


class HealthResponse(BaseModel):
    """Response schema for health check endpoint."""

    status: str = Field(..., description="Server health status")
    version: str = Field(..., description="API version")
    database: str = Field(..., description="Configured database dialect")
