"""
Video Sharing Backend - FastAPI Application

This is the main entry point for the HTTP API. It exposes endpoints for
the channel dashboard, video search and video/tweet management.

Business logic is delegated to the services package - this file only handles:
- API routing
- Request/response handling
- Error envelopes
- Middleware configuration
- Health checks
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
from uuid import UUID

from fastapi import Depends, FastAPI, File, Form, Query, Request, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api.dependencies import (
    get_current_user_id,
    get_media_probe,
    get_media_storage,
    spool_upload,
)
from api.errors import ApiError, parse_uuid
from api.policies import require_results
from api.schemas import (
    ChannelStatsResponse,
    ErrorResponse,
    HealthResponse,
    TweetCreate,
    TweetListResponse,
    TweetOut,
    TweetResponse,
    TweetUpdate,
    VideoDetailResponse,
    VideoListResponse,
    VideoOut,
    VideoPageResponse,
    VideoResponse,
)
from clients.media_probe import FFProbe
from clients.media_storage import LocalMediaStorage
from config import config
from db.session import engine, get_db
from services import tweets as tweet_service
from services import videos as video_service
from services.channel_stats import compute_channel_stats
from services.video_query import (
    DEFAULT_SORT_FIELD,
    PageRequest,
    VideoFilter,
    VideoSort,
    query_videos,
)


# Configure logging
logging.basicConfig(
    level=getattr(logging, config.server.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler for startup/shutdown events.

    Validates configuration on startup and releases the connection
    pool on shutdown.
    """
    # Startup
    logger.info("Starting Video Sharing Backend...")

    warnings = config.validate()
    for warning in warnings:
        logger.warning(f"Config warning: {warning}")

    logger.info(f"Database dialect: {engine.dialect.name}")
    logger.info(f"Debug mode: {config.server.debug}")

    yield

    # Shutdown
    logger.info("Shutting down Video Sharing Backend...")
    engine.dispose()


# Initialize FastAPI application
app = FastAPI(
    title="Video Sharing Backend",
    description="Video publishing, tweets and channel dashboard API",
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs" if config.server.debug else None,
    redoc_url="/redoc" if config.server.debug else None,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.server.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["*"],
)

# Serve stored media
os.makedirs(config.media.storage_dir, exist_ok=True)
app.mount(
    config.media.base_url,
    StaticFiles(directory=config.media.storage_dir),
    name="media",
)


# =============================================================================
# Error Envelopes
# =============================================================================

def _error_response(status_code: int, message: str) -> JSONResponse:
    payload = ErrorResponse(status_code=status_code, message=message)
    return JSONResponse(
        status_code=status_code,
        content=payload.model_dump(by_alias=True),
    )


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    logger.warning(f"Validation error on {request.url.path}: {details}")
    return _error_response(status.HTTP_400_BAD_REQUEST, details or "Invalid request")


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception(f"Database error on {request.url.path}: {exc}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Database operation failed",
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.url.path}: {exc}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
    )


# =============================================================================
# System Endpoints
# =============================================================================

@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check() -> HealthResponse:
    """
    Health check endpoint for container orchestration.

    Returns:
        HealthResponse with server status
    """
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        database=engine.dialect.name,
    )


@app.get("/", tags=["System"])
async def root() -> dict[str, str]:
    """Root endpoint with API information."""
    return {
        "service": "Video Sharing Backend",
        "version": API_VERSION,
        "docs": "/docs" if config.server.debug else "Disabled in production"
    }


# =============================================================================
# Dashboard Endpoints
# =============================================================================

@app.get(
    f"{API_PREFIX}/dashboard/stats",
    response_model=ChannelStatsResponse,
    tags=["Dashboard"],
)
def get_channel_stats(
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> ChannelStatsResponse:
    """Aggregate counts and total views for the caller's channel."""
    stats = compute_channel_stats(db, user_id)
    return ChannelStatsResponse(
        data=stats,
        message="Channel stats fetched successfully",
    )


@app.get(
    f"{API_PREFIX}/dashboard/videos",
    response_model=VideoListResponse,
    tags=["Dashboard"],
)
def get_channel_videos(
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> VideoListResponse:
    """All of the caller's videos, newest first. 404 if there are none."""
    videos = video_service.list_channel_videos(db, user_id)
    require_results(videos, "No videos found for this channel")
    return VideoListResponse(
        data=[VideoOut.model_validate(v) for v in videos],
        message="Channel videos fetched successfully",
    )


# =============================================================================
# Video Endpoints
# =============================================================================

@app.get(
    f"{API_PREFIX}/videos",
    response_model=VideoPageResponse,
    tags=["Videos"],
)
def get_all_videos(
    page: int = Query(1, ge=1),
    limit: int = Query(
        config.query.default_page_size, ge=1, le=config.query.max_page_size),
    query: str = Query(""),
    sort_by: str = Query(DEFAULT_SORT_FIELD, alias="sortBy"),
    sort_type: str = Query("desc", alias="sortType"),
    owner: Optional[str] = Query(None, alias="userId"),
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> VideoPageResponse:
    """
    Search, sort and paginate videos.

    Query params:
        page: 1-based page number
        limit: Page size
        query: Case-insensitive title substring
        sortBy: createdAt | updatedAt | views | duration | title
        sortType: asc | desc
        userId: Restrict to one owner
    """
    owner_id = parse_uuid(owner, "user") if owner else None

    videos = query_videos(
        db,
        VideoFilter(text=query.strip(), owner_id=owner_id),
        VideoSort(field=sort_by, direction=sort_type),
        PageRequest(number=page, size=limit),
    )
    require_results(videos, "Videos are not found")

    return VideoPageResponse(
        data=videos,
        page=page,
        limit=limit,
        message="Videos fetched successfully",
    )


@app.post(
    f"{API_PREFIX}/videos",
    response_model=VideoResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Videos"],
)
async def publish_a_video(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    video_file: UploadFile = File(..., alias="videoFile"),
    thumbnail: UploadFile = File(...),
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    storage: LocalMediaStorage = Depends(get_media_storage),
    probe: FFProbe = Depends(get_media_probe),
) -> VideoResponse:
    """Upload a video and its thumbnail and publish it on the caller's channel."""
    video_path = await spool_upload(video_file)
    thumbnail_path = await spool_upload(thumbnail)

    video = await video_service.publish_video(
        db,
        owner_id=user_id,
        title=title,
        description=description,
        video_path=video_path,
        thumbnail_path=thumbnail_path,
        storage=storage,
        probe=probe,
    )
    return VideoResponse(
        status_code=status.HTTP_201_CREATED,
        data=VideoOut.model_validate(video),
        message="Video published successfully",
    )


@app.get(
    f"{API_PREFIX}/videos/{{video_id}}",
    response_model=VideoDetailResponse,
    tags=["Videos"],
)
def get_video_by_id(
    video_id: str,
    db: Session = Depends(get_db),
) -> VideoDetailResponse:
    detail = video_service.get_video_detail(db, parse_uuid(video_id, "video"))
    return VideoDetailResponse(data=detail, message="Video fetched successfully")


@app.patch(
    f"{API_PREFIX}/videos/{{video_id}}",
    response_model=VideoResponse,
    tags=["Videos"],
)
async def update_video(
    video_id: str,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    thumbnail: Optional[UploadFile] = File(None),
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    storage: LocalMediaStorage = Depends(get_media_storage),
) -> VideoResponse:
    """Update title, description and/or thumbnail of one of the caller's videos."""
    vid = parse_uuid(video_id, "video")
    # Ownership is checked before the thumbnail is spooled
    video_service.get_owned_video(db, vid, user_id)

    thumbnail_path = await spool_upload(thumbnail) if thumbnail is not None else None

    video = video_service.update_video(
        db,
        video_id=vid,
        user_id=user_id,
        title=title,
        description=description,
        thumbnail_path=thumbnail_path,
        storage=storage,
    )
    return VideoResponse(
        data=VideoOut.model_validate(video),
        message="Video updated successfully",
    )


@app.delete(
    f"{API_PREFIX}/videos/{{video_id}}",
    response_model=VideoResponse,
    tags=["Videos"],
)
def delete_video(
    video_id: str,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    storage: LocalMediaStorage = Depends(get_media_storage),
) -> VideoResponse:
    deleted = video_service.delete_video(
        db, parse_uuid(video_id, "video"), user_id, storage)
    return VideoResponse(data=deleted, message="Video deleted successfully")


@app.patch(
    f"{API_PREFIX}/videos/toggle/publish/{{video_id}}",
    response_model=VideoResponse,
    tags=["Videos"],
)
def toggle_publish_status(
    video_id: str,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> VideoResponse:
    video = video_service.toggle_publish_status(
        db, parse_uuid(video_id, "video"), user_id)
    return VideoResponse(
        data=VideoOut.model_validate(video),
        message="Video publish status toggled successfully",
    )


# =============================================================================
# Tweet Endpoints
# =============================================================================

@app.post(
    f"{API_PREFIX}/tweets",
    response_model=TweetResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Tweets"],
)
def create_tweet(
    request: TweetCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> TweetResponse:
    tweet = tweet_service.create_tweet(db, user_id, request.content)
    return TweetResponse(
        status_code=status.HTTP_201_CREATED,
        data=TweetOut.model_validate(tweet),
        message="Tweet created successfully",
    )


@app.get(
    f"{API_PREFIX}/tweets/user/{{user_id}}",
    response_model=TweetListResponse,
    tags=["Tweets"],
)
def get_user_tweets(
    user_id: str,
    db: Session = Depends(get_db),
) -> TweetListResponse:
    tweets = tweet_service.list_user_tweets(db, parse_uuid(user_id, "user"))
    require_results(tweets, "Tweets are not found")
    return TweetListResponse(
        data=[TweetOut.model_validate(t) for t in tweets],
        message="User tweets fetched successfully",
    )


@app.patch(
    f"{API_PREFIX}/tweets/{{tweet_id}}",
    response_model=TweetResponse,
    tags=["Tweets"],
)
def update_tweet(
    tweet_id: str,
    request: TweetUpdate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> TweetResponse:
    tweet = tweet_service.update_tweet(
        db, parse_uuid(tweet_id, "tweet"), user_id, request.content)
    return TweetResponse(
        data=TweetOut.model_validate(tweet),
        message="Tweet updated successfully",
    )


@app.delete(
    f"{API_PREFIX}/tweets/{{tweet_id}}",
    response_model=TweetResponse,
    tags=["Tweets"],
)
def delete_tweet(
    tweet_id: str,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> TweetResponse:
    deleted = tweet_service.delete_tweet(db, parse_uuid(tweet_id, "tweet"), user_id)
    return TweetResponse(data=deleted, message="Tweet deleted successfully")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "server:app",
        host=config.server.host,
        port=config.server.port,
        reload=config.server.debug,
        log_level=config.server.log_level.lower()
    )
