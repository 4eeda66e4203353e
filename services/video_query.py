"""
Video Query Engine — filtered, sorted, paginated video listing.

Builds ONE SELECT statement that runs every stage in the database:

  1. match      title contains ``text`` (case-insensitive), owner equals ``owner_id``
  2. join       LEFT OUTER JOIN users on the video owner
  3. project    display columns plus a single owner summary
  4. sort       allow-listed field, descending unless direction == "asc"
  5. paginate   OFFSET (page - 1) * size LIMIT size

Missing filter values mean "match all" for that dimension. Sort fields
are limited to SORT_FIELDS; anything else is rejected with 400.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlalchemy import Select, asc, desc, select
from sqlalchemy.orm import Session

from api.errors import BadRequestError
from api.schemas import OwnerSummary, VideoSummary
from db.models import User, Video

logger = logging.getLogger(__name__)

# ── Sorting ─────────────────────────────────────────────────────────────────
# API field name -> column. The ONLY fields a caller may sort by.
SORT_FIELDS = {
    "createdAt": Video.created_at,
    "updatedAt": Video.updated_at,
    "views": Video.views,
    "duration": Video.duration,
    "title": Video.title,
}

DEFAULT_SORT_FIELD = "createdAt"
SORT_DIRECTIONS = ("asc", "desc")

_LIKE_ESCAPE = "\\"


@dataclass
class VideoFilter:
    """Match stage input. Empty text / None owner means no restriction."""

    text: str = ""
    owner_id: Optional[UUID] = None


@dataclass
class VideoSort:
    field: str = DEFAULT_SORT_FIELD
    direction: str = "desc"

    @property
    def ascending(self) -> bool:
        return self.direction.lower() == "asc"


@dataclass
class PageRequest:
    number: int = 1
    size: int = 10

    @property
    def offset(self) -> int:
        return (self.number - 1) * self.size


def _escape_like(text: str) -> str:
    """Escape LIKE wildcards so ``text`` is matched literally."""
    return (
        text.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", f"{_LIKE_ESCAPE}%")
        .replace("_", f"{_LIKE_ESCAPE}_")
    )


def _validate(sort: VideoSort, page: PageRequest) -> None:
    if sort.field not in SORT_FIELDS:
        raise BadRequestError(
            f"Cannot sort by '{sort.field}'. "
            f"Allowed fields: {', '.join(SORT_FIELDS)}"
        )
    if sort.direction.lower() not in SORT_DIRECTIONS:
        raise BadRequestError("sortType must be 'asc' or 'desc'")
    if page.number < 1 or page.size < 1:
        raise BadRequestError("page and limit must be positive integers")


def build_video_query(
    filters: VideoFilter,
    sort: VideoSort,
    page: PageRequest,
) -> Select:
    """
    Compile the five pipeline stages into a single SELECT.

    Raises:
        BadRequestError: On a sort field outside SORT_FIELDS, an unknown
            direction, or a non-positive page/size.
    """
    _validate(sort, page)

    stmt = select(
        Video.id,
        Video.video_file,
        Video.thumbnail,
        Video.title,
        Video.description,
        Video.duration,
        Video.views,
        Video.is_published,
        Video.created_at,
        User.id.label("owner_id"),
        User.username.label("owner_username"),
        User.full_name.label("owner_full_name"),
        User.avatar.label("owner_avatar"),
    ).outerjoin(User, User.id == Video.owner_id)

    if filters.text:
        pattern = f"%{_escape_like(filters.text)}%"
        stmt = stmt.where(Video.title.ilike(pattern, escape=_LIKE_ESCAPE))
    if filters.owner_id is not None:
        stmt = stmt.where(Video.owner_id == filters.owner_id)

    order = asc if sort.ascending else desc
    # Tie-break on id so equal sort keys page deterministically
    stmt = stmt.order_by(order(SORT_FIELDS[sort.field]), order(Video.id))

    return stmt.offset(page.offset).limit(page.size)


def _to_summary(row) -> VideoSummary:
    owner = None
    if row.owner_id is not None:
        owner = OwnerSummary(
            id=row.owner_id,
            username=row.owner_username,
            full_name=row.owner_full_name,
            avatar=row.owner_avatar,
        )
    return VideoSummary(
        id=row.id,
        video_file=row.video_file,
        thumbnail=row.thumbnail,
        title=row.title,
        description=row.description,
        duration=row.duration,
        views=row.views,
        is_published=row.is_published,
        created_at=row.created_at,
        owner=owner,
    )


def query_videos(
    session: Session,
    filters: VideoFilter,
    sort: VideoSort,
    page: PageRequest,
) -> list[VideoSummary]:
    """
    Return one page of video summaries.

    Args:
        session: Database session.
        filters: Title text and owner restrictions.
        sort: Sort field and direction.
        page: 1-based page number and page size.

    Returns:
        Up to ``page.size`` VideoSummary items; may be empty.
    """
    stmt = build_video_query(filters, sort, page)
    rows = session.execute(stmt).all()

    logger.info(
        f"[VideoQuery] text={filters.text!r}, owner={filters.owner_id}, "
        f"sort={sort.field}:{sort.direction}, page={page.number}x{page.size} "
        f"-> {len(rows)} rows"
    )
    return [_to_summary(row) for row in rows]
