import uuid
from sqlalchemy import (
    String, Text, Boolean, Float, BigInteger,
    ForeignKey, Index, Uuid, CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from db.base import Base, TimestampMixin


class Video(Base, TimestampMixin):
    """A published video owned by a single user.

    Media columns hold the durable URL returned by media storage plus
    the public id needed to delete the stored object later.
    """

    __tablename__ = "videos"
    __table_args__ = (
        Index("idx_videos_owner_id", "owner_id"),
        Index("idx_videos_created_at", "created_at"),
        CheckConstraint("views >= 0", name="views_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    video_file: Mapped[str] = mapped_column(Text, nullable=False)
    video_file_public_id: Mapped[str | None] = mapped_column(
        String(255), nullable=True)
    thumbnail: Mapped[str] = mapped_column(Text, nullable=False)
    thumbnail_public_id: Mapped[str | None] = mapped_column(
        String(255), nullable=True)
    duration: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    views: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True)
