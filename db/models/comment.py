import uuid
from sqlalchemy import Text, ForeignKey, Index, Uuid, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column
from db.base import Base
from datetime import datetime


class Comment(Base):
    __tablename__ = "comments"
    __table_args__ = (
        Index("idx_comments_owner_id", "owner_id"),
        Index("idx_comments_video_id", "video_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    video_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("videos.id", ondelete="CASCADE"), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now())
