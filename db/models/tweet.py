import uuid
from sqlalchemy import Text, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from db.base import Base, TimestampMixin


class Tweet(Base, TimestampMixin):
    """Short text update posted by a user."""

    __tablename__ = "tweets"
    __table_args__ = (
        Index("idx_tweets_owner_id", "owner_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
