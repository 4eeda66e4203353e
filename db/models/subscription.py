import uuid
from sqlalchemy import ForeignKey, Index, UniqueConstraint, Uuid, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column
from db.base import Base
from datetime import datetime


class Subscription(Base):
    """Directed edge: ``subscriber`` follows the channel owned by ``channel``."""

    __tablename__ = "subscriptions"
    __table_args__ = (
        Index("idx_subscriptions_channel_id", "channel_id"),
        UniqueConstraint(
            "subscriber_id", "channel_id",
            name="uq_subscriptions_subscriber_channel",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4)
    subscriber_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    channel_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now())
