"""Direct message ORM model. One row per message between two identities."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    false,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin


class DirectMessage(CuidMixin, Base):
    """Direct message. Table: direct_message. read is stored but never transitioned."""

    __tablename__ = "direct_message"

    sender_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id"), nullable=False
    )
    receiver_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id"), nullable=False
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    image_locator: Mapped[str | None] = mapped_column(String, nullable=True)
    image_storage_kind: Mapped[str | None] = mapped_column(String(16), nullable=True)
    read: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    __table_args__ = (
        Index("ix_direct_message_pair", "sender_id", "receiver_id", "created_at"),
        CheckConstraint("sender_id <> receiver_id", name="ck_direct_message_distinct"),
    )
