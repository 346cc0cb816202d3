"""Media record ORM models: the record, its share set and its comment thread."""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, EntityModel


class MediaRecord(EntityModel, Base):
    """Stored image metadata. Table: media_record.

    locator is where the bytes live (remote URL or local path);
    remote_delete_token is set only for storage_kind 'remote'.
    """

    __tablename__ = "media_record"

    owner_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id"), nullable=False, index=True
    )
    subject_id: Mapped[str] = mapped_column(
        String, ForeignKey("patient.id"), nullable=False
    )
    locator: Mapped[str] = mapped_column(String, nullable=False)
    storage_kind: Mapped[str] = mapped_column(String(16), nullable=False)
    remote_delete_token: Mapped[str | None] = mapped_column(String, nullable=True)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    captured_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    __table_args__ = (
        Index("ix_media_record_subject_captured", "subject_id", "captured_at"),
        CheckConstraint(
            "storage_kind IN ('remote', 'local')", name="ck_media_record_storage_kind"
        ),
    )


class MediaShare(CuidMixin, Base):
    """One identity in a record's shared_with set. Table: media_share.

    The unique (media_id, identity_id) pair makes add-to-set idempotent.
    """

    __tablename__ = "media_share"

    media_id: Mapped[str] = mapped_column(
        String, ForeignKey("media_record.id", ondelete="CASCADE"), nullable=False
    )
    identity_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("media_id", "identity_id", name="uq_media_share_identity"),
    )


class MediaComment(CuidMixin, Base):
    """One entry in a record's append-only comment thread. Table: media_comment."""

    __tablename__ = "media_comment"

    media_id: Mapped[str] = mapped_column(
        String, ForeignKey("media_record.id", ondelete="CASCADE"), nullable=False
    )
    author_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id"), nullable=False
    )
    text: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_locator: Mapped[str | None] = mapped_column(String, nullable=True)
    image_storage_kind: Mapped[str | None] = mapped_column(String(16), nullable=True)
    image_delete_token: Mapped[str | None] = mapped_column(String, nullable=True)
    posted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    __table_args__ = (
        Index("ix_media_comment_media_posted", "media_id", "posted_at"),
        CheckConstraint(
            "text IS NOT NULL OR image_locator IS NOT NULL",
            name="ck_media_comment_content",
        ),
    )
