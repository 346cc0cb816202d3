"""Initial schema: users, patients, media records, shares, comments, direct messages

Revision ID: 3f1a9c2b7d40
Revises:
Create Date: 2026-10-19 09:12:41.118204

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1a9c2b7d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create initial schema."""
    # Identity directory
    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("specialty", sa.String(), nullable=True),
        sa.Column("hospital", sa.String(), nullable=True),
        sa.Column("role", sa.String(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    # Patients (subjects of media records)
    op.create_table(
        "patient",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("phone_number", sa.String(), nullable=True),
        sa.Column("doctor_id", sa.String(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["doctor_id"], ["app_user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_patient_doctor_id"), "patient", ["doctor_id"], unique=False)

    # Media records
    op.create_table(
        "media_record",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("owner_id", sa.String(), nullable=False),
        sa.Column("subject_id", sa.String(), nullable=False),
        sa.Column("locator", sa.String(), nullable=False),
        sa.Column("storage_kind", sa.String(length=16), nullable=False),
        sa.Column("remote_delete_token", sa.String(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("captured_at", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "storage_kind IN ('remote', 'local')", name="ck_media_record_storage_kind"
        ),
        sa.ForeignKeyConstraint(["owner_id"], ["app_user.id"]),
        sa.ForeignKeyConstraint(["subject_id"], ["patient.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_media_record_owner_id"), "media_record", ["owner_id"], unique=False
    )
    op.create_index(
        "ix_media_record_subject_captured",
        "media_record",
        ["subject_id", "captured_at"],
        unique=False,
    )

    # Share set
    op.create_table(
        "media_share",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("media_id", sa.String(), nullable=False),
        sa.Column("identity_id", sa.String(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["media_id"], ["media_record.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["identity_id"], ["app_user.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("media_id", "identity_id", name="uq_media_share_identity"),
    )
    op.create_index(
        op.f("ix_media_share_identity_id"), "media_share", ["identity_id"], unique=False
    )

    # Comment threads
    op.create_table(
        "media_comment",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("media_id", sa.String(), nullable=False),
        sa.Column("author_id", sa.String(), nullable=False),
        sa.Column("text", sa.Text(), nullable=True),
        sa.Column("image_locator", sa.String(), nullable=True),
        sa.Column("image_storage_kind", sa.String(length=16), nullable=True),
        sa.Column("image_delete_token", sa.String(), nullable=True),
        sa.Column("posted_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "text IS NOT NULL OR image_locator IS NOT NULL",
            name="ck_media_comment_content",
        ),
        sa.ForeignKeyConstraint(["media_id"], ["media_record.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["app_user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_media_comment_media_posted",
        "media_comment",
        ["media_id", "posted_at"],
        unique=False,
    )

    # Direct messages
    op.create_table(
        "direct_message",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("sender_id", sa.String(), nullable=False),
        sa.Column("receiver_id", sa.String(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("image_locator", sa.String(), nullable=True),
        sa.Column("image_storage_kind", sa.String(length=16), nullable=True),
        sa.Column("read", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("sender_id <> receiver_id", name="ck_direct_message_distinct"),
        sa.ForeignKeyConstraint(["sender_id"], ["app_user.id"]),
        sa.ForeignKeyConstraint(["receiver_id"], ["app_user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_direct_message_pair",
        "direct_message",
        ["sender_id", "receiver_id", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index("ix_direct_message_pair", table_name="direct_message")
    op.drop_table("direct_message")
    op.drop_index("ix_media_comment_media_posted", table_name="media_comment")
    op.drop_table("media_comment")
    op.drop_index(op.f("ix_media_share_identity_id"), table_name="media_share")
    op.drop_table("media_share")
    op.drop_index("ix_media_record_subject_captured", table_name="media_record")
    op.drop_index(op.f("ix_media_record_owner_id"), table_name="media_record")
    op.drop_table("media_record")
    op.drop_index(op.f("ix_patient_doctor_id"), table_name="patient")
    op.drop_table("patient")
    op.drop_table("app_user")
