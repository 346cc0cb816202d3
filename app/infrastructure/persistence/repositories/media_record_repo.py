"""Media record repository: records, share sets and comment threads. Returns application DTOs.

shared_with and comments live in their own tables so that adding a share
or appending a comment is a single INSERT; concurrent writers never
overwrite each other's additions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, cast

from sqlalchemy import delete, insert, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.media import (
    CommentEntryCreate,
    CommentEntryResult,
    DeletedMedia,
    MediaRecordCreate,
    MediaRecordResult,
)
from app.application.dtos.storage import StoredObjectRef
from app.application.dtos.user import IdentityProfile
from app.domain.enums import StorageKind
from app.infrastructure.persistence.models.media_record import (
    MediaComment,
    MediaRecord,
    MediaShare,
)
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.user_directory_repo import (
    user_to_profile,
)
from app.shared.utils import ensure_utc, generate_cuid


def _utc(dt: datetime) -> datetime:
    return cast(datetime, ensure_utc(dt))


def _create_to_record(d: MediaRecordCreate) -> MediaRecord:
    """Map MediaRecordCreate (write-model) to ORM MediaRecord for persistence."""
    return MediaRecord(
        id=d.id,
        owner_id=d.owner_id,
        subject_id=d.subject_id,
        locator=d.locator,
        storage_kind=d.storage_kind.value,
        remote_delete_token=d.remote_delete_token,
        notes=d.notes,
        captured_at=d.captured_at,
    )


def _record_to_result(
    r: MediaRecord,
    shared_with: frozenset[str] = frozenset(),
    owner: IdentityProfile | None = None,
) -> MediaRecordResult:
    """Map ORM MediaRecord to application MediaRecordResult."""
    return MediaRecordResult(
        id=r.id,
        owner_id=r.owner_id,
        subject_id=r.subject_id,
        locator=r.locator,
        storage_kind=StorageKind(r.storage_kind),
        remote_delete_token=r.remote_delete_token,
        notes=r.notes,
        captured_at=_utc(r.captured_at),
        created_at=ensure_utc(r.created_at),
        shared_with=shared_with,
        owner=owner,
    )


def _comment_to_result(
    c: MediaComment, author: IdentityProfile | None = None
) -> CommentEntryResult:
    """Map ORM MediaComment to application CommentEntryResult."""
    return CommentEntryResult(
        id=c.id,
        media_id=c.media_id,
        author_id=c.author_id,
        text=c.text,
        image_locator=c.image_locator,
        image_storage_kind=(
            StorageKind(c.image_storage_kind) if c.image_storage_kind else None
        ),
        posted_at=_utc(c.posted_at),
        author=author,
    )


class MediaRecordRepository(BaseRepository[MediaRecord]):
    """Media record repository. create() accepts MediaRecordCreate; reads return MediaRecordResult."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, MediaRecord)

    async def _shares_for(self, media_ids: list[str]) -> dict[str, frozenset[str]]:
        """Return shared_with sets keyed by media id (batch)."""
        if not media_ids:
            return {}
        result = await self.db.execute(
            select(MediaShare.media_id, MediaShare.identity_id).where(
                MediaShare.media_id.in_(media_ids)
            )
        )
        grouped: dict[str, set[str]] = {}
        for media_id, identity_id in result.all():
            grouped.setdefault(media_id, set()).add(identity_id)
        return {k: frozenset(v) for k, v in grouped.items()}

    async def _to_results(self, rows: list[MediaRecord]) -> list[MediaRecordResult]:
        shares = await self._shares_for([r.id for r in rows])
        return [_record_to_result(r, shares.get(r.id, frozenset())) for r in rows]

    async def create(self, data: MediaRecordCreate) -> MediaRecordResult:
        """Persist a new record. shared_with and comments start empty."""
        row = await self._add(_create_to_record(data))
        return _record_to_result(row)

    async def get_by_id(self, media_id: str) -> MediaRecordResult | None:
        row = await self._get_orm_by_id(media_id)
        if row is None:
            return None
        return (await self._to_results([row]))[0]

    async def find_by_subject(self, subject_id: str) -> list[MediaRecordResult]:
        """Return records for subject, newest capture first."""
        result = await self.db.execute(
            select(MediaRecord)
            .where(MediaRecord.subject_id == subject_id)
            .order_by(MediaRecord.captured_at.desc(), MediaRecord.id.desc())
        )
        return await self._to_results(list(result.scalars().all()))

    async def find_shared_with(self, identity_id: str) -> list[MediaRecordResult]:
        """Return records shared with identity, newest capture first, with owner profile joined."""
        result = await self.db.execute(
            select(MediaRecord, User)
            .join(MediaShare, MediaShare.media_id == MediaRecord.id)
            .outerjoin(User, User.id == MediaRecord.owner_id)
            .where(MediaShare.identity_id == identity_id)
            .order_by(MediaRecord.captured_at.desc(), MediaRecord.id.desc())
        )
        rows = result.all()
        shares = await self._shares_for([r.id for r, _ in rows])
        return [
            _record_to_result(
                r,
                shares.get(r.id, frozenset()),
                user_to_profile(u) if u is not None else None,
            )
            for r, u in rows
        ]

    async def add_share(self, media_id: str, identity_id: str) -> bool:
        """Add identity to shared_with. Returns False if it was already present.

        Uses INSERT ... ON CONFLICT DO NOTHING where the dialect supports it,
        otherwise a savepoint that absorbs the unique violation.
        """
        values: dict[str, Any] = {
            "id": generate_cuid(),
            "media_id": media_id,
            "identity_id": identity_id,
        }
        dialect = self.dialect_name
        if dialect in ("postgresql", "sqlite"):
            dialect_insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
            stmt = (
                dialect_insert(MediaShare)
                .values(**values)
                .on_conflict_do_nothing(index_elements=["media_id", "identity_id"])
            )
            result = await self.db.execute(stmt)
            return (result.rowcount or 0) > 0
        try:
            async with self.db.begin_nested():
                await self.db.execute(insert(MediaShare).values(**values))
        except IntegrityError:
            return False
        return True

    async def append_comment(self, data: CommentEntryCreate) -> CommentEntryResult:
        """Append one comment (single INSERT) and return it with the author profile."""
        row = await self._add_comment(data)
        author = await self.db.get(User, data.author_id)
        return _comment_to_result(row, user_to_profile(author) if author else None)

    async def _add_comment(self, data: CommentEntryCreate) -> MediaComment:
        row = MediaComment(
            id=data.id,
            media_id=data.media_id,
            author_id=data.author_id,
            text=data.text,
            image_locator=data.image_locator,
            image_storage_kind=(
                data.image_storage_kind.value if data.image_storage_kind else None
            ),
            image_delete_token=data.image_delete_token,
            posted_at=data.posted_at,
        )
        self.db.add(row)
        await self.db.flush()
        return row

    async def list_comments(self, media_id: str) -> list[CommentEntryResult]:
        """Return comments in posting order with author profile joined."""
        result = await self.db.execute(
            select(MediaComment, User)
            .outerjoin(User, User.id == MediaComment.author_id)
            .where(MediaComment.media_id == media_id)
            .order_by(MediaComment.posted_at, MediaComment.id)
        )
        return [
            _comment_to_result(c, user_to_profile(u) if u is not None else None)
            for c, u in result.all()
        ]

    async def _comment_images(self, media_id: str) -> tuple[StoredObjectRef, ...]:
        result = await self.db.execute(
            select(
                MediaComment.image_storage_kind,
                MediaComment.image_locator,
                MediaComment.image_delete_token,
            ).where(
                MediaComment.media_id == media_id,
                MediaComment.image_locator.is_not(None),
            )
        )
        return tuple(
            StoredObjectRef(
                storage_kind=StorageKind(kind or StorageKind.LOCAL.value),
                locator=locator,
                delete_token=token,
            )
            for kind, locator, token in result.all()
        )

    async def delete(self, media_id: str) -> DeletedMedia | None:
        """Remove record, its shares and its comments. Returns what was removed or None."""
        record = await self.get_by_id(media_id)
        if record is None:
            return None
        comment_images = await self._comment_images(media_id)
        await self.db.execute(delete(MediaComment).where(MediaComment.media_id == media_id))
        await self.db.execute(delete(MediaShare).where(MediaShare.media_id == media_id))
        await self.db.execute(delete(MediaRecord).where(MediaRecord.id == media_id))
        await self.db.flush()
        return DeletedMedia(record=record, comment_images=comment_images)

    async def delete_by_subject(self, subject_id: str) -> list[DeletedMedia]:
        """Remove every record for subject. Returns what was removed."""
        result = await self.db.execute(
            select(MediaRecord.id).where(MediaRecord.subject_id == subject_id)
        )
        removed: list[DeletedMedia] = []
        for media_id in result.scalars().all():
            deleted = await self.delete(media_id)
            if deleted is not None:
                removed.append(deleted)
        return removed
