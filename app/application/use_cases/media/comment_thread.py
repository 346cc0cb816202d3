"""Comment thread: append-only discussion attached to a media record."""

from __future__ import annotations

import logging

from app.application.dtos.media import CommentEntryCreate, CommentEntryResult
from app.application.interfaces.repositories import IMediaRecordRepository
from app.application.services.access_guard import AccessGuard
from app.application.services.image_payload import (
    DEFAULT_MAX_IMAGE_BYTES,
    ImagePayload,
    resolve_image_payload,
)
from app.application.services.upload_coordinator import UploadCoordinator
from app.domain.entities.comment import CommentEntity
from app.domain.exceptions import ResourceNotFoundException
from app.shared.utils import generate_cuid, utc_now

logger = logging.getLogger(__name__)


class CommentThreadService:
    """Posts and lists comments. Anyone who can read a record can comment on it."""

    def __init__(
        self,
        media_repo: IMediaRecordRepository,
        coordinator: UploadCoordinator,
        max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
    ) -> None:
        self.media_repo = media_repo
        self.coordinator = coordinator
        self.max_image_bytes = max_image_bytes

    async def post(
        self,
        media_id: str,
        author_id: str,
        text: str | None = None,
        image: ImagePayload | None = None,
    ) -> CommentEntryResult:
        """Append a comment and return it joined with the author's display profile.

        Args:
            media_id: Record being discussed.
            author_id: Verified caller.
            text: Optional message text (trimmed; blank counts as absent).
            image: Optional attached image.

        Returns:
            The stored entry with author name/specialty.

        Raises:
            ResourceNotFoundException: No such record.
            AccessDeniedException: Author may not comment on the record.
            ValidationException: Neither text nor image, or a bad image.
            StorageUnavailableException: Attached image could not be stored; nothing is appended.
        """
        record = await self.media_repo.get_by_id(media_id)
        if record is None:
            raise ResourceNotFoundException("media", media_id)
        AccessGuard.require_comment(author_id, record)
        entity = CommentEntity(
            media_id=media_id, author_id=author_id, text=text, has_image=image is not None
        )

        stored = None
        if image is not None:
            resolved = resolve_image_payload(image, self.max_image_bytes)
            stored = await self.coordinator.ingest(resolved.data, resolved.content_type)

        create_dto = CommentEntryCreate(
            id=generate_cuid(),
            media_id=media_id,
            author_id=author_id,
            text=entity.text,
            image_locator=stored.locator if stored else None,
            image_storage_kind=stored.storage_kind if stored else None,
            image_delete_token=stored.remote_delete_token if stored else None,
            posted_at=utc_now(),
        )
        try:
            entry = await self.media_repo.append_comment(create_dto)
        except Exception:
            if stored is not None:
                await self.coordinator.discard(
                    stored.storage_kind, stored.locator, stored.remote_delete_token
                )
            raise
        logger.debug("Comment %s appended to media %s", entry.id, media_id)
        return entry

    async def list(self, media_id: str, caller_id: str) -> list[CommentEntryResult]:
        """Return the thread in posting order if caller may read the record."""
        record = await self.media_repo.get_by_id(media_id)
        if record is None:
            raise ResourceNotFoundException("media", media_id)
        AccessGuard.require_read(caller_id, record)
        return await self.media_repo.list_comments(media_id)
