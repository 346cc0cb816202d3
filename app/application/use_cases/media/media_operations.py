"""Media operations: upload, query, sharing and deletion, each with a single responsibility."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from datetime import datetime

from app.application.dtos.media import (
    DeletedMedia,
    MediaRecordCreate,
    MediaRecordResult,
)
from app.application.interfaces.repositories import (
    IMediaRecordRepository,
    IPatientRepository,
    IUserDirectory,
)
from app.application.services.access_guard import AccessGuard
from app.application.services.image_payload import (
    DEFAULT_MAX_IMAGE_BYTES,
    ImagePayload,
    resolve_image_payload,
)
from app.application.services.upload_coordinator import UploadCoordinator
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.utils import generate_cuid, utc_now

logger = logging.getLogger(__name__)


async def _load_record(
    media_repo: IMediaRecordRepository, media_id: str
) -> MediaRecordResult:
    record = await media_repo.get_by_id(media_id)
    if record is None:
        raise ResourceNotFoundException("media", media_id)
    return record


class MediaUploadService:
    """Single responsibility: store image bytes for a subject and create its media record."""

    def __init__(
        self,
        coordinator: UploadCoordinator,
        media_repo: IMediaRecordRepository,
        patient_repo: IPatientRepository,
        max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
    ) -> None:
        self.coordinator = coordinator
        self.media_repo = media_repo
        self.patient_repo = patient_repo
        self.max_image_bytes = max_image_bytes

    async def upload_for_subject(
        self,
        owner_id: str,
        subject_id: str,
        payload: ImagePayload,
        notes: str = "",
        captured_at: datetime | None = None,
    ) -> MediaRecordResult:
        """Store image and create a record owned by owner_id.

        The subject check and payload validation run before any bytes are
        stored. If the record cannot be created after storage succeeded, the
        stored bytes are discarded and the error is re-raised.

        Raises:
            ResourceNotFoundException: Subject missing or not owned by owner_id.
            ValidationException: Payload empty, malformed or not an image.
            StorageUnavailableException: Neither storage tier accepted the bytes.
        """
        if not await self.patient_repo.is_owned_by(subject_id, owner_id):
            raise ResourceNotFoundException("patient", subject_id)
        image = resolve_image_payload(payload, self.max_image_bytes)
        stored = await self.coordinator.ingest(image.data, image.content_type)
        create_dto = MediaRecordCreate(
            id=generate_cuid(),
            owner_id=owner_id,
            subject_id=subject_id,
            locator=stored.locator,
            storage_kind=stored.storage_kind,
            remote_delete_token=stored.remote_delete_token,
            notes=(notes or "").strip(),
            captured_at=captured_at or utc_now(),
        )
        try:
            record = await self.media_repo.create(create_dto)
        except Exception:
            await self.coordinator.discard(
                stored.storage_kind, stored.locator, stored.remote_delete_token
            )
            raise
        logger.info(
            "Media %s stored (%s) for subject %s",
            record.id,
            record.storage_kind.value,
            subject_id,
        )
        return record


class MediaQueryService:
    """Single responsibility: read media records the caller is allowed to see."""

    def __init__(
        self,
        media_repo: IMediaRecordRepository,
        patient_repo: IPatientRepository,
    ) -> None:
        self.media_repo = media_repo
        self.patient_repo = patient_repo

    async def list_for_subject(
        self, caller_id: str, subject_id: str
    ) -> list[MediaRecordResult]:
        """Return subject's records, newest capture first. Subject must belong to caller."""
        if not await self.patient_repo.is_owned_by(subject_id, caller_id):
            raise ResourceNotFoundException("patient", subject_id)
        return await self.media_repo.find_by_subject(subject_id)

    async def list_shared_with(self, caller_id: str) -> list[MediaRecordResult]:
        """Return records other owners shared with caller, with owner profiles."""
        return await self.media_repo.find_shared_with(caller_id)

    async def get_media(self, caller_id: str, media_id: str) -> MediaRecordResult:
        """Return record if caller may read it.

        Raises:
            ResourceNotFoundException: No such record.
            AccessDeniedException: Caller is neither owner nor in shared_with.
        """
        record = await _load_record(self.media_repo, media_id)
        AccessGuard.require_read(caller_id, record)
        return record


class MediaSharingService:
    """Single responsibility: grant read/comment access on a record to other identities."""

    def __init__(
        self,
        media_repo: IMediaRecordRepository,
        directory: IUserDirectory,
    ) -> None:
        self.media_repo = media_repo
        self.directory = directory

    async def share(
        self, caller_id: str, media_id: str, identity_ids: Iterable[str]
    ) -> MediaRecordResult:
        """Add identities to the record's shared_with set (idempotent).

        Raises:
            ResourceNotFoundException: Record or any identity unknown.
            AccessDeniedException: Caller is not the owner.
            ValidationException: No identities given, or the owner is among them.
        """
        targets = list(dict.fromkeys(i.strip() for i in identity_ids if i and i.strip()))
        if not targets:
            raise ValidationException(
                "At least one identity to share with is required", field="doctor_ids"
            )
        record = await _load_record(self.media_repo, media_id)
        AccessGuard.require_owner(caller_id, record, action="share")
        if record.owner_id in targets:
            raise ValidationException(
                "Cannot share an image with its owner", field="doctor_ids"
            )
        known = await self.directory.resolve_many(set(targets))
        for identity_id in targets:
            if identity_id not in known:
                raise ResourceNotFoundException("identity", identity_id)
        added = 0
        for identity_id in targets:
            if await self.media_repo.add_share(media_id, identity_id):
                added += 1
        logger.info(
            "Media %s shared with %d identities (%d new)", media_id, len(targets), added
        )
        return await _load_record(self.media_repo, media_id)


class MediaDeletionService:
    """Single responsibility: remove media metadata, then clean up stored bytes best-effort.

    When after_commit is given, storage cleanup is handed to it so bytes are only
    removed once the metadata deletion has committed. Without it, cleanup runs
    immediately after the repository delete.
    """

    def __init__(
        self,
        media_repo: IMediaRecordRepository,
        coordinator: UploadCoordinator,
        after_commit: Callable[[Callable[[], Awaitable[None]]], None] | None = None,
    ) -> None:
        self.media_repo = media_repo
        self.coordinator = coordinator
        self.after_commit = after_commit

    async def _cleanup(self, deleted: DeletedMedia) -> int:
        """Discard every stored object of a removed record. Returns how many failed."""
        failures = 0
        for ref in deleted.storage_refs():
            removed = await self.coordinator.discard(
                ref.storage_kind, ref.locator, ref.delete_token
            )
            if not removed:
                failures += 1
        if failures:
            logger.warning(
                "Media %s deleted; %d stored object(s) could not be removed",
                deleted.record.id,
                failures,
            )
        return failures

    async def discard_storage(self, removed: list[DeletedMedia]) -> None:
        """Discard the stored objects of removed records."""
        for deleted in removed:
            await self._cleanup(deleted)

    async def _schedule_cleanup(self, removed: list[DeletedMedia]) -> None:
        if not removed:
            return
        if self.after_commit is None:
            await self.discard_storage(removed)
            return

        async def _discard() -> None:
            await self.discard_storage(removed)

        self.after_commit(_discard)

    async def delete_media(self, caller_id: str, media_id: str) -> None:
        """Delete a record owned by caller.

        Raises:
            ResourceNotFoundException: No such record.
            AccessDeniedException: Caller is not the owner.
        """
        record = await _load_record(self.media_repo, media_id)
        AccessGuard.require_owner(caller_id, record, action="delete")
        deleted = await self.media_repo.delete(media_id)
        if deleted is None:
            raise ResourceNotFoundException("media", media_id)
        await self._schedule_cleanup([deleted])

    async def delete_for_subject(self, subject_id: str) -> list[DeletedMedia]:
        """Delete every record of subject (cascade). Storage cleanup failures never abort."""
        removed = await self.media_repo.delete_by_subject(subject_id)
        await self._schedule_cleanup(removed)
        logger.info("Deleted %d media record(s) for subject %s", len(removed), subject_id)
        return removed
