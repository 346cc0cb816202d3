"""Media, comment and storage dependencies (composition root)."""

from __future__ import annotations

from functools import lru_cache, partial
from typing import Annotated

from fastapi import Depends

from app.api.v1.dependencies.db import ReadSession, WriteSession
from app.application.services.upload_coordinator import UploadCoordinator
from app.application.use_cases.media import (
    CommentThreadService,
    MediaDeletionService,
    MediaQueryService,
    MediaSharingService,
    MediaUploadService,
)
from app.core.config import get_settings
from app.infrastructure.external.storage.factory import StorageFactory
from app.infrastructure.persistence.database import after_commit
from app.infrastructure.persistence.repositories import (
    MediaRecordRepository,
    PatientRepository,
    UserDirectoryRepository,
)


@lru_cache
def _build_upload_coordinator() -> UploadCoordinator:
    """Build the coordinator once per process (one boto3 client, one local root)."""
    settings = get_settings()
    return UploadCoordinator(
        primary=StorageFactory.create_primary_store(settings),
        local=StorageFactory.create_local_store(settings),
        max_attempts=settings.upload_max_attempts,
        backoff_base=settings.upload_backoff_base_seconds,
    )


def get_upload_coordinator() -> UploadCoordinator:
    """Upload coordinator over the configured storage tiers."""
    return _build_upload_coordinator()


Coordinator = Annotated[UploadCoordinator, Depends(get_upload_coordinator)]


async def get_media_upload_service(
    db: WriteSession, coordinator: Coordinator
) -> MediaUploadService:
    """Build MediaUploadService (transactional)."""
    return MediaUploadService(
        coordinator=coordinator,
        media_repo=MediaRecordRepository(db),
        patient_repo=PatientRepository(db),
        max_image_bytes=get_settings().max_image_bytes,
    )


async def get_media_query_service(db: ReadSession) -> MediaQueryService:
    """Build MediaQueryService (read session)."""
    return MediaQueryService(
        media_repo=MediaRecordRepository(db),
        patient_repo=PatientRepository(db),
    )


async def get_media_sharing_service(db: WriteSession) -> MediaSharingService:
    """Build MediaSharingService (transactional)."""
    return MediaSharingService(
        media_repo=MediaRecordRepository(db),
        directory=UserDirectoryRepository(db),
    )


async def get_media_deletion_service(
    db: WriteSession, coordinator: Coordinator
) -> MediaDeletionService:
    """Build MediaDeletionService (transactional; storage cleanup runs after commit)."""
    return MediaDeletionService(
        media_repo=MediaRecordRepository(db),
        coordinator=coordinator,
        after_commit=partial(after_commit, db),
    )


async def get_comment_thread_service(
    db: WriteSession, coordinator: Coordinator
) -> CommentThreadService:
    """Build CommentThreadService (transactional; GET uses the same service read-only)."""
    return CommentThreadService(
        media_repo=MediaRecordRepository(db),
        coordinator=coordinator,
        max_image_bytes=get_settings().max_image_bytes,
    )
