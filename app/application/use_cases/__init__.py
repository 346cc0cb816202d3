"""Application use cases: one entry point per workflow."""

from app.application.use_cases.media import (
    CommentThreadService,
    MediaDeletionService,
    MediaQueryService,
    MediaSharingService,
    MediaUploadService,
)
from app.application.use_cases.messaging import DirectMessageService
from app.application.use_cases.patients import PatientDeletionService

__all__ = [
    "CommentThreadService",
    "DirectMessageService",
    "MediaDeletionService",
    "MediaQueryService",
    "MediaSharingService",
    "MediaUploadService",
    "PatientDeletionService",
]
