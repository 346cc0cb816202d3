"""Media use cases: upload, query, sharing, deletion and comment threads."""

from app.application.use_cases.media.comment_thread import CommentThreadService
from app.application.use_cases.media.media_operations import (
    MediaDeletionService,
    MediaQueryService,
    MediaSharingService,
    MediaUploadService,
)

__all__ = [
    "CommentThreadService",
    "MediaDeletionService",
    "MediaQueryService",
    "MediaSharingService",
    "MediaUploadService",
]
