"""Application DTOs (no ORM dependency)."""

from app.application.dtos.direct_message import (
    DirectMessageCreate,
    DirectMessageResult,
)
from app.application.dtos.media import (
    CommentEntryCreate,
    CommentEntryResult,
    DeletedMedia,
    MediaRecordCreate,
    MediaRecordResult,
)
from app.application.dtos.patient import PatientResult
from app.application.dtos.storage import (
    RemoteObject,
    ResolvedImage,
    StorageResult,
    StoredObjectRef,
)
from app.application.dtos.user import IdentityProfile

__all__ = [
    "CommentEntryCreate",
    "CommentEntryResult",
    "DeletedMedia",
    "DirectMessageCreate",
    "DirectMessageResult",
    "IdentityProfile",
    "MediaRecordCreate",
    "MediaRecordResult",
    "PatientResult",
    "RemoteObject",
    "ResolvedImage",
    "StorageResult",
    "StoredObjectRef",
]
