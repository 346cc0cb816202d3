"""DTOs for media records and comment threads (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime

from app.application.dtos.storage import StoredObjectRef
from app.application.dtos.user import IdentityProfile
from app.domain.enums import StorageKind


@dataclass(frozen=True)
class MediaRecordCreate:
    """Input for creating a media record (write-model). Built only after bytes are stored."""

    id: str
    owner_id: str
    subject_id: str
    locator: str
    storage_kind: StorageKind
    remote_delete_token: str | None
    notes: str
    captured_at: datetime


@dataclass(frozen=True)
class MediaRecordResult:
    """Media record read-model.

    shared_with is a set; owner is populated only by reads that join the
    identity directory (e.g. find_shared_with).
    """

    id: str
    owner_id: str
    subject_id: str
    locator: str
    storage_kind: StorageKind
    remote_delete_token: str | None
    notes: str
    captured_at: datetime
    created_at: datetime | None = None
    shared_with: frozenset[str] = field(default_factory=frozenset)
    owner: IdentityProfile | None = None

    def storage_ref(self) -> StoredObjectRef:
        """Return the reference needed to clean up this record's bytes."""
        return StoredObjectRef(
            storage_kind=self.storage_kind,
            locator=self.locator,
            delete_token=self.remote_delete_token,
        )


@dataclass(frozen=True)
class CommentEntryCreate:
    """Input for appending a comment (write-model)."""

    id: str
    media_id: str
    author_id: str
    text: str | None
    image_locator: str | None
    image_storage_kind: StorageKind | None
    image_delete_token: str | None
    posted_at: datetime


@dataclass(frozen=True)
class CommentEntryResult:
    """Comment read-model; author is the display join performed by the repository."""

    id: str
    media_id: str
    author_id: str
    text: str | None
    image_locator: str | None
    image_storage_kind: StorageKind | None
    posted_at: datetime
    author: IdentityProfile | None = None


@dataclass(frozen=True)
class DeletedMedia:
    """A removed media record plus the stored objects its comments referenced."""

    record: MediaRecordResult
    comment_images: tuple[StoredObjectRef, ...] = ()

    def storage_refs(self) -> list[StoredObjectRef]:
        """Return every stored object to clean up, record bytes first."""
        return [self.record.storage_ref(), *self.comment_images]
