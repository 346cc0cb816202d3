"""DTOs for image ingestion and storage tiers (no dependency on ORM or SDKs)."""

from dataclasses import dataclass

from app.domain.enums import StorageKind


@dataclass(frozen=True)
class ResolvedImage:
    """Image bytes after boundary resolution (file upload or inline payload)."""

    data: bytes
    content_type: str
    extension: str


@dataclass(frozen=True)
class RemoteObject:
    """Result of a successful primary-store upload."""

    url: str
    delete_token: str


@dataclass(frozen=True)
class StorageResult:
    """Normalized result of UploadCoordinator.ingest.

    remote_delete_token is set only when storage_kind is REMOTE.
    """

    locator: str
    storage_kind: StorageKind
    remote_delete_token: str | None = None


@dataclass(frozen=True)
class StoredObjectRef:
    """Reference to bytes held by one tier; used for cleanup after metadata deletion."""

    storage_kind: StorageKind
    locator: str
    delete_token: str | None = None
