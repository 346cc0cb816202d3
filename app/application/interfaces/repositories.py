"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
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
    from app.application.dtos.user import IdentityProfile


# Media record repository interface
class IMediaRecordRepository(Protocol):
    """Protocol for media record persistence (records, shares, comments)."""

    async def create(self, data: MediaRecordCreate) -> MediaRecordResult:
        """Persist a new record; sharedWith starts empty."""

    async def get_by_id(self, media_id: str) -> MediaRecordResult | None:
        """Return record by ID (with shared_with populated) or None."""

    async def find_by_subject(self, subject_id: str) -> list[MediaRecordResult]:
        """Return records for subject, newest capture first."""

    async def find_shared_with(self, identity_id: str) -> list[MediaRecordResult]:
        """Return records whose shared_with contains identity, with owner profile joined."""

    async def append_comment(self, data: CommentEntryCreate) -> CommentEntryResult:
        """Atomically append one comment; concurrent appends are all retained."""

    async def list_comments(self, media_id: str) -> list[CommentEntryResult]:
        """Return comments in posting order with author profile joined."""

    async def add_share(self, media_id: str, identity_id: str) -> bool:
        """Atomically add identity to shared_with. Return False if already present."""

    async def delete(self, media_id: str) -> DeletedMedia | None:
        """Remove record with its shares and comments. Return what was removed or None."""

    async def delete_by_subject(self, subject_id: str) -> list[DeletedMedia]:
        """Remove every record for subject. Return what was removed."""


# Direct message repository interface
class IDirectMessageRepository(Protocol):
    """Protocol for direct message persistence."""

    async def create(self, data: DirectMessageCreate) -> DirectMessageResult:
        """Persist a message (read defaults to False)."""

    async def get_conversation(
        self, identity_a: str, identity_b: str
    ) -> list[DirectMessageResult]:
        """Return messages between the two identities in either direction, oldest first."""


# Identity directory interface
class IUserDirectory(Protocol):
    """Protocol for the identity directory collaborator (read-only)."""

    async def resolve(self, identity_id: str) -> IdentityProfile | None:
        """Return display profile for identity or None if unknown."""

    async def resolve_many(self, identity_ids: set[str]) -> dict[str, IdentityProfile]:
        """Return profiles keyed by id; unknown ids are absent."""

    async def list_identities(
        self, excluding: str | None = None
    ) -> list[IdentityProfile]:
        """Return all identities, optionally excluding one (e.g. the caller)."""


# Patient repository interface
class IPatientRepository(Protocol):
    """Protocol for the patient collaborator."""

    async def get_by_id(self, patient_id: str) -> PatientResult | None:
        """Return patient by ID or None."""

    async def is_owned_by(self, patient_id: str, owner_id: str) -> bool:
        """Return True if patient exists and belongs to owner."""

    async def delete(self, patient_id: str) -> bool:
        """Delete patient row. Return True if deleted."""
