"""DTOs for direct messages (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from app.application.dtos.user import IdentityProfile
from app.domain.enums import StorageKind


@dataclass(frozen=True)
class DirectMessageCreate:
    """Input for persisting a direct message (write-model)."""

    id: str
    sender_id: str
    receiver_id: str
    text: str
    image_locator: str | None
    image_storage_kind: StorageKind | None
    created_at: datetime


@dataclass(frozen=True)
class DirectMessageResult:
    """Direct message read-model with sender/receiver display profiles joined."""

    id: str
    sender_id: str
    receiver_id: str
    text: str
    image_locator: str | None
    image_storage_kind: StorageKind | None
    read: bool
    created_at: datetime
    sender: IdentityProfile | None = None
    receiver: IdentityProfile | None = None
