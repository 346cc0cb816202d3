"""Media record and comment API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.application.dtos.media import CommentEntryResult, MediaRecordResult
from app.schemas.common import IdentitySummary


class MediaRecordResponse(BaseModel):
    """Media record as returned by the images endpoints."""

    id: str
    image_url: str = Field(..., description="Remote URL or local /uploads path")
    storage_kind: str
    patient_id: str
    owner_id: str
    notes: str
    captured_at: datetime
    created_at: datetime | None = None
    shared_with: list[str] = Field(default_factory=list)
    owner: IdentitySummary | None = None

    @classmethod
    def from_result(cls, r: MediaRecordResult) -> "MediaRecordResponse":
        return cls(
            id=r.id,
            image_url=r.locator,
            storage_kind=r.storage_kind.value,
            patient_id=r.subject_id,
            owner_id=r.owner_id,
            notes=r.notes,
            captured_at=r.captured_at,
            created_at=r.created_at,
            shared_with=sorted(r.shared_with),
            owner=IdentitySummary.from_profile(r.owner),
        )


class MediaShareRequest(BaseModel):
    """Request body for POST /images/{id}/share."""

    doctor_ids: list[str] = Field(..., min_length=1, max_length=100)


class CommentResponse(BaseModel):
    """One entry of a media comment thread."""

    id: str
    media_id: str
    author_id: str
    message: str | None = None
    image_url: str | None = None
    posted_at: datetime
    author: IdentitySummary | None = None

    @classmethod
    def from_result(cls, c: CommentEntryResult) -> "CommentResponse":
        return cls(
            id=c.id,
            media_id=c.media_id,
            author_id=c.author_id,
            message=c.text,
            image_url=c.image_locator,
            posted_at=c.posted_at,
            author=IdentitySummary.from_profile(c.author),
        )
