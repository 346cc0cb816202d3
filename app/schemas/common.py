"""Shared API schema pieces."""

from pydantic import BaseModel

from app.application.dtos.user import IdentityProfile


class IdentitySummary(BaseModel):
    """Display profile of an identity, joined into media, comment and message responses."""

    id: str
    name: str
    specialty: str | None = None
    hospital: str | None = None

    @classmethod
    def from_profile(cls, profile: IdentityProfile | None) -> "IdentitySummary | None":
        if profile is None:
            return None
        return cls(
            id=profile.id,
            name=profile.name,
            specialty=profile.specialty,
            hospital=profile.hospital,
        )
