"""DTOs for the identity directory (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class IdentityProfile:
    """Display attributes of an identity, joined at read time (never stored on media)."""

    id: str
    name: str
    email: str | None = None
    specialty: str | None = None
    hospital: str | None = None
    role: str | None = None
