"""SQLAlchemy ORM models. Import here so Alembic and create_all see every table."""

from app.infrastructure.persistence.models.direct_message import DirectMessage
from app.infrastructure.persistence.models.media_record import (
    MediaComment,
    MediaRecord,
    MediaShare,
)
from app.infrastructure.persistence.models.patient import Patient
from app.infrastructure.persistence.models.user import User

__all__ = [
    "DirectMessage",
    "MediaComment",
    "MediaRecord",
    "MediaShare",
    "Patient",
    "User",
]
