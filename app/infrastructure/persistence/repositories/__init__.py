"""SQLAlchemy repositories. Public methods return application DTOs."""

from app.infrastructure.persistence.repositories.direct_message_repo import (
    DirectMessageRepository,
)
from app.infrastructure.persistence.repositories.media_record_repo import (
    MediaRecordRepository,
)
from app.infrastructure.persistence.repositories.patient_repo import PatientRepository
from app.infrastructure.persistence.repositories.user_directory_repo import (
    UserDirectoryRepository,
)

__all__ = [
    "DirectMessageRepository",
    "MediaRecordRepository",
    "PatientRepository",
    "UserDirectoryRepository",
]
