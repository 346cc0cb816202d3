"""Access guard: the single place that decides who may do what to a media record."""

from __future__ import annotations

from app.application.dtos.media import MediaRecordResult
from app.domain.exceptions import AccessDeniedException

RESOURCE_TYPE = "media"


class AccessGuard:
    """Pure permission predicates over (identity, record).

    - read / comment: owner or an identity in shared_with
    - mutate owner fields (share, delete, edit notes): owner only
    """

    @staticmethod
    def can_read(identity_id: str, record: MediaRecordResult) -> bool:
        return identity_id == record.owner_id or identity_id in record.shared_with

    @staticmethod
    def can_comment(identity_id: str, record: MediaRecordResult) -> bool:
        return AccessGuard.can_read(identity_id, record)

    @staticmethod
    def can_mutate_owner_fields(identity_id: str, record: MediaRecordResult) -> bool:
        return identity_id == record.owner_id

    @classmethod
    def require_read(cls, identity_id: str, record: MediaRecordResult) -> None:
        """Raise AccessDeniedException unless identity may read record."""
        if not cls.can_read(identity_id, record):
            raise AccessDeniedException(RESOURCE_TYPE, record.id, "read")

    @classmethod
    def require_comment(cls, identity_id: str, record: MediaRecordResult) -> None:
        """Raise AccessDeniedException unless identity may comment on record."""
        if not cls.can_comment(identity_id, record):
            raise AccessDeniedException(RESOURCE_TYPE, record.id, "comment")

    @classmethod
    def require_owner(
        cls, identity_id: str, record: MediaRecordResult, action: str = "modify"
    ) -> None:
        """Raise AccessDeniedException unless identity owns record."""
        if not cls.can_mutate_owner_fields(identity_id, record):
            raise AccessDeniedException(RESOURCE_TYPE, record.id, action)
