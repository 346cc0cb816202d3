"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import CommentEntity, DirectMessageEntity
from app.domain.enums import StorageKind
from app.domain.exceptions import (
    AccessDeniedException,
    AuthenticationException,
    EarProbeException,
    ResourceNotFoundException,
    StorageUnavailableException,
    ValidationException,
)

__all__ = [
    # Entities
    "CommentEntity",
    "DirectMessageEntity",
    # Enums
    "StorageKind",
    # Exceptions
    "AccessDeniedException",
    "AuthenticationException",
    "EarProbeException",
    "ResourceNotFoundException",
    "StorageUnavailableException",
    "ValidationException",
]
