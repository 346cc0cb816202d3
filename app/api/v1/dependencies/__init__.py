"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the verified caller and
application use cases. All use cases are built from infrastructure
implementations here; routes depend only on these dependencies.
"""

from app.api.v1.dependencies.auth import CurrentIdentity, get_current_identity
from app.api.v1.dependencies.db import get_user_directory
from app.api.v1.dependencies.media import (
    get_comment_thread_service,
    get_media_deletion_service,
    get_media_query_service,
    get_media_sharing_service,
    get_media_upload_service,
    get_upload_coordinator,
)
from app.api.v1.dependencies.messaging import get_direct_message_service
from app.api.v1.dependencies.patients import get_patient_deletion_service

__all__ = [
    "CurrentIdentity",
    "get_comment_thread_service",
    "get_current_identity",
    "get_direct_message_service",
    "get_media_deletion_service",
    "get_media_query_service",
    "get_media_sharing_service",
    "get_media_upload_service",
    "get_patient_deletion_service",
    "get_upload_coordinator",
    "get_user_directory",
]
