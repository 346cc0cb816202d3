"""Application services: payload resolution, upload coordination, access guard."""

from app.application.services.access_guard import AccessGuard
from app.application.services.image_payload import (
    FileUpload,
    ImagePayload,
    InlinePayload,
    resolve_image_payload,
)
from app.application.services.upload_coordinator import UploadCoordinator

__all__ = [
    "AccessGuard",
    "FileUpload",
    "ImagePayload",
    "InlinePayload",
    "UploadCoordinator",
    "resolve_image_payload",
]
