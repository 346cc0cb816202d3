"""Infrastructure exceptions for the image storage tiers.

Storage errors extend EarProbeException so presentation can map them
to HTTP responses consistently. None of these normally reach the API:
UploadCoordinator turns tier failures into fallback or
StorageUnavailableException, and cleanup failures are logged.
"""

from app.domain.exceptions import EarProbeException


class StorageException(EarProbeException):
    """Base exception for storage operations."""


class UpstreamTransientError(StorageException):
    """A single primary-store call failed (network, throttling, 5xx, bad credentials)."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Primary store {operation} failed",
            "UPSTREAM_TRANSIENT_ERROR",
            {"operation": operation, "reason": reason},
        )


class StorageUploadError(StorageException):
    """Local file write failed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to write file: {file_path}",
            "STORAGE_UPLOAD_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StorageDeleteError(StorageException):
    """Local file deletion failed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete file: {file_path}",
            "STORAGE_DELETE_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Path escapes the storage root or is otherwise not permitted."""

    def __init__(self, file_path: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {file_path}",
            "STORAGE_PERMISSION_ERROR",
            {"file_path": file_path, "operation": operation},
        )
