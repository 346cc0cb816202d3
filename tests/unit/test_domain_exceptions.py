"""Tests for domain and storage exceptions (error_code, message, details)."""

from app.domain.exceptions import (
    AccessDeniedException,
    AuthenticationException,
    EarProbeException,
    ResourceNotFoundException,
    StorageUnavailableException,
    ValidationException,
)
from app.infrastructure.exceptions import (
    StorageException,
    StoragePermissionError,
    UpstreamTransientError,
)


def test_base_exception_default_error_code() -> None:
    """Base EarProbeException uses class name as error_code when not provided."""
    exc = EarProbeException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "EarProbeException"
    assert exc.details == {}


def test_to_dict_shape() -> None:
    exc = EarProbeException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {"error": "CUSTOM", "message": "Oops", "details": {"key": "value"}}


def test_validation_exception_field() -> None:
    exc = ValidationException("Message cannot be empty", field="message")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "message"}


def test_authentication_exception_default_message() -> None:
    exc = AuthenticationException()
    assert exc.error_code == "AUTHENTICATION_ERROR"
    assert exc.message == "Authentication failed"


def test_not_found_carries_resource() -> None:
    exc = ResourceNotFoundException("media", "m1")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "media", "resource_id": "m1"}


def test_access_denied_not_found_body_matches_real_not_found() -> None:
    denied = AccessDeniedException("media", "m1", "read").as_not_found()
    assert denied.to_dict() == ResourceNotFoundException("media", "m1").to_dict()


def test_storage_unavailable_keeps_reason_in_details() -> None:
    exc = StorageUnavailableException("disk full")
    assert exc.error_code == "STORAGE_UNAVAILABLE"
    assert "could not be saved" in exc.message
    assert exc.details == {"reason": "disk full"}


def test_storage_errors_are_earprobe_exceptions() -> None:
    transient = UpstreamTransientError("upload", "timeout")
    assert isinstance(transient, StorageException)
    assert isinstance(transient, EarProbeException)
    assert transient.details == {"operation": "upload", "reason": "timeout"}
    perm = StoragePermissionError("../etc/passwd", "path_validation")
    assert perm.error_code == "STORAGE_PERMISSION_ERROR"
