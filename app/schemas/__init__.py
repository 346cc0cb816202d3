"""Pydantic request/response schemas for the API."""

from app.schemas.common import IdentitySummary
from app.schemas.health import HealthResponse
from app.schemas.media import CommentResponse, MediaRecordResponse, MediaShareRequest
from app.schemas.message import DirectMessageResponse
from app.schemas.patient import PatientDeleteResponse
from app.schemas.user import DoctorResponse

__all__ = [
    "CommentResponse",
    "DirectMessageResponse",
    "DoctorResponse",
    "HealthResponse",
    "IdentitySummary",
    "MediaRecordResponse",
    "MediaShareRequest",
    "PatientDeleteResponse",
]
