"""Patient API schemas."""

from pydantic import BaseModel


class PatientDeleteResponse(BaseModel):
    """Response for DELETE /patients/{id}."""

    id: str
    deleted_media: int
