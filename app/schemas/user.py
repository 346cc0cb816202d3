"""Identity directory API schemas."""

from pydantic import BaseModel, ConfigDict


class DoctorResponse(BaseModel):
    """Entry in GET /users/doctors (share and message targets)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str | None = None
    specialty: str | None = None
    hospital: str | None = None
