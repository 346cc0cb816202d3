"""DTOs for the patient collaborator (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PatientResult:
    """Patient read-model; doctor_id is the owning identity."""

    id: str
    name: str
    age: int | None
    phone_number: str | None
    doctor_id: str
