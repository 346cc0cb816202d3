"""Patient repository. Ownership checks and deletion for the media cascade."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.patient import PatientResult
from app.infrastructure.persistence.models.patient import Patient
from app.infrastructure.persistence.repositories.base import BaseRepository


def _patient_to_result(p: Patient) -> PatientResult:
    return PatientResult(
        id=p.id,
        name=p.name,
        age=p.age,
        phone_number=p.phone_number,
        doctor_id=p.doctor_id,
    )


class PatientRepository(BaseRepository[Patient]):
    """Patient repository returning PatientResult DTOs."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Patient)

    async def get_by_id(self, patient_id: str) -> PatientResult | None:
        row = await self._get_orm_by_id(patient_id)
        return _patient_to_result(row) if row else None

    async def is_owned_by(self, patient_id: str, owner_id: str) -> bool:
        """Return True if patient exists and doctor_id == owner_id."""
        result = await self.db.execute(
            select(Patient.id).where(
                Patient.id == patient_id, Patient.doctor_id == owner_id
            )
        )
        return result.scalar_one_or_none() is not None

    async def delete(self, patient_id: str) -> bool:
        """Delete patient row. Media records must be removed first."""
        result = await self.db.execute(delete(Patient).where(Patient.id == patient_id))
        await self.db.flush()
        return (result.rowcount or 0) > 0
