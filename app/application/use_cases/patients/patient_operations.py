"""Patient deletion with media cascade."""

from __future__ import annotations

import logging

from app.application.interfaces.repositories import IPatientRepository
from app.application.use_cases.media.media_operations import MediaDeletionService
from app.domain.exceptions import ResourceNotFoundException

logger = logging.getLogger(__name__)


class PatientDeletionService:
    """Deletes a patient and every media record captured for them."""

    def __init__(
        self,
        patient_repo: IPatientRepository,
        media_deletion: MediaDeletionService,
    ) -> None:
        self.patient_repo = patient_repo
        self.media_deletion = media_deletion

    async def delete_patient(self, caller_id: str, patient_id: str) -> int:
        """Delete patient owned by caller. Returns the number of media records removed.

        Remote cleanup failures are logged by the media cascade and never
        abort the deletion.

        Raises:
            ResourceNotFoundException: Patient missing or not owned by caller.
        """
        if not await self.patient_repo.is_owned_by(patient_id, caller_id):
            raise ResourceNotFoundException("patient", patient_id)
        removed = await self.media_deletion.delete_for_subject(patient_id)
        await self.patient_repo.delete(patient_id)
        logger.info(
            "Patient %s deleted with %d media record(s)", patient_id, len(removed)
        )
        return len(removed)
