"""Patient dependencies (composition root)."""

from __future__ import annotations

from functools import partial
from typing import Annotated

from fastapi import Depends

from app.api.v1.dependencies.db import WriteSession
from app.api.v1.dependencies.media import Coordinator
from app.application.use_cases.media import MediaDeletionService
from app.application.use_cases.patients import PatientDeletionService
from app.infrastructure.persistence.database import after_commit
from app.infrastructure.persistence.repositories import (
    MediaRecordRepository,
    PatientRepository,
)


async def get_patient_deletion_service(
    db: WriteSession, coordinator: Coordinator
) -> PatientDeletionService:
    """Build PatientDeletionService with the media cascade on the same transaction.

    Stored bytes are discarded only after the transaction commits.
    """
    return PatientDeletionService(
        patient_repo=PatientRepository(db),
        media_deletion=MediaDeletionService(
            media_repo=MediaRecordRepository(db),
            coordinator=coordinator,
            after_commit=partial(after_commit, db),
        ),
    )


PatientDeletion = Annotated[PatientDeletionService, Depends(get_patient_deletion_service)]
