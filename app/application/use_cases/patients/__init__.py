"""Patient use cases: deletion cascade."""

from app.application.use_cases.patients.patient_operations import (
    PatientDeletionService,
)

__all__ = ["PatientDeletionService"]
