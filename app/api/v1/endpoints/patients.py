"""Patients API: deletion with media cascade."""

from fastapi import APIRouter, Request

from app.api.v1.dependencies import CurrentIdentity
from app.api.v1.dependencies.patients import PatientDeletion
from app.core.limiter import limit_writes
from app.schemas.patient import PatientDeleteResponse

router = APIRouter()


@router.delete("/{patient_id}", response_model=PatientDeleteResponse)
@limit_writes
async def delete_patient(
    request: Request,
    patient_id: str,
    caller: CurrentIdentity,
    deletion_svc: PatientDeletion,
) -> PatientDeleteResponse:
    """Delete one of the caller's patients and all of their images."""
    removed = await deletion_svc.delete_patient(caller.id, patient_id)
    return PatientDeleteResponse(id=patient_id, deleted_media=removed)
