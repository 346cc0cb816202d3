"""Users API: the doctor directory used to pick share and message targets."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import CurrentIdentity, get_user_directory
from app.infrastructure.persistence.repositories import UserDirectoryRepository
from app.schemas.user import DoctorResponse

router = APIRouter()


@router.get("/doctors", response_model=list[DoctorResponse])
async def list_doctors(
    caller: CurrentIdentity,
    directory: Annotated[UserDirectoryRepository, Depends(get_user_directory)],
) -> list[DoctorResponse]:
    """All identities except the caller."""
    profiles = await directory.list_identities(excluding=caller.id)
    return [DoctorResponse.model_validate(p) for p in profiles]
