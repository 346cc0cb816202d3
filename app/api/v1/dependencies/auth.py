"""Caller verification dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.v1.dependencies.db import get_user_directory
from app.application.dtos.user import IdentityProfile
from app.domain.exceptions import AuthenticationException
from app.infrastructure.persistence.repositories import UserDirectoryRepository
from app.infrastructure.security.jwt import verify_caller
from app.shared.context import set_current_identity

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    directory: Annotated[UserDirectoryRepository, Depends(get_user_directory)],
) -> IdentityProfile:
    """Return the verified caller's profile; raise 401 if token missing/invalid or identity unknown."""
    identity_id = verify_caller(credentials.credentials if credentials else None)
    profile = await directory.resolve(identity_id)
    if profile is None:
        raise AuthenticationException("Could not validate credentials")
    set_current_identity(profile.id)
    return profile


CurrentIdentity = Annotated[IdentityProfile, Depends(get_current_identity)]
