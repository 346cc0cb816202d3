"""DB session and directory dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import UserDirectoryRepository

ReadSession = Annotated[AsyncSession, Depends(get_db)]
WriteSession = Annotated[AsyncSession, Depends(get_db_transactional)]


async def get_user_directory(db: ReadSession) -> UserDirectoryRepository:
    """Identity directory for caller resolution and listing (read session)."""
    return UserDirectoryRepository(db)
