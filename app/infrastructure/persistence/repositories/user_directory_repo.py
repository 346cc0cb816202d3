"""Identity directory repository (app_user). Read-only; returns IdentityProfile DTOs."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import IdentityProfile
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository


def user_to_profile(u: User) -> IdentityProfile:
    """Map ORM User to the display profile joined into reads."""
    return IdentityProfile(
        id=u.id,
        name=u.name,
        email=u.email,
        specialty=u.specialty,
        hospital=u.hospital,
        role=u.role,
    )


class UserDirectoryRepository(BaseRepository[User]):
    """Resolves identities to display profiles."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def resolve(self, identity_id: str) -> IdentityProfile | None:
        row = await self._get_orm_by_id(identity_id)
        return user_to_profile(row) if row else None

    async def resolve_many(self, identity_ids: set[str]) -> dict[str, IdentityProfile]:
        """Return profiles keyed by id; unknown ids are absent."""
        if not identity_ids:
            return {}
        result = await self.db.execute(select(User).where(User.id.in_(identity_ids)))
        return {u.id: user_to_profile(u) for u in result.scalars().all()}

    async def list_identities(
        self, excluding: str | None = None
    ) -> list[IdentityProfile]:
        """Return all identities ordered by name, optionally excluding one."""
        stmt = select(User).order_by(User.name, User.id)
        if excluding:
            stmt = stmt.where(User.id != excluding)
        result = await self.db.execute(stmt)
        return [user_to_profile(u) for u in result.scalars().all()]
