"""Direct message repository. Returns DirectMessageResult DTOs with display profiles joined."""

from __future__ import annotations

from datetime import datetime
from typing import cast

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from app.application.dtos.direct_message import (
    DirectMessageCreate,
    DirectMessageResult,
)
from app.application.dtos.user import IdentityProfile
from app.domain.enums import StorageKind
from app.infrastructure.persistence.models.direct_message import DirectMessage
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.user_directory_repo import (
    user_to_profile,
)
from app.shared.utils import ensure_utc


def _message_to_result(
    m: DirectMessage,
    sender: IdentityProfile | None = None,
    receiver: IdentityProfile | None = None,
) -> DirectMessageResult:
    """Map ORM DirectMessage to application DirectMessageResult."""
    return DirectMessageResult(
        id=m.id,
        sender_id=m.sender_id,
        receiver_id=m.receiver_id,
        text=m.text,
        image_locator=m.image_locator,
        image_storage_kind=(
            StorageKind(m.image_storage_kind) if m.image_storage_kind else None
        ),
        read=bool(m.read),
        created_at=cast(datetime, ensure_utc(m.created_at)),
        sender=sender,
        receiver=receiver,
    )


class DirectMessageRepository(BaseRepository[DirectMessage]):
    """Direct message repository. Conversations are symmetric in the two identities."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, DirectMessage)

    async def create(self, data: DirectMessageCreate) -> DirectMessageResult:
        """Persist a message (read=False) and return it with both profiles."""
        row = await self._add(
            DirectMessage(
                id=data.id,
                sender_id=data.sender_id,
                receiver_id=data.receiver_id,
                text=data.text,
                image_locator=data.image_locator,
                image_storage_kind=(
                    data.image_storage_kind.value if data.image_storage_kind else None
                ),
                read=False,
                created_at=data.created_at,
            )
        )
        sender = await self.db.get(User, data.sender_id)
        receiver = await self.db.get(User, data.receiver_id)
        return _message_to_result(
            row,
            user_to_profile(sender) if sender else None,
            user_to_profile(receiver) if receiver else None,
        )

    async def get_conversation(
        self, identity_a: str, identity_b: str
    ) -> list[DirectMessageResult]:
        """Return messages between a and b in either direction, oldest first."""
        sender_user = aliased(User)
        receiver_user = aliased(User)
        result = await self.db.execute(
            select(DirectMessage, sender_user, receiver_user)
            .outerjoin(sender_user, sender_user.id == DirectMessage.sender_id)
            .outerjoin(receiver_user, receiver_user.id == DirectMessage.receiver_id)
            .where(
                or_(
                    and_(
                        DirectMessage.sender_id == identity_a,
                        DirectMessage.receiver_id == identity_b,
                    ),
                    and_(
                        DirectMessage.sender_id == identity_b,
                        DirectMessage.receiver_id == identity_a,
                    ),
                )
            )
            .order_by(DirectMessage.created_at, DirectMessage.id)
        )
        return [
            _message_to_result(
                m,
                user_to_profile(s) if s is not None else None,
                user_to_profile(r) if r is not None else None,
            )
            for m, s, r in result.all()
        ]
