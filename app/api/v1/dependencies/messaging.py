"""Direct message dependencies (composition root)."""

from __future__ import annotations

from app.api.v1.dependencies.db import WriteSession
from app.api.v1.dependencies.media import Coordinator
from app.application.use_cases.messaging import DirectMessageService
from app.core.config import get_settings
from app.infrastructure.persistence.repositories import (
    DirectMessageRepository,
    UserDirectoryRepository,
)


async def get_direct_message_service(
    db: WriteSession, coordinator: Coordinator
) -> DirectMessageService:
    """Build DirectMessageService (transactional)."""
    return DirectMessageService(
        message_repo=DirectMessageRepository(db),
        directory=UserDirectoryRepository(db),
        coordinator=coordinator,
        max_image_bytes=get_settings().max_image_bytes,
    )
