"""Direct messages between two identities, independent of any media record."""

from __future__ import annotations

import logging

from app.application.dtos.direct_message import (
    DirectMessageCreate,
    DirectMessageResult,
)
from app.application.interfaces.repositories import (
    IDirectMessageRepository,
    IUserDirectory,
)
from app.application.services.image_payload import (
    DEFAULT_MAX_IMAGE_BYTES,
    ImagePayload,
    resolve_image_payload,
)
from app.application.services.upload_coordinator import UploadCoordinator
from app.domain.entities.direct_message import DirectMessageEntity
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.utils import generate_cuid, utc_now

logger = logging.getLogger(__name__)

CHAT_NAMESPACE = "chat"


class DirectMessageService:
    """Sends messages and returns symmetric conversation history."""

    def __init__(
        self,
        message_repo: IDirectMessageRepository,
        directory: IUserDirectory,
        coordinator: UploadCoordinator | None = None,
        max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
    ) -> None:
        self.message_repo = message_repo
        self.directory = directory
        self.coordinator = coordinator
        self.max_image_bytes = max_image_bytes

    async def send(
        self,
        sender_id: str,
        receiver_id: str,
        text: str,
        image: ImagePayload | None = None,
    ) -> DirectMessageResult:
        """Persist a message from sender to receiver (read starts False).

        Raises:
            ValidationException: Text empty after trimming, or sender == receiver.
            ResourceNotFoundException: Receiver unknown.
            StorageUnavailableException: Attached image could not be stored.
        """
        entity = DirectMessageEntity(
            sender_id=sender_id, receiver_id=receiver_id, text=text
        )
        if await self.directory.resolve(receiver_id) is None:
            raise ResourceNotFoundException("identity", receiver_id)

        stored = None
        if image is not None:
            if self.coordinator is None:
                raise ValidationException(
                    "Image attachments are not supported", field="image"
                )
            resolved = resolve_image_payload(image, self.max_image_bytes)
            stored = await self.coordinator.ingest(
                resolved.data, resolved.content_type, namespace=CHAT_NAMESPACE
            )

        create_dto = DirectMessageCreate(
            id=generate_cuid(),
            sender_id=entity.sender_id,
            receiver_id=entity.receiver_id,
            text=entity.text,
            image_locator=stored.locator if stored else None,
            image_storage_kind=stored.storage_kind if stored else None,
            created_at=utc_now(),
        )
        try:
            message = await self.message_repo.create(create_dto)
        except Exception:
            if stored is not None:
                await self.coordinator.discard(
                    stored.storage_kind, stored.locator, stored.remote_delete_token
                )
            raise
        logger.debug("Direct message %s sent", message.id)
        return message

    async def history(
        self, identity_a: str, identity_b: str
    ) -> list[DirectMessageResult]:
        """Return all messages between a and b in either direction, oldest first.

        history(a, b) and history(b, a) return the same sequence.
        """
        if await self.directory.resolve(identity_b) is None:
            raise ResourceNotFoundException("identity", identity_b)
        return await self.message_repo.get_conversation(identity_a, identity_b)
