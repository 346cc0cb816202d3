"""DirectMessageService unit tests with mocked repository and directory."""

import base64
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from app.application.dtos.direct_message import DirectMessageResult
from app.application.dtos.storage import StorageResult
from app.application.dtos.user import IdentityProfile
from app.application.services.image_payload import InlinePayload
from app.application.use_cases.messaging import DirectMessageService
from app.domain.enums import StorageKind
from app.domain.exceptions import ResourceNotFoundException, ValidationException

KNOWN = {"alice", "bob"}


def _echo_message(dto) -> DirectMessageResult:
    return DirectMessageResult(
        id=dto.id,
        sender_id=dto.sender_id,
        receiver_id=dto.receiver_id,
        text=dto.text,
        image_locator=dto.image_locator,
        image_storage_kind=dto.image_storage_kind,
        read=False,
        created_at=dto.created_at,
    )


@pytest.fixture
def message_mocks():
    message_repo = AsyncMock()
    message_repo.create = AsyncMock(side_effect=_echo_message)
    directory = AsyncMock()
    directory.resolve = AsyncMock(
        side_effect=lambda i: IdentityProfile(id=i, name=i.title()) if i in KNOWN else None
    )
    coordinator = AsyncMock()
    coordinator.ingest = AsyncMock(
        return_value=StorageResult(
            locator="https://cdn.example.org/chat/x.png",
            storage_kind=StorageKind.REMOTE,
            remote_delete_token="chat/x.png",
        )
    )
    svc = DirectMessageService(message_repo, directory, coordinator)
    return svc, message_repo, coordinator


async def test_send_trims_and_starts_unread(message_mocks) -> None:
    svc, message_repo, _ = message_mocks

    sent = await svc.send("alice", "bob", "  please review the left TM  ")

    assert sent.text == "please review the left TM"
    assert sent.read is False
    assert sent.created_at.tzinfo is not None
    message_repo.create.assert_awaited_once()


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
async def test_blank_message_rejected(message_mocks, text: str) -> None:
    svc, message_repo, _ = message_mocks
    with pytest.raises(ValidationException, match="empty"):
        await svc.send("alice", "bob", text)
    message_repo.create.assert_not_awaited()


async def test_message_to_self_rejected(message_mocks) -> None:
    svc, message_repo, _ = message_mocks
    with pytest.raises(ValidationException, match="yourself"):
        await svc.send("alice", "alice", "note to self")
    message_repo.create.assert_not_awaited()


async def test_unknown_receiver_rejected(message_mocks) -> None:
    svc, message_repo, _ = message_mocks
    with pytest.raises(ResourceNotFoundException):
        await svc.send("alice", "ghost", "hello")
    message_repo.create.assert_not_awaited()


async def test_image_goes_through_chat_namespace(message_mocks) -> None:
    svc, message_repo, coordinator = message_mocks
    png = "data:image/png;base64," + base64.b64encode(b"\x89PNG\r\n\x1a\n").decode()

    sent = await svc.send("alice", "bob", "photo", image=InlinePayload(png))

    assert coordinator.ingest.await_args.kwargs["namespace"] == "chat"
    assert sent.image_locator == "https://cdn.example.org/chat/x.png"
    assert sent.image_storage_kind == StorageKind.REMOTE


async def test_failed_create_discards_attached_image(message_mocks) -> None:
    svc, message_repo, coordinator = message_mocks
    message_repo.create = AsyncMock(side_effect=RuntimeError("insert failed"))
    png = "data:image/png;base64," + base64.b64encode(b"\x89PNG\r\n\x1a\n").decode()

    with pytest.raises(RuntimeError):
        await svc.send("alice", "bob", "photo", image=InlinePayload(png))

    coordinator.discard.assert_awaited_once_with(
        StorageKind.REMOTE, "https://cdn.example.org/chat/x.png", "chat/x.png"
    )


async def test_failed_create_without_image_discards_nothing(message_mocks) -> None:
    svc, message_repo, coordinator = message_mocks
    message_repo.create = AsyncMock(side_effect=RuntimeError("insert failed"))

    with pytest.raises(RuntimeError):
        await svc.send("alice", "bob", "hello")

    coordinator.discard.assert_not_awaited()


async def test_history_is_symmetric(message_mocks) -> None:
    """history(a, b) and history(b, a) are answered by the same conversation query."""
    svc, message_repo, _ = message_mocks
    conversation = [
        DirectMessageResult(
            id="dm1", sender_id="alice", receiver_id="bob", text="hi", image_locator=None,
            image_storage_kind=None, read=False,
            created_at=datetime(2025, 1, 1, 8, 0, tzinfo=timezone.utc),
        ),
        DirectMessageResult(
            id="dm2", sender_id="bob", receiver_id="alice", text="hello", image_locator=None,
            image_storage_kind=None, read=False,
            created_at=datetime(2025, 1, 1, 8, 1, tzinfo=timezone.utc),
        ),
    ]
    message_repo.get_conversation = AsyncMock(return_value=conversation)

    assert await svc.history("alice", "bob") == conversation
    assert await svc.history("bob", "alice") == conversation


async def test_history_with_unknown_identity(message_mocks) -> None:
    svc, message_repo, _ = message_mocks
    with pytest.raises(ResourceNotFoundException):
        await svc.history("alice", "ghost")
    message_repo.get_conversation.assert_not_awaited()


async def test_image_without_coordinator_rejected() -> None:
    directory = AsyncMock()
    directory.resolve = AsyncMock(return_value=IdentityProfile(id="bob", name="Bob"))
    svc = DirectMessageService(AsyncMock(), directory, coordinator=None)
    with pytest.raises(ValidationException, match="not supported"):
        await svc.send("alice", "bob", "x", image=InlinePayload("data:image/png;base64,AA=="))
