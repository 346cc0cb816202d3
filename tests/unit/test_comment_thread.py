"""CommentThreadService unit tests with mocked repository and coordinator."""

import base64
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from app.application.dtos.media import CommentEntryResult, MediaRecordResult
from app.application.dtos.storage import StorageResult
from app.application.dtos.user import IdentityProfile
from app.application.services.image_payload import InlinePayload
from app.application.use_cases.media import CommentThreadService
from app.domain.enums import StorageKind
from app.domain.exceptions import (
    AccessDeniedException,
    ResourceNotFoundException,
    StorageUnavailableException,
    ValidationException,
)

PNG_URI = "data:image/png;base64," + base64.b64encode(b"\x89PNG\r\n\x1a\n").decode()


def _record() -> MediaRecordResult:
    return MediaRecordResult(
        id="m1",
        owner_id="alice",
        subject_id="p1",
        locator="/uploads/local-m1.png",
        storage_kind=StorageKind.LOCAL,
        remote_delete_token=None,
        notes="",
        captured_at=datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc),
        shared_with=frozenset({"bob"}),
    )


def _echo_entry(dto) -> CommentEntryResult:
    return CommentEntryResult(
        id=dto.id,
        media_id=dto.media_id,
        author_id=dto.author_id,
        text=dto.text,
        image_locator=dto.image_locator,
        image_storage_kind=dto.image_storage_kind,
        posted_at=dto.posted_at,
        author=IdentityProfile(id=dto.author_id, name="Bob", specialty="Audiology"),
    )


@pytest.fixture
def thread_mocks():
    media_repo = AsyncMock()
    media_repo.get_by_id = AsyncMock(return_value=_record())
    media_repo.append_comment = AsyncMock(side_effect=_echo_entry)
    coordinator = AsyncMock()
    coordinator.ingest = AsyncMock(
        return_value=StorageResult(locator="/uploads/local-c1.png", storage_kind=StorageKind.LOCAL)
    )
    coordinator.discard = AsyncMock(return_value=True)
    return CommentThreadService(media_repo, coordinator), media_repo, coordinator


async def test_shared_identity_posts_text_comment(thread_mocks) -> None:
    """A shared identity may comment; text is trimmed and author profile returned."""
    svc, media_repo, coordinator = thread_mocks

    entry = await svc.post("m1", "bob", text="  looks like otitis media  ")

    assert entry.text == "looks like otitis media"
    assert entry.image_locator is None
    assert entry.author is not None and entry.author.name == "Bob"
    assert entry.posted_at.tzinfo is not None
    coordinator.ingest.assert_not_awaited()
    media_repo.append_comment.assert_awaited_once()


async def test_image_only_comment_ingested_then_appended(thread_mocks) -> None:
    svc, media_repo, coordinator = thread_mocks

    entry = await svc.post("m1", "alice", image=InlinePayload(PNG_URI))

    assert entry.text is None
    assert entry.image_locator == "/uploads/local-c1.png"
    assert entry.image_storage_kind == StorageKind.LOCAL
    coordinator.ingest.assert_awaited_once()


async def test_stranger_cannot_comment(thread_mocks) -> None:
    svc, media_repo, coordinator = thread_mocks

    with pytest.raises(AccessDeniedException):
        await svc.post("m1", "carol", text="hello")
    media_repo.append_comment.assert_not_awaited()
    coordinator.ingest.assert_not_awaited()


async def test_blank_comment_without_image_rejected(thread_mocks) -> None:
    svc, media_repo, _ = thread_mocks

    with pytest.raises(ValidationException, match="empty"):
        await svc.post("m1", "bob", text="   ")
    media_repo.append_comment.assert_not_awaited()


async def test_storage_failure_aborts_post(thread_mocks) -> None:
    """When the attached image cannot be stored, nothing is appended."""
    svc, media_repo, coordinator = thread_mocks
    coordinator.ingest = AsyncMock(side_effect=StorageUnavailableException("disk full"))

    with pytest.raises(StorageUnavailableException):
        await svc.post("m1", "bob", text="see photo", image=InlinePayload(PNG_URI))
    media_repo.append_comment.assert_not_awaited()


async def test_append_failure_discards_ingested_image(thread_mocks) -> None:
    svc, media_repo, coordinator = thread_mocks
    media_repo.append_comment = AsyncMock(side_effect=RuntimeError("db down"))

    with pytest.raises(RuntimeError):
        await svc.post("m1", "bob", image=InlinePayload(PNG_URI))
    coordinator.discard.assert_awaited_once_with(
        StorageKind.LOCAL, "/uploads/local-c1.png", None
    )


async def test_post_on_missing_record(thread_mocks) -> None:
    svc, media_repo, _ = thread_mocks
    media_repo.get_by_id = AsyncMock(return_value=None)

    with pytest.raises(ResourceNotFoundException):
        await svc.post("missing", "bob", text="hi")


async def test_list_requires_read_access(thread_mocks) -> None:
    svc, media_repo, _ = thread_mocks

    with pytest.raises(AccessDeniedException):
        await svc.list("m1", "carol")
    media_repo.list_comments.assert_not_awaited()

    media_repo.list_comments = AsyncMock(return_value=[])
    assert await svc.list("m1", "bob") == []
