"""Media deletion against a real session: stored bytes go only after the delete commits."""

from datetime import datetime, timezone
from functools import partial

import pytest

from app.application.dtos.media import MediaRecordCreate
from app.application.use_cases.media import MediaDeletionService
from app.application.use_cases.patients import PatientDeletionService
from app.domain.enums import StorageKind
from app.infrastructure.persistence.database import after_commit, transactional_session
from app.infrastructure.persistence.repositories import (
    MediaRecordRepository,
    PatientRepository,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x05" * 16


async def _stored_record(session_factory, local_store, media_id: str, owner_id: str, subject_id: str) -> str:
    """Write bytes to the local store and commit a record pointing at them. Returns the filename."""
    locator = await local_store.write(PNG_BYTES, "png")
    async with session_factory() as session:
        await MediaRecordRepository(session).create(
            MediaRecordCreate(
                id=media_id,
                owner_id=owner_id,
                subject_id=subject_id,
                locator=locator,
                storage_kind=StorageKind.LOCAL,
                remote_delete_token=None,
                notes="",
                captured_at=datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc),
            )
        )
        await session.commit()
    return locator.rsplit("/", 1)[1]


def _deletion_service(session, coordinator) -> MediaDeletionService:
    return MediaDeletionService(
        MediaRecordRepository(session),
        coordinator,
        after_commit=partial(after_commit, session),
    )


async def test_rolled_back_delete_keeps_record_and_bytes(
    session_factory, seed, local_store, coordinator
) -> None:
    filename = await _stored_record(session_factory, local_store, "m-keep", seed.alice, seed.alice_patient)

    with pytest.raises(RuntimeError):
        async with transactional_session(session_factory) as session:
            await _deletion_service(session, coordinator).delete_media(seed.alice, "m-keep")
            raise RuntimeError("request failed before commit")

    async with session_factory() as session:
        assert await MediaRecordRepository(session).get_by_id("m-keep") is not None
    assert (local_store.storage_root / filename).exists()


async def test_committed_delete_removes_record_then_bytes(
    session_factory, seed, local_store, coordinator
) -> None:
    filename = await _stored_record(session_factory, local_store, "m-gone", seed.alice, seed.alice_patient)

    async with transactional_session(session_factory) as session:
        await _deletion_service(session, coordinator).delete_media(seed.alice, "m-gone")
        assert (local_store.storage_root / filename).exists()

    async with session_factory() as session:
        assert await MediaRecordRepository(session).get_by_id("m-gone") is None
    assert not (local_store.storage_root / filename).exists()


async def test_rolled_back_patient_cascade_keeps_media_bytes(
    session_factory, seed, local_store, coordinator
) -> None:
    filename = await _stored_record(session_factory, local_store, "m-cascade", seed.alice, seed.alice_patient)

    with pytest.raises(RuntimeError):
        async with transactional_session(session_factory) as session:
            service = PatientDeletionService(
                PatientRepository(session), _deletion_service(session, coordinator)
            )
            assert await service.delete_patient(seed.alice, seed.alice_patient) == 1
            raise RuntimeError("request failed before commit")

    async with session_factory() as session:
        assert await PatientRepository(session).is_owned_by(seed.alice_patient, seed.alice)
        assert await MediaRecordRepository(session).get_by_id("m-cascade") is not None
    assert (local_store.storage_root / filename).exists()
