"""Upload coordinator: primary store with bounded retries, local fallback.

Turns "store these image bytes" into a StorageResult whose locator is
guaranteed retrievable, or raises StorageUnavailableException. Nothing is
persisted by callers until ingest returns.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from app.application.dtos.storage import StorageResult
from app.application.interfaces.storage import ILocalStore, IPrimaryStore
from app.application.services.image_payload import normalize_content_type
from app.domain.enums import StorageKind
from app.domain.exceptions import StorageUnavailableException, ValidationException
from app.infrastructure.exceptions import StorageException
from app.shared.telemetry.tracing import add_span_attributes, add_span_event, traced
from app.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class UploadCoordinator:
    """Stores image bytes in the primary tier, falling back to the local tier.

    The primary store is tried at most max_attempts times with exponential
    backoff (backoff_base * 2**(n-1) seconds after attempt n). Once an
    attempt succeeds the local store is never touched. When retries are
    exhausted, or no primary store is configured, bytes go to the local
    store; if that also fails StorageUnavailableException is raised.
    """

    def __init__(
        self,
        primary: IPrimaryStore | None,
        local: ILocalStore,
        max_attempts: int = 3,
        backoff_base: float = 1.0,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.primary = primary
        self.local = local
        self.max_attempts = max_attempts
        self.backoff_base = backoff_base
        self._sleep = sleep

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number `attempt` (1-based)."""
        return self.backoff_base * (2 ** (attempt - 1))

    async def _try_primary(
        self, data: bytes, key: str, content_type: str
    ) -> StorageResult | None:
        assert self.primary is not None
        for attempt in range(1, self.max_attempts + 1):
            try:
                remote = await self.primary.upload(data, key, content_type)
            except StorageException as e:
                logger.warning(
                    "Primary store upload attempt %d/%d failed: %s",
                    attempt,
                    self.max_attempts,
                    e.details.get("reason", e.message),
                )
                add_span_event("primary_attempt_failed", {"attempt": attempt})
                if attempt < self.max_attempts:
                    await self._sleep(self.backoff_delay(attempt))
                continue
            return StorageResult(
                locator=remote.url,
                storage_kind=StorageKind.REMOTE,
                remote_delete_token=remote.delete_token,
            )
        return None

    @traced("upload_coordinator.ingest")
    async def ingest(
        self, data: bytes, content_hint: str | None, namespace: str = "images"
    ) -> StorageResult:
        """Store image bytes and return where they live.

        Args:
            data: Image bytes (must be non-empty).
            content_hint: Image MIME type, e.g. "image/png".
            namespace: Key folder within the primary store (e.g. "images", "chat").

        Returns:
            StorageResult(locator, storage_kind, remote_delete_token).

        Raises:
            ValidationException: Empty bytes or non-image content hint.
            StorageUnavailableException: Both tiers failed.
        """
        if not data:
            raise ValidationException("Image is empty", field="image")
        content_type, extension = normalize_content_type(content_hint)

        if self.primary is not None:
            key = f"{namespace}/{generate_cuid()}.{extension}"
            result = await self._try_primary(data, key, content_type)
            if result is not None:
                add_span_attributes(storage_kind=result.storage_kind.value)
                return result
            logger.warning(
                "Primary store unavailable after %d attempts; falling back to local store",
                self.max_attempts,
            )
        else:
            logger.warning("No primary store configured; writing image to local store")

        try:
            locator = await self.local.write(data, extension)
        except StorageException as e:
            logger.error(
                "Local store write failed after primary store failure: %s",
                e.details.get("reason", e.message),
            )
            raise StorageUnavailableException(e.message) from e
        add_span_attributes(storage_kind=StorageKind.LOCAL.value)
        return StorageResult(locator=locator, storage_kind=StorageKind.LOCAL)

    @traced("upload_coordinator.discard")
    async def discard(
        self,
        storage_kind: StorageKind,
        locator: str,
        delete_token: str | None = None,
    ) -> bool:
        """Best-effort removal of stored bytes. Never raises for storage failures.

        Returns:
            True if the bytes were removed, False if skipped or failed.
        """
        try:
            if storage_kind == StorageKind.REMOTE:
                if self.primary is None or not delete_token:
                    logger.warning(
                        "Cannot delete remote image %s: no primary store or delete token",
                        locator,
                    )
                    return False
                return await self.primary.delete(delete_token)
            return await self.local.delete(locator)
        except StorageException as e:
            logger.warning(
                "Failed to delete %s image %s: %s",
                storage_kind.value,
                locator,
                e.details.get("reason", e.message),
            )
            return False
