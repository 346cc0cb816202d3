"""Storage interfaces (ports) for the two image storage tiers.

The primary tier is a remote object store that may fail transiently; the
local tier is the filesystem fallback. Implementations raise
app.infrastructure.exceptions.StorageException subclasses on failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.storage import RemoteObject


class IPrimaryStore(Protocol):
    """Protocol for the remote primary tier."""

    async def upload(self, data: bytes, key: str, content_type: str) -> RemoteObject:
        """Upload bytes under key. Raise UpstreamTransientError on any failure."""

    async def delete(self, delete_token: str) -> bool:
        """Delete a previously uploaded object. Raise UpstreamTransientError on failure."""


class ILocalStore(Protocol):
    """Protocol for the filesystem fallback tier."""

    async def write(self, data: bytes, extension: str) -> str:
        """Store bytes under a unique generated filename and return its public locator."""

    async def delete(self, locator: str) -> bool:
        """Delete file behind locator. Return True if it existed."""
