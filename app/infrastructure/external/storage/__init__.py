"""Storage tiers: S3-compatible primary store and local filesystem fallback.

StorageFactory builds both from app.core.config. Implementations satisfy
app.application.interfaces.storage (IPrimaryStore, ILocalStore).
"""

from app.infrastructure.external.storage.factory import StorageFactory
from app.infrastructure.external.storage.local_media_store import LocalMediaStore
from app.infrastructure.external.storage.s3_primary_store import (
    PrimaryStoreConfig,
    S3PrimaryStore,
)

__all__ = [
    "LocalMediaStore",
    "PrimaryStoreConfig",
    "S3PrimaryStore",
    "StorageFactory",
]
