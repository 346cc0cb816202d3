"""Storage factory: builds the primary and fallback tiers from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.infrastructure.external.storage.local_media_store import LocalMediaStore
from app.infrastructure.external.storage.s3_primary_store import (
    PrimaryStoreConfig,
    S3PrimaryStore,
)

if TYPE_CHECKING:
    from app.core.config import Settings


class StorageFactory:
    """Factory for storage tier instances based on configuration."""

    @staticmethod
    def primary_store_config(settings: "Settings") -> PrimaryStoreConfig | None:
        """Return PrimaryStoreConfig, or None when no bucket is configured."""
        if not settings.s3_bucket:
            return None
        secret = settings.s3_secret_key.get_secret_value() if settings.s3_secret_key else None
        return PrimaryStoreConfig(
            bucket=settings.s3_bucket,
            region=settings.s3_region,
            endpoint_url=settings.s3_endpoint_url,
            access_key=settings.s3_access_key,
            secret_key=secret,
            public_base_url=settings.s3_public_base_url,
            key_prefix=settings.s3_key_prefix,
        )

    @staticmethod
    def create_primary_store(settings: "Settings | None" = None) -> S3PrimaryStore | None:
        """Create the remote primary tier.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            S3PrimaryStore, or None when S3_BUCKET is unset (local tier only).
        """
        from app.core.config import get_settings

        s = settings or get_settings()
        config = StorageFactory.primary_store_config(s)
        if config is None:
            return None
        return S3PrimaryStore(config)

    @staticmethod
    def create_local_store(settings: "Settings | None" = None) -> LocalMediaStore:
        """Create the filesystem fallback tier.

        Raises:
            ValueError: STORAGE_ROOT not set.
        """
        from app.core.config import get_settings

        s = settings or get_settings()
        if not s.storage_root:
            raise ValueError("STORAGE_ROOT required for local media store")
        return LocalMediaStore(
            storage_root=s.storage_root,
            url_prefix=s.local_media_url_prefix,
        )
