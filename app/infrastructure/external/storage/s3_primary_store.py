"""Remote primary image store on S3-compatible object storage (AWS S3, MinIO, etc.)."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import boto3
from botocore.exceptions import ClientError

from app.application.dtos.storage import RemoteObject
from app.infrastructure.exceptions import UpstreamTransientError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrimaryStoreConfig:
    """Connection settings for the primary store, injected at construction.

    Built from Settings by the storage factory; the adapter never reads
    configuration from the environment itself.
    """

    bucket: str
    region: str = "us-east-1"
    endpoint_url: str | None = None
    access_key: str | None = None
    secret_key: str | None = None
    public_base_url: str | None = None
    key_prefix: str = ""


class S3PrimaryStore:
    """Primary tier: uploads image bytes and returns a public URL plus delete token.

    Uses boto3 (sync) via asyncio.to_thread for async API. Every failure,
    including client errors, timeouts and credential problems, is raised as
    UpstreamTransientError so the caller can retry or fall back. The delete
    token is the full object key.
    """

    def __init__(self, config: PrimaryStoreConfig) -> None:
        """Initialize S3 client.

        Args:
            config: Bucket, region, endpoint and credentials (uses env/IAM chain if keys unset).
        """
        self.config = config
        extra = {} if config.endpoint_url is None else {"endpoint_url": config.endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=config.region,
            aws_access_key_id=config.access_key,
            aws_secret_access_key=config.secret_key,
            **extra,
        )

    def _object_key(self, key: str) -> str:
        prefix = self.config.key_prefix.strip("/")
        key = key.lstrip("/")
        return f"{prefix}/{key}" if prefix else key

    def public_url(self, object_key: str) -> str:
        """Return the URL clients use to fetch object_key."""
        if self.config.public_base_url:
            return f"{self.config.public_base_url.rstrip('/')}/{object_key}"
        if self.config.endpoint_url:
            return f"{self.config.endpoint_url.rstrip('/')}/{self.config.bucket}/{object_key}"
        return f"https://{self.config.bucket}.s3.{self.config.region}.amazonaws.com/{object_key}"

    async def upload(self, data: bytes, key: str, content_type: str) -> RemoteObject:
        """Upload bytes under key (prefixed with config.key_prefix).

        Args:
            data: Image bytes.
            key: Object key relative to the configured prefix.
            content_type: MIME type stored with the object.

        Returns:
            RemoteObject with public URL and delete token.

        Raises:
            UpstreamTransientError: Any failure talking to the store.
        """
        object_key = self._object_key(key)

        def _put() -> None:
            self._client.put_object(
                Bucket=self.config.bucket,
                Key=object_key,
                Body=data,
                ContentType=content_type,
            )

        try:
            await asyncio.to_thread(_put)
        except Exception as e:
            raise UpstreamTransientError("upload", str(e)) from e
        logger.debug("Uploaded %s (%d bytes) to primary store", object_key, len(data))
        return RemoteObject(url=self.public_url(object_key), delete_token=object_key)

    async def delete(self, delete_token: str) -> bool:
        """Delete object. Returns False if it was already gone."""

        def _delete() -> bool:
            try:
                self._client.head_object(Bucket=self.config.bucket, Key=delete_token)
            except ClientError as e:
                if e.response["Error"]["Code"] in ("404", "NoSuchKey"):
                    return False
                raise
            self._client.delete_object(Bucket=self.config.bucket, Key=delete_token)
            return True

        try:
            return await asyncio.to_thread(_delete)
        except Exception as e:
            raise UpstreamTransientError("delete", str(e)) from e
