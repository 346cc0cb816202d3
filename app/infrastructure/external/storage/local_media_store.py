"""Local filesystem fallback tier with path validation and atomic writes."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import aiofiles
import aiofiles.os

from app.infrastructure.exceptions import (
    StorageDeleteError,
    StoragePermissionError,
    StorageUploadError,
)
from app.shared.utils.generators import generate_media_filename

logger = logging.getLogger(__name__)


class LocalMediaStore:
    """Fallback tier: stores image bytes on the serving host.

    Files get a generated unique name under storage_root; the returned
    locator is the public path (url_prefix + filename) served by the app's
    static files mount. Writes use temp file + rename so no partially written
    file ever appears under its final name.
    """

    def __init__(self, storage_root: str, url_prefix: str = "/uploads") -> None:
        """Initialize local store.

        Args:
            storage_root: Directory holding uploaded files (created if missing).
            url_prefix: Public path prefix mapped onto storage_root.
        """
        self.storage_root = Path(storage_root).resolve()
        self.url_prefix = "/" + url_prefix.strip("/")
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, filename: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / filename).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(filename, "path_validation") from e
        if full_path == self.storage_root:
            raise StoragePermissionError(filename, "path_validation")
        return full_path

    def _filename_from_locator(self, locator: str) -> str:
        prefix = self.url_prefix + "/"
        if not locator.startswith(prefix):
            raise StoragePermissionError(locator, "locator_validation")
        return locator[len(prefix):]

    async def write(self, data: bytes, extension: str) -> str:
        """Write bytes under a new unique filename.

        Args:
            data: Image bytes.
            extension: File extension without dot (e.g. "png").

        Returns:
            Public locator, e.g. /uploads/local-<cuid>.png.

        Raises:
            StorageUploadError: Directory missing/unwritable, disk full, etc.
        """
        filename = generate_media_filename(extension)
        try:
            target_path = self._get_full_path(filename)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=self.storage_root,
                prefix=".tmp_",
                suffix=target_path.suffix,
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(data)
                os.chmod(temp_path, 0o640)
                os.rename(temp_path, target_path)
            finally:
                if Path(temp_path).exists():
                    os.unlink(temp_path)
        except StoragePermissionError:
            raise
        except Exception as e:
            raise StorageUploadError(filename, str(e)) from e
        logger.debug("Wrote %s (%d bytes) to local store", filename, len(data))
        return f"{self.url_prefix}/{filename}"

    async def delete(self, locator: str) -> bool:
        """Delete the file behind locator. Returns True if deleted."""
        filename = self._filename_from_locator(locator)
        file_path = self._get_full_path(filename)
        try:
            if not file_path.exists():
                return False
            await aiofiles.os.remove(file_path)
            return True
        except Exception as e:
            raise StorageDeleteError(filename, str(e)) from e
