"""Image payload resolution at the request boundary.

An image arrives either as a multipart file (FileUpload) or as an inline
``data:<type>;base64,<data>`` string (InlinePayload). Both are resolved once,
here, into ResolvedImage; everything downstream sees bytes plus a content type.
"""

from __future__ import annotations

import base64
import binascii
import os
import re
from dataclasses import dataclass

from app.application.dtos.storage import ResolvedImage
from app.domain.exceptions import ValidationException

# content type -> file extension
IMAGE_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}

_EXTENSION_CONTENT_TYPES: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
}

_DATA_URI_RE = re.compile(
    r"^data:(?P<content_type>image/[a-zA-Z0-9.+-]+);base64,(?P<data>.*)$",
    re.DOTALL,
)

DEFAULT_MAX_IMAGE_BYTES = 10 * 1024 * 1024


@dataclass(frozen=True)
class FileUpload:
    """Multipart file upload."""

    data: bytes
    content_type: str | None
    filename: str | None = None


@dataclass(frozen=True)
class InlinePayload:
    """Inline data URI, e.g. ``data:image/png;base64,iVBORw0...``."""

    encoded: str


ImagePayload = FileUpload | InlinePayload


def normalize_content_type(content_hint: str | None) -> tuple[str, str]:
    """Return (content_type, extension) for an accepted image content type.

    Raises:
        ValidationException: Hint missing or not an accepted image type.
    """
    content_type = (content_hint or "").split(";", 1)[0].strip().lower()
    if not content_type.startswith("image/"):
        raise ValidationException(
            "Only image uploads are allowed", field="image"
        )
    extension = IMAGE_CONTENT_TYPES.get(content_type)
    if extension is None:
        raise ValidationException(
            f"Unsupported image type: {content_type}. "
            "Allowed: jpeg, png, gif, webp",
            field="image",
        )
    return content_type, extension


def _content_type_from_filename(filename: str | None) -> str | None:
    if not filename:
        return None
    ext = os.path.splitext(filename)[1].lower().lstrip(".")
    return _EXTENSION_CONTENT_TYPES.get(ext)


def _check_size(data: bytes, max_bytes: int) -> None:
    if not data:
        raise ValidationException("Image is empty", field="image")
    if len(data) > max_bytes:
        raise ValidationException(
            f"Image exceeds maximum size of {max_bytes} bytes", field="image"
        )


def _resolve_inline(payload: InlinePayload, max_bytes: int) -> ResolvedImage:
    match = _DATA_URI_RE.match(payload.encoded.strip())
    if match is None:
        raise ValidationException(
            "Inline image must be a data URI of the form data:image/<type>;base64,<data>",
            field="image_data",
        )
    content_type, extension = normalize_content_type(match.group("content_type"))
    try:
        data = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationException(
            "Inline image is not valid base64", field="image_data"
        ) from e
    _check_size(data, max_bytes)
    return ResolvedImage(data=data, content_type=content_type, extension=extension)


def _resolve_file(payload: FileUpload, max_bytes: int) -> ResolvedImage:
    hint = payload.content_type
    if not hint or hint == "application/octet-stream":
        hint = _content_type_from_filename(payload.filename)
    content_type, extension = normalize_content_type(hint)
    _check_size(payload.data, max_bytes)
    return ResolvedImage(data=payload.data, content_type=content_type, extension=extension)


def resolve_image_payload(
    payload: ImagePayload, max_bytes: int = DEFAULT_MAX_IMAGE_BYTES
) -> ResolvedImage:
    """Resolve a file upload or inline payload into bytes and an image content type.

    Args:
        payload: FileUpload or InlinePayload.
        max_bytes: Upper bound on decoded size.

    Returns:
        ResolvedImage with data, content_type and extension.

    Raises:
        ValidationException: Empty, oversized, malformed or non-image payload.
    """
    if isinstance(payload, InlinePayload):
        return _resolve_inline(payload, max_bytes)
    return _resolve_file(payload, max_bytes)
