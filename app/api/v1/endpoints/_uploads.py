"""Request-boundary helpers turning form fields into image payloads."""

from fastapi import UploadFile

from app.application.services.image_payload import (
    FileUpload,
    ImagePayload,
    InlinePayload,
)


async def image_payload_from_form(
    image: UploadFile | None, image_data: str | None = None
) -> ImagePayload | None:
    """Return a FileUpload for a multipart file, an InlinePayload for a data URI, or None.

    A non-empty file takes precedence over inline data.
    """
    if image is not None and (image.filename or image.size):
        data = await image.read()
        return FileUpload(data=data, content_type=image.content_type, filename=image.filename)
    if image_data and image_data.strip():
        return InlinePayload(encoded=image_data)
    return None
