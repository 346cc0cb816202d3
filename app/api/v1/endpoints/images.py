"""Images API: upload, listing, sharing, deletion and comment threads.

Thin routes delegating to the media use cases. Permission checks live in
the use cases (AccessGuard); an access denial is answered as 404.
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile

from app.api.v1.dependencies import (
    CurrentIdentity,
    get_comment_thread_service,
    get_media_deletion_service,
    get_media_query_service,
    get_media_sharing_service,
    get_media_upload_service,
)
from app.api.v1.endpoints._uploads import image_payload_from_form
from app.application.use_cases.media import (
    CommentThreadService,
    MediaDeletionService,
    MediaQueryService,
    MediaSharingService,
    MediaUploadService,
)
from app.core.limiter import limit_upload, limit_writes
from app.domain.exceptions import ValidationException
from app.schemas.media import CommentResponse, MediaRecordResponse, MediaShareRequest

router = APIRouter()


@router.post("", response_model=MediaRecordResponse, status_code=201)
@limit_upload
async def upload_image(
    request: Request,
    caller: CurrentIdentity,
    upload_svc: Annotated[MediaUploadService, Depends(get_media_upload_service)],
    patient_id: str = Form(...),
    notes: str = Form(""),
    captured_at: datetime | None = Form(None),
    image: UploadFile | None = File(None),
    image_data: str | None = Form(None),
) -> MediaRecordResponse:
    """Store an image for one of the caller's patients (multipart file or inline data URI).

    Returns 503 when neither storage tier could take the image; no record is created then.
    """
    payload = await image_payload_from_form(image, image_data)
    if payload is None:
        raise ValidationException("No image provided", field="image")
    record = await upload_svc.upload_for_subject(
        owner_id=caller.id,
        subject_id=patient_id,
        payload=payload,
        notes=notes,
        captured_at=captured_at,
    )
    return MediaRecordResponse.from_result(record)


@router.get("/shared", response_model=list[MediaRecordResponse])
async def list_shared_images(
    caller: CurrentIdentity,
    query_svc: Annotated[MediaQueryService, Depends(get_media_query_service)],
) -> list[MediaRecordResponse]:
    """Images other doctors shared with the caller, with owner name/specialty."""
    records = await query_svc.list_shared_with(caller.id)
    return [MediaRecordResponse.from_result(r) for r in records]


@router.get("/patient/{patient_id}", response_model=list[MediaRecordResponse])
async def list_patient_images(
    patient_id: str,
    caller: CurrentIdentity,
    query_svc: Annotated[MediaQueryService, Depends(get_media_query_service)],
) -> list[MediaRecordResponse]:
    """Images of one of the caller's patients, newest capture first."""
    records = await query_svc.list_for_subject(caller.id, patient_id)
    return [MediaRecordResponse.from_result(r) for r in records]


@router.get("/{media_id}", response_model=MediaRecordResponse)
async def get_image(
    media_id: str,
    caller: CurrentIdentity,
    query_svc: Annotated[MediaQueryService, Depends(get_media_query_service)],
) -> MediaRecordResponse:
    """Single image the caller owns or was shared."""
    record = await query_svc.get_media(caller.id, media_id)
    return MediaRecordResponse.from_result(record)


@router.post("/{media_id}/share", response_model=MediaRecordResponse)
@limit_writes
async def share_image(
    request: Request,
    media_id: str,
    body: MediaShareRequest,
    caller: CurrentIdentity,
    sharing_svc: Annotated[MediaSharingService, Depends(get_media_sharing_service)],
) -> MediaRecordResponse:
    """Share an owned image with other doctors (idempotent)."""
    record = await sharing_svc.share(caller.id, media_id, body.doctor_ids)
    return MediaRecordResponse.from_result(record)


@router.delete("/{media_id}", status_code=204)
@limit_writes
async def delete_image(
    request: Request,
    media_id: str,
    caller: CurrentIdentity,
    deletion_svc: Annotated[MediaDeletionService, Depends(get_media_deletion_service)],
) -> Response:
    """Delete an owned image; stored bytes are removed best-effort."""
    await deletion_svc.delete_media(caller.id, media_id)
    return Response(status_code=204)


@router.get("/{media_id}/comments", response_model=list[CommentResponse])
async def list_comments(
    media_id: str,
    caller: CurrentIdentity,
    thread_svc: Annotated[CommentThreadService, Depends(get_comment_thread_service)],
) -> list[CommentResponse]:
    """Comment thread in posting order."""
    entries = await thread_svc.list(media_id, caller.id)
    return [CommentResponse.from_result(e) for e in entries]


@router.post("/{media_id}/comments", response_model=CommentResponse, status_code=201)
@limit_writes
async def post_comment(
    request: Request,
    media_id: str,
    caller: CurrentIdentity,
    thread_svc: Annotated[CommentThreadService, Depends(get_comment_thread_service)],
    message: str | None = Form(None),
    image: UploadFile | None = File(None),
    image_data: str | None = Form(None),
) -> CommentResponse:
    """Append a comment (text, image, or both) to an image the caller can read."""
    payload = await image_payload_from_form(image, image_data)
    entry = await thread_svc.post(
        media_id=media_id,
        author_id=caller.id,
        text=message,
        image=payload,
    )
    return CommentResponse.from_result(entry)
