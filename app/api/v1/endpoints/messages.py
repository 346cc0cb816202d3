"""Direct messages API: send and conversation history."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from app.api.v1.dependencies import CurrentIdentity, get_direct_message_service
from app.api.v1.endpoints._uploads import image_payload_from_form
from app.application.use_cases.messaging import DirectMessageService
from app.core.limiter import limit_writes
from app.schemas.message import DirectMessageResponse

router = APIRouter()


@router.get("/{identity_id}", response_model=list[DirectMessageResponse])
async def get_conversation(
    identity_id: str,
    caller: CurrentIdentity,
    message_svc: Annotated[DirectMessageService, Depends(get_direct_message_service)],
) -> list[DirectMessageResponse]:
    """Messages between the caller and identity_id in either direction, oldest first."""
    messages = await message_svc.history(caller.id, identity_id)
    return [DirectMessageResponse.from_result(m) for m in messages]


@router.post("", response_model=DirectMessageResponse, status_code=201)
@limit_writes
async def send_message(
    request: Request,
    caller: CurrentIdentity,
    message_svc: Annotated[DirectMessageService, Depends(get_direct_message_service)],
    receiver_id: str = Form(...),
    message: str = Form(""),
    image: UploadFile | None = File(None),
) -> DirectMessageResponse:
    """Send a direct message (optional image attachment)."""
    payload = await image_payload_from_form(image)
    sent = await message_svc.send(
        sender_id=caller.id,
        receiver_id=receiver_id,
        text=message,
        image=payload,
    )
    return DirectMessageResponse.from_result(sent)
