"""Direct message API schemas."""

from datetime import datetime

from pydantic import BaseModel

from app.application.dtos.direct_message import DirectMessageResult
from app.schemas.common import IdentitySummary


class DirectMessageResponse(BaseModel):
    """Direct message between two identities."""

    id: str
    sender_id: str
    receiver_id: str
    message: str
    image_url: str | None = None
    read: bool = False
    created_at: datetime
    sender: IdentitySummary | None = None
    receiver: IdentitySummary | None = None

    @classmethod
    def from_result(cls, m: DirectMessageResult) -> "DirectMessageResponse":
        return cls(
            id=m.id,
            sender_id=m.sender_id,
            receiver_id=m.receiver_id,
            message=m.text,
            image_url=m.image_locator,
            read=m.read,
            created_at=m.created_at,
            sender=IdentitySummary.from_profile(m.sender),
            receiver=IdentitySummary.from_profile(m.receiver),
        )
