"""Direct message domain entity.

A peer-to-peer message between two identities, not attached to any media.
"""

from dataclasses import dataclass

from app.domain.exceptions import ValidationException


@dataclass
class DirectMessageEntity:
    """Domain entity for an outgoing direct message. Validation runs on construction."""

    sender_id: str
    receiver_id: str
    text: str

    def __post_init__(self) -> None:
        self.text = (self.text or "").strip()
        self.validate()

    def validate(self) -> None:
        """Validate message business rules. Raises ValidationException if invalid."""
        if not self.text:
            raise ValidationException("Message cannot be empty", field="message")
        if not self.receiver_id:
            raise ValidationException("Receiver is required", field="receiver_id")
        if self.sender_id == self.receiver_id:
            raise ValidationException(
                "Cannot send a message to yourself", field="receiver_id"
            )
