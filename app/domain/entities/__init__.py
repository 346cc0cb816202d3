"""Domain entities.

Pure domain models; no ORM or persistence concerns.
"""

from app.domain.entities.comment import CommentEntity
from app.domain.entities.direct_message import DirectMessageEntity

__all__ = [
    "CommentEntity",
    "DirectMessageEntity",
]
