"""Comment domain entity.

Represents one entry of a media discussion thread, independent of persistence.
"""

from dataclasses import dataclass

from app.domain.exceptions import ValidationException


@dataclass
class CommentEntity:
    """Domain entity for a comment about to be appended to a media thread.

    A comment carries text, an image, or both. Text is stored trimmed;
    blank text counts as absent. Validation runs on construction.
    """

    media_id: str
    author_id: str
    text: str | None
    has_image: bool = False

    def __post_init__(self) -> None:
        if self.text is not None:
            self.text = self.text.strip() or None
        self.validate()

    def validate(self) -> None:
        """Validate comment business rules. Raises ValidationException if invalid."""
        if not self.media_id:
            raise ValidationException("Media ID is required", field="media_id")
        if not self.author_id:
            raise ValidationException("Comment author is required", field="author_id")
        if self.text is None and not self.has_image:
            raise ValidationException(
                "Comment cannot be empty; provide text or an image", field="message"
            )
