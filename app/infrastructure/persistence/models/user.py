"""User ORM model: the identity directory (doctors and other staff)."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import EntityModel


class User(EntityModel, Base):
    """User model. Table: app_user. Display fields are joined into media/comment/message reads."""

    __tablename__ = "app_user"

    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    specialty: Mapped[str | None] = mapped_column(String, nullable=True)
    hospital: Mapped[str | None] = mapped_column(String, nullable=True)
    role: Mapped[str] = mapped_column(String, nullable=False, default="doctor")
