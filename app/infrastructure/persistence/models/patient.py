"""Patient ORM model. The subject that media records are captured for."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import EntityModel


class Patient(EntityModel, Base):
    """Patient entity. Table: patient. Owned by exactly one doctor (doctor_id)."""

    __tablename__ = "patient"

    name: Mapped[str] = mapped_column(String, nullable=False)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String, nullable=True)
    doctor_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id"), nullable=False, index=True
    )
