"""Specialist services shown on the marketing site (repairs, training, ...)."""

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tradecounter.db.base import Base
from tradecounter.models.mixins import IntegerPrimaryKeyMixin, TimestampMixin


class SpecialistService(IntegerPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "specialist_services"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    image_url: Mapped[str | None] = mapped_column(String(500))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<SpecialistService {self.name}>"
