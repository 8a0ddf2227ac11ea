"""Brand model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tradecounter.db.base import Base
from tradecounter.models.mixins import IntegerPrimaryKeyMixin, TimestampMixin


class Brand(IntegerPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "brands"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)

    products = relationship("Product", back_populates="brand", lazy="noload")

    def __repr__(self) -> str:
        return f"<Brand {self.name}>"
