"""Category model - slug is the canonical join key for products and facets."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tradecounter.db.base import Base
from tradecounter.models.mixins import IntegerPrimaryKeyMixin, TimestampMixin


class Category(IntegerPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)

    products = relationship("Product", back_populates="category", lazy="noload")

    def __repr__(self) -> str:
        return f"<Category {self.slug}>"
