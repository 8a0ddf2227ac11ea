"""Trade enquiry & EnquiryItem models."""

import enum
import uuid

from sqlalchemy import Enum, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tradecounter.db.base import Base
from tradecounter.models.mixins import IntegerPrimaryKeyMixin, TimestampMixin, UUIDPrimaryKeyMixin


class EnquiryStatus(str, enum.Enum):
    RECEIVED = "received"
    NOTIFIED = "notified"
    NOTIFY_FAILED = "notify_failed"


class Enquiry(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "enquiries"

    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_company: Mapped[str | None] = mapped_column(String(255))
    customer_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    customer_phone: Mapped[str | None] = mapped_column(String(50))
    message: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str] = mapped_column(
        Enum(EnquiryStatus), default=EnquiryStatus.RECEIVED, nullable=False
    )

    items = relationship(
        "EnquiryItem", back_populates="enquiry", cascade="all, delete-orphan", lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Enquiry {self.id} from={self.customer_email}>"


class EnquiryItem(IntegerPrimaryKeyMixin, Base):
    __tablename__ = "enquiry_items"

    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    enquiry_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("enquiries.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[int] = mapped_column(Integer, ForeignKey("products.id"), nullable=False)
    variant_id: Mapped[int] = mapped_column(Integer, ForeignKey("product_variants.id"), nullable=False)

    enquiry = relationship("Enquiry", back_populates="items")

    def __repr__(self) -> str:
        return f"<EnquiryItem product={self.product_id} variant={self.variant_id} qty={self.quantity}>"
