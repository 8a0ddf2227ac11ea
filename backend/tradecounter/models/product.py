"""Product, per-product facet attributes and orderable variants."""

from decimal import Decimal

from sqlalchemy import Boolean, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tradecounter.db.base import Base
from tradecounter.models.mixins import IntegerPrimaryKeyMixin, TimestampMixin


class Product(IntegerPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "products"
    __table_args__ = (
        Index("ix_products_category_active", "category_id", "is_active"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    sku: Mapped[str | None] = mapped_column(String(100), unique=True)
    description: Mapped[str | None] = mapped_column(Text)
    image_url: Mapped[str | None] = mapped_column(String(500))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False
    )
    brand_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("brands.id", ondelete="SET NULL"), index=True
    )

    category = relationship("Category", back_populates="products", lazy="selectin")
    brand = relationship("Brand", back_populates="products", lazy="selectin")
    attributes = relationship(
        "ProductAttributes", back_populates="product", uselist=False, lazy="selectin",
        cascade="all, delete-orphan",
    )
    variants = relationship(
        "ProductVariant", back_populates="product", lazy="selectin",
        order_by="ProductVariant.id", cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Product {self.id}: {self.name}>"


class ProductAttributes(Base):
    """Category-specific facet values; only products in faceted categories have a row."""

    __tablename__ = "product_attributes"

    product_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True
    )
    length_mm: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    diameter_mm: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    pack_size: Mapped[int | None] = mapped_column(Integer)
    head_type: Mapped[str | None] = mapped_column(String(100))
    drive_type: Mapped[str | None] = mapped_column(String(100))
    material: Mapped[str | None] = mapped_column(String(100))
    finish: Mapped[str | None] = mapped_column(String(100))

    product = relationship("Product", back_populates="attributes")

    def __repr__(self) -> str:
        return f"<ProductAttributes product={self.product_id}>"


class ProductVariant(IntegerPrimaryKeyMixin, Base):
    __tablename__ = "product_variants"

    label: Mapped[str] = mapped_column(String(255), nullable=False)
    sku: Mapped[str | None] = mapped_column(String(100))

    product_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )

    product = relationship("Product", back_populates="variants")

    def __repr__(self) -> str:
        return f"<ProductVariant {self.id}: {self.label}>"
