"""Initial database schema - categories, brands, products, attributes, variants, services, enquiries

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # --- Categories ---
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("slug", sa.String(255), nullable=False, unique=True),
        *_timestamps(),
    )
    op.create_index("ix_categories_name", "categories", ["name"])
    op.create_index("ix_categories_slug", "categories", ["slug"])

    # --- Brands ---
    op.create_table(
        "brands",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        *_timestamps(),
    )
    op.create_index("ix_brands_name", "brands", ["name"])

    # --- Products ---
    op.create_table(
        "products",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("sku", sa.String(100), unique=True),
        sa.Column("description", sa.Text),
        sa.Column("image_url", sa.String(500)),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.text("true")),
        sa.Column("category_id", sa.Integer, sa.ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("brand_id", sa.Integer, sa.ForeignKey("brands.id", ondelete="SET NULL")),
        *_timestamps(),
    )
    op.create_index("ix_products_name", "products", ["name"])
    op.create_index("ix_products_brand_id", "products", ["brand_id"])
    op.create_index("ix_products_category_active", "products", ["category_id", "is_active"])

    # --- Product attributes (facets) ---
    op.create_table(
        "product_attributes",
        sa.Column("product_id", sa.Integer, sa.ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("length_mm", sa.Numeric(10, 2)),
        sa.Column("diameter_mm", sa.Numeric(10, 2)),
        sa.Column("pack_size", sa.Integer),
        sa.Column("head_type", sa.String(100)),
        sa.Column("drive_type", sa.String(100)),
        sa.Column("material", sa.String(100)),
        sa.Column("finish", sa.String(100)),
    )

    # --- Product variants ---
    op.create_table(
        "product_variants",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("label", sa.String(255), nullable=False),
        sa.Column("sku", sa.String(100)),
        sa.Column("product_id", sa.Integer, sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
    )
    op.create_index("ix_product_variants_product_id", "product_variants", ["product_id"])

    # --- Specialist services ---
    op.create_table(
        "specialist_services",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("image_url", sa.String(500)),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.text("true")),
        *_timestamps(),
    )

    # --- Enquiries ---
    enquiry_status = postgresql.ENUM(
        "RECEIVED", "NOTIFIED", "NOTIFY_FAILED", name="enquirystatus", create_type=True
    )
    op.create_table(
        "enquiries",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("customer_name", sa.String(255), nullable=False),
        sa.Column("customer_company", sa.String(255)),
        sa.Column("customer_email", sa.String(255), nullable=False),
        sa.Column("customer_phone", sa.String(50)),
        sa.Column("message", sa.Text),
        sa.Column("status", enquiry_status, nullable=False, server_default="RECEIVED"),
        *_timestamps(),
    )
    op.create_index("ix_enquiries_customer_email", "enquiries", ["customer_email"])

    op.create_table(
        "enquiry_items",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("enquiry_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("enquiries.id", ondelete="CASCADE"), nullable=False),
        sa.Column("product_id", sa.Integer, sa.ForeignKey("products.id"), nullable=False),
        sa.Column("variant_id", sa.Integer, sa.ForeignKey("product_variants.id"), nullable=False),
        sa.CheckConstraint("quantity > 0", name="ck_enquiry_items_quantity_positive"),
    )
    op.create_index("ix_enquiry_items_enquiry_id", "enquiry_items", ["enquiry_id"])


def downgrade() -> None:
    op.drop_table("enquiry_items")
    op.drop_table("enquiries")
    postgresql.ENUM(name="enquirystatus").drop(op.get_bind(), checkfirst=True)
    op.drop_table("specialist_services")
    op.drop_table("product_variants")
    op.drop_table("product_attributes")
    op.drop_table("products")
    op.drop_table("brands")
    op.drop_table("categories")
