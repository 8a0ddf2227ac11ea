"""Product catalogue endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tradecounter.db.base import get_db
from tradecounter.models.category import Category
from tradecounter.models.product import Product
from tradecounter.schemas.catalogue import ProductDetailResponse, ProductResponse

router = APIRouter(prefix="/products", tags=["products"])


def _escape_like(s: str) -> str:
    """Escape SQL LIKE wildcards in user input."""
    return s.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@router.get("", response_model=list[ProductResponse])
async def list_products(
    category_id: int | None = None,
    category_slug: str | None = None,
    brand_id: int | None = None,
    search: str | None = None,
    active_only: bool = True,
    limit: int | None = Query(None, ge=1, le=5000),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    """Products with attributes and variants, name ascending.

    Without ``limit`` the whole (filtered) collection is returned; the
    catalogue session filters and paginates client side.
    """
    query = select(Product)

    if active_only:
        query = query.where(Product.is_active == True)  # noqa: E712
    if category_id is not None:
        query = query.where(Product.category_id == category_id)
    if category_slug:
        query = query.join(Category, Product.category_id == Category.id).where(
            Category.slug == category_slug
        )
    if brand_id is not None:
        query = query.where(Product.brand_id == brand_id)
    if search:
        like = f"%{_escape_like(search.strip())}%"
        query = query.where(
            Product.name.ilike(like)
            | Product.sku.ilike(like)
            | Product.description.ilike(like)
        )

    query = query.order_by(Product.name, Product.id).offset(offset)
    if limit is not None:
        query = query.limit(limit)

    result = await db.execute(query)
    return [ProductResponse.model_validate(p) for p in result.scalars().all()]


@router.get("/{product_id}", response_model=ProductDetailResponse)
async def get_product(product_id: int, db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Product).where(Product.id == product_id))
    product = result.scalar_one_or_none()

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    return ProductDetailResponse.model_validate(product)
