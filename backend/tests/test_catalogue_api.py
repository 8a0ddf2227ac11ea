"""Unit tests for the catalogue read endpoints."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException

from tradecounter.models.brand import Brand
from tradecounter.models.category import Category
from tradecounter.models.product import Product, ProductAttributes, ProductVariant


def _db_returning(rows=None, one=None):
    mock_result = MagicMock()
    mock_result.scalars.return_value.all.return_value = rows or []
    mock_result.scalar_one_or_none.return_value = one
    mock_db = AsyncMock()
    mock_db.execute.return_value = mock_result
    return mock_db


def _fixing():
    product = Product(
        id=1,
        name="Coach Screw 10x100",
        sku="CS-10100",
        description="",
        is_active=True,
        category_id=1,
        brand_id=11,
    )
    product.category = Category(id=1, name="Fixings", slug="fixings")
    product.brand = Brand(id=11, name="Spit")
    product.attributes = ProductAttributes(
        product_id=1, length_mm=Decimal("100.00"), diameter_mm=Decimal("10.00"),
        head_type="Hex", material="Steel", finish="",
    )
    product.variants = [
        ProductVariant(id=1, label="Each", product_id=1),
        ProductVariant(id=2, label="Box of 50", sku="CS-10100-50", product_id=1),
    ]
    return product


@pytest.mark.asyncio
async def test_list_categories():
    from tradecounter.api.categories import list_categories

    mock_db = _db_returning([
        Category(id=1, name="Fixings", slug="fixings"),
        Category(id=2, name="Power Tools", slug="power-tools"),
    ])
    result = await list_categories(mock_db)

    assert [c.slug for c in result] == ["fixings", "power-tools"]
    mock_db.execute.assert_called_once()


@pytest.mark.asyncio
async def test_get_category_not_found():
    from tradecounter.api.categories import get_category

    with pytest.raises(HTTPException) as exc_info:
        await get_category("timber", _db_returning())

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_list_brands():
    from tradecounter.api.brands import list_brands

    result = await list_brands(_db_returning([Brand(id=10, name="Paslode")]))
    assert result[0].name == "Paslode"


@pytest.mark.asyncio
async def test_list_products_normalizes_attribute_values():
    from tradecounter.api.products import list_products

    mock_db = _db_returning([_fixing()])
    result = await list_products(
        category_id=1, category_slug=None, brand_id=None, search=None,
        active_only=True, limit=None, offset=0, db=mock_db,
    )

    product = result[0]
    assert product.description is None
    assert product.attributes.length_mm == 100.0
    assert product.attributes.finish is None
    assert [v.label for v in product.variants] == ["Each", "Box of 50"]


@pytest.mark.asyncio
async def test_list_products_builds_filtered_query():
    from tradecounter.api.products import list_products

    mock_db = _db_returning([])
    await list_products(
        category_id=None, category_slug="fixings", brand_id=11, search="50%_off",
        active_only=True, limit=24, offset=48, db=mock_db,
    )

    sql = str(mock_db.execute.call_args.args[0])
    assert "JOIN categories" in sql
    assert "products.is_active" in sql
    assert "products.brand_id" in sql
    assert "LIMIT" in sql and "OFFSET" in sql


def test_escape_like():
    from tradecounter.api.products import _escape_like

    assert _escape_like("50%_off\\") == "50\\%\\_off\\\\"


@pytest.mark.asyncio
async def test_get_product_detail():
    from tradecounter.api.products import get_product

    result = await get_product(1, _db_returning(one=_fixing()))
    assert result.category.slug == "fixings"
    assert result.brand.name == "Spit"


@pytest.mark.asyncio
async def test_get_product_not_found():
    from tradecounter.api.products import get_product

    with pytest.raises(HTTPException) as exc_info:
        await get_product(999, _db_returning())

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Product not found"


@pytest.mark.asyncio
async def test_site_content_lists_core_ranges():
    from tradecounter.api.site import get_site_content

    content = await get_site_content()
    assert [r.selector for r in content.core_ranges] == [
        "Fixings", "Sealants & Adhesives", "Power Tools", "Fire Rated Products",
    ]


@pytest.mark.asyncio
async def test_app_serves_health_and_site_routes():
    import httpx

    from tradecounter.main import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        health = await client.get("/health")
        site = await client.get("/api/v1/site")

    assert health.json()["status"] == "ok"
    assert site.status_code == 200
    assert len(site.json()["core_ranges"]) == 4
