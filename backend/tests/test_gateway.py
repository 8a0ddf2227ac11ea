"""Catalogue gateway against a mocked HTTP transport."""

import httpx
import pytest

from tradecounter.catalogue.errors import CatalogueLoadError
from tradecounter.catalogue.gateway import CatalogueGateway, ProductQuery

BASE_URL = "http://catalogue.test/api/v1"

PRODUCT_ROWS = [
    {
        "id": 1, "category_id": 1, "brand_id": 11, "name": "Coach Screw 10x100",
        "sku": "CS-10100", "description": "", "image_url": None, "is_active": True,
        "attributes": {"length_mm": "100.00", "diameter_mm": 10, "material": "Steel", "finish": ""},
        "variants": [{"id": 1, "label": "Each", "sku": None}],
    },
    {
        "id": 2, "category_id": 1, "brand_id": None, "name": "Retired Screw",
        "is_active": False, "attributes": None, "variants": [],
    },
]


def _gateway(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
    return CatalogueGateway(client)


@pytest.mark.asyncio
async def test_list_products_sends_scope_and_normalizes_rows():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=PRODUCT_ROWS)

    gateway = _gateway(handler)
    products = await gateway.list_products(ProductQuery(category_id=1))
    await gateway.aclose()

    assert seen[0].url.path == "/api/v1/products"
    assert dict(seen[0].url.params) == {"active_only": "true", "category_id": "1"}

    # Inactive rows are dropped even if the server sends them
    assert [p.id for p in products] == [1]
    product = products[0]
    assert product.description is None
    assert product.attributes.length_mm == 100.0
    assert product.attributes.finish is None
    assert product.variants[0].label == "Each"


@pytest.mark.asyncio
async def test_list_products_without_active_filter_keeps_inactive():
    def handler(request):
        assert request.url.params["active_only"] == "false"
        assert "category_id" not in request.url.params
        return httpx.Response(200, json=PRODUCT_ROWS)

    products = await _gateway(handler).list_products(ProductQuery(active_only=False))
    assert [p.id for p in products] == [1, 2]


@pytest.mark.asyncio
async def test_list_categories_and_brands():
    rows = {
        "/api/v1/categories": [{"id": 1, "name": "Fixings", "slug": "fixings"}],
        "/api/v1/brands": [{"id": 10, "name": "Paslode"}],
        "/api/v1/services": [{"id": 4, "name": "Key Cutting", "description": " "}],
    }

    def handler(request):
        return httpx.Response(200, json=rows[request.url.path])

    gateway = _gateway(handler)
    assert [c.slug for c in await gateway.list_categories()] == ["fixings"]
    assert [b.name for b in await gateway.list_brands()] == ["Paslode"]
    services = await gateway.list_services()
    assert services[0].description is None


@pytest.mark.asyncio
@pytest.mark.parametrize("response, reason", [
    (httpx.Response(503, json={"detail": "down"}), "HTTP 503"),
    (httpx.Response(200, content=b"<html>"), "malformed response"),
    (httpx.Response(200, json={"rows": []}), "expected a list of rows"),
    (httpx.Response(200, json=[{"id": "x"}]), "invalid row in response"),
])
async def test_failures_become_load_errors(response, reason):
    gateway = _gateway(lambda request: response)
    with pytest.raises(CatalogueLoadError) as exc_info:
        await gateway.list_categories()
    assert exc_info.value.resource == "categories"
    assert exc_info.value.reason == reason


@pytest.mark.asyncio
async def test_unreachable_api_becomes_load_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(CatalogueLoadError) as exc_info:
        await _gateway(handler).list_brands()
    assert exc_info.value.reason == "catalogue API unreachable"
