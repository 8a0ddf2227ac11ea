"""Shared fixtures: catalogue rows and an in-memory catalogue reader."""

import asyncio

import pytest

from tradecounter.catalogue.errors import CatalogueLoadError
from tradecounter.catalogue.gateway import ProductQuery
from tradecounter.schemas.catalogue import (
    AttributeSetResponse,
    BrandResponse,
    CategoryResponse,
    ProductResponse,
    VariantResponse,
)

FIXINGS = CategoryResponse(id=1, name="Fixings", slug="fixings")
POWER_TOOLS = CategoryResponse(id=2, name="Power Tools", slug="power-tools")
SEALANTS = CategoryResponse(id=3, name="Sealants & Adhesives", slug="sealants-adhesives")


def make_product(
    product_id: int,
    name: str,
    category_id: int = 1,
    brand_id: int | None = None,
    sku: str | None = None,
    description: str | None = None,
    attributes: dict | None = None,
    is_active: bool = True,
) -> ProductResponse:
    return ProductResponse(
        id=product_id,
        category_id=category_id,
        brand_id=brand_id,
        name=name,
        sku=sku,
        description=description,
        is_active=is_active,
        attributes=AttributeSetResponse(**attributes) if attributes is not None else None,
        variants=(VariantResponse(id=1, label="Each"),),
    )


@pytest.fixture
def categories():
    return [FIXINGS, POWER_TOOLS, SEALANTS]


@pytest.fixture
def brands():
    return [BrandResponse(id=10, name="Paslode"), BrandResponse(id=11, name="Spit")]


@pytest.fixture
def products():
    """Name ascending, as the gateway returns them."""
    return [
        make_product(1, "Coach Screw 10x100", brand_id=11, sku="CS-10100",
                     attributes={"length_mm": 100, "diameter_mm": 10, "head_type": "Hex",
                                 "material": "Steel", "finish": "Zinc"}),
        make_product(2, "Concrete Screw 7.5x70", brand_id=11, sku="CON-7570",
                     attributes={"length_mm": "70", "diameter_mm": 7.5, "head_type": "Countersunk",
                                 "material": "steel", "finish": "Zinc"}),
        make_product(3, "Frame Fixing 10x120", brand_id=10, description="Nylon plug with screw",
                     attributes={"length_mm": 120, "diameter_mm": "10.0", "head_type": "Countersunk",
                                 "material": "Nylon", "finish": None}),
        make_product(4, "Hammer Drill 18V", category_id=2, brand_id=10, sku="HD-18"),
        make_product(5, "Loose Wood Screw", sku="LWS-1"),
        make_product(6, "Silicone Sealant Clear", category_id=3, sku="SIL-C"),
    ]


class FakeCatalogue:
    """In-memory CatalogueReader; ``hold()`` makes the next product load wait for ``release()``."""

    def __init__(self, categories, brands, products, services=()):
        self.categories = list(categories)
        self.brands = list(brands)
        self.products = list(products)
        self.services = list(services)
        self.fail: set[str] = set()
        self.product_queries: list[ProductQuery] = []
        self._gates: list[asyncio.Event] = []

    def hold(self) -> asyncio.Event:
        gate = asyncio.Event()
        self._gates.append(gate)
        return gate

    def _check(self, resource: str) -> None:
        if resource in self.fail:
            raise CatalogueLoadError(resource, "store offline")

    async def list_categories(self):
        self._check("categories")
        return list(self.categories)

    async def list_brands(self):
        self._check("brands")
        return list(self.brands)

    async def list_services(self):
        self._check("services")
        return list(self.services)

    async def list_products(self, query: ProductQuery):
        self.product_queries.append(query)
        gate = self._gates.pop(0) if self._gates else None
        if gate is not None:
            await gate.wait()
        self._check("products")
        return [
            p for p in self.products
            if (query.category_id is None or p.category_id == query.category_id)
            and (not query.active_only or p.is_active)
        ]


@pytest.fixture
def catalogue(categories, brands, products):
    return FakeCatalogue(categories, brands, products)
