"""Catalogue read schemas.

These are the read-only snapshots served by the API and consumed by the client
side catalogue session. They are frozen: nothing downstream mutates a row.
"""

from pydantic import BaseModel, ConfigDict, Field

from tradecounter.schemas.common import NumericFacetValue, OptionalText


class CatalogueRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)


class CategoryResponse(CatalogueRecord):
    id: int
    name: str
    slug: str


class BrandResponse(CatalogueRecord):
    id: int
    name: str


class VariantResponse(CatalogueRecord):
    id: int
    label: str
    sku: OptionalText = None


class AttributeSetResponse(CatalogueRecord):
    length_mm: NumericFacetValue = None
    diameter_mm: NumericFacetValue = None
    pack_size: NumericFacetValue = None
    head_type: OptionalText = None
    drive_type: OptionalText = None
    material: OptionalText = None
    finish: OptionalText = None


class ProductResponse(CatalogueRecord):
    id: int
    category_id: int
    brand_id: int | None = None
    name: str
    sku: OptionalText = None
    description: OptionalText = None
    image_url: OptionalText = None
    is_active: bool = True
    attributes: AttributeSetResponse | None = None
    variants: tuple[VariantResponse, ...] = Field(default_factory=tuple)


class ProductDetailResponse(ProductResponse):
    category: CategoryResponse
    brand: BrandResponse | None = None


class SpecialistServiceResponse(CatalogueRecord):
    id: int
    name: str
    description: OptionalText = None
    image_url: OptionalText = None
