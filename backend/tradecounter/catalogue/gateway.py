"""Catalogue data gateway: read queries against the catalogue API.

Every failure below this boundary (transport, HTTP status, malformed body,
rows that do not validate) surfaces as CatalogueLoadError.
"""

import logging
from typing import Any, Protocol, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from tradecounter.catalogue.errors import CatalogueLoadError
from tradecounter.core.config import settings
from tradecounter.schemas.catalogue import (
    BrandResponse,
    CategoryResponse,
    ProductResponse,
    SpecialistServiceResponse,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class ProductQuery(BaseModel):
    category_id: int | None = None
    brand_id: int | None = None
    active_only: bool = True


class CatalogueReader(Protocol):
    async def list_categories(self) -> list[CategoryResponse]: ...

    async def list_brands(self) -> list[BrandResponse]: ...

    async def list_products(self, query: ProductQuery) -> list[ProductResponse]: ...

    async def list_services(self) -> list[SpecialistServiceResponse]: ...


class CatalogueGateway:
    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    @classmethod
    def from_settings(cls) -> "CatalogueGateway":
        client = httpx.AsyncClient(
            base_url=settings.CATALOGUE_API_URL,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )
        return cls(client)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _fetch_rows(self, resource: str, path: str, params: dict[str, Any] | None = None) -> list[Any]:
        try:
            resp = await self._client.get(path, params=params)
            resp.raise_for_status()
            rows = resp.json()
        except httpx.HTTPStatusError as exc:
            logger.error("Catalogue API error loading %s: %s", resource, exc)
            raise CatalogueLoadError(resource, f"HTTP {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            logger.error("Cannot reach catalogue API loading %s: %s", resource, exc)
            raise CatalogueLoadError(resource, "catalogue API unreachable") from exc
        except ValueError as exc:
            logger.error("Malformed %s response: %s", resource, exc)
            raise CatalogueLoadError(resource, "malformed response") from exc

        if not isinstance(rows, list):
            raise CatalogueLoadError(resource, "expected a list of rows")
        return rows

    async def _load(
        self,
        resource: str,
        path: str,
        model: type[RecordT],
        params: dict[str, Any] | None = None,
    ) -> list[RecordT]:
        rows = await self._fetch_rows(resource, path, params)
        try:
            return [model.model_validate(row) for row in rows]
        except ValidationError as exc:
            logger.error("Invalid %s row: %s", resource, exc)
            raise CatalogueLoadError(resource, "invalid row in response") from exc

    async def list_categories(self) -> list[CategoryResponse]:
        return await self._load("categories", "/categories", CategoryResponse)

    async def list_brands(self) -> list[BrandResponse]:
        return await self._load("brands", "/brands", BrandResponse)

    async def list_services(self) -> list[SpecialistServiceResponse]:
        return await self._load("specialist services", "/services", SpecialistServiceResponse)

    async def list_products(self, query: ProductQuery) -> list[ProductResponse]:
        params: dict[str, Any] = {"active_only": str(query.active_only).lower()}
        if query.category_id is not None:
            params["category_id"] = query.category_id
        if query.brand_id is not None:
            params["brand_id"] = query.brand_id

        products = await self._load("products", "/products", ProductResponse, params)
        if query.active_only:
            products = [p for p in products if p.is_active]
        return products
