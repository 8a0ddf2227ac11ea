"""Per-visitor catalogue session.

Owns the filter state, current page, enquiry cart and preset tracking for one
visitor. Lookups (categories, brands, services) are read-only snapshots shared
with whatever renders them.

Product loads are category scoped and tagged with a generation number. Any
category change bumps the generation, so a load that finishes after the
visitor has moved on is dropped instead of replacing newer results.
"""

import enum
import logging
from collections.abc import Callable

from tradecounter.catalogue.cart import EnquiryCart
from tradecounter.catalogue.errors import CatalogueLoadError, UnknownSelectionError
from tradecounter.catalogue.filters import (
    ALL,
    FacetField,
    FacetValue,
    FilterState,
    apply_filters,
    derive_facet_options,
    facet_fields_for,
)
from tradecounter.catalogue.gateway import CatalogueReader, ProductQuery
from tradecounter.catalogue.pagination import Page, clamp_page, page_window, paginate, total_pages
from tradecounter.catalogue.preset import PresetResolver, PresetSignal, PresetStore, Resolution, match_category
from tradecounter.catalogue.submission import EnquiryCheckout, EnquirySubmitter
from tradecounter.core.config import settings
from tradecounter.schemas.catalogue import (
    BrandResponse,
    CategoryResponse,
    ProductResponse,
    SpecialistServiceResponse,
)

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "The catalogue is temporarily unavailable. Please try again."
SERVICES_UNAVAILABLE_MESSAGE = "Unable to load services at this time."


class LoadStatus(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


def _selection(value: int | str | None, kind: str) -> int | None:
    """Map a selector ("all", None, "3", 3) to an id, or None for all."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise UnknownSelectionError(kind, value)
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.lower() in ("", ALL):
        return None
    try:
        return int(text)
    except ValueError:
        raise UnknownSelectionError(kind, value) from None


class CatalogueSession:
    def __init__(
        self,
        gateway: CatalogueReader,
        preset_store: PresetStore,
        submitter: EnquirySubmitter | None = None,
        page_size: int = settings.PAGE_SIZE,
        on_preset_consumed: Callable[[PresetSignal], None] | None = None,
    ):
        self.gateway = gateway
        self.page_size = page_size

        self.categories: tuple[CategoryResponse, ...] = ()
        self.brands: tuple[BrandResponse, ...] = ()
        self.services: tuple[SpecialistServiceResponse, ...] = ()
        self.products: tuple[ProductResponse, ...] = ()

        self.lookup_status = LoadStatus.IDLE
        self.product_status = LoadStatus.IDLE
        self.services_status = LoadStatus.IDLE
        self.error: str | None = None
        self.services_error: str | None = None

        self.filters = FilterState()
        self.page = 1

        self._generation = 0
        self._products_generation: int | None = None

        self.resolver = PresetResolver(preset_store, on_consumed=on_preset_consumed)
        self.cart = EnquiryCart()
        self.checkout = EnquiryCheckout(self.cart, submitter) if submitter is not None else None

    # ── Loading ──────────────────────────────────────

    @property
    def catalogue_unavailable(self) -> bool:
        return LoadStatus.ERROR in (self.lookup_status, self.product_status)

    async def load_lookups(self) -> bool:
        """Load categories and brands, then apply any pending or persisted preset."""
        self.lookup_status = LoadStatus.LOADING
        self.error = None
        try:
            categories = await self.gateway.list_categories()
            brands = await self.gateway.list_brands()
        except CatalogueLoadError as exc:
            logger.error(f"Catalogue lookups unavailable: {exc}")
            self.lookup_status = LoadStatus.ERROR
            self.error = UNAVAILABLE_MESSAGE
            return False

        self.categories = tuple(categories)
        self.brands = tuple(brands)
        self.lookup_status = LoadStatus.READY
        logger.info(f"Loaded {len(self.categories)} categories, {len(self.brands)} brands")

        self.resolver.restore()
        self.apply_preset()
        return True

    async def load_services(self) -> bool:
        self.services_status = LoadStatus.LOADING
        self.services_error = None
        try:
            services = await self.gateway.list_services()
        except CatalogueLoadError as exc:
            logger.error(f"Specialist services unavailable: {exc}")
            self.services_status = LoadStatus.ERROR
            self.services_error = SERVICES_UNAVAILABLE_MESSAGE
            return False
        self.services = tuple(services)
        self.services_status = LoadStatus.READY
        return True

    async def load_products(self) -> bool:
        """Load active products for the selected category (all categories when none).

        Returns False when the load failed or was superseded by a newer one.
        """
        self._generation += 1
        generation = self._generation
        query = ProductQuery(category_id=self.filters.category_id, active_only=True)
        self.product_status = LoadStatus.LOADING
        self.error = None

        try:
            products = await self.gateway.list_products(query)
        except CatalogueLoadError as exc:
            if generation != self._generation:
                return False
            logger.error(f"Product load failed: {exc}")
            self.products = ()
            self._products_generation = None
            self.product_status = LoadStatus.ERROR
            self.error = UNAVAILABLE_MESSAGE
            return False

        if generation != self._generation:
            logger.debug(f"Discarding stale product load (generation {generation}, now {self._generation})")
            return False

        self.products = tuple(products)
        self._products_generation = generation
        self.product_status = LoadStatus.READY
        return True

    # ── Presets ──────────────────────────────────────

    def request_category(self, selector: str) -> Resolution | None:
        """A "core range" click: remember the selector and try to apply it right away."""
        self.resolver.persist(selector)
        self.resolver.offer(selector)
        return self.apply_preset()

    def apply_preset(self) -> Resolution | None:
        resolution = self.resolver.apply(self.categories, self.filters.category_id)
        if resolution is not None and resolution.category is not None:
            self.select_category(resolution.category.id)
        return resolution

    # ── Filter mutations ─────────────────────────────

    @property
    def selected_category(self) -> CategoryResponse | None:
        for category in self.categories:
            if category.id == self.filters.category_id:
                return category
        return None

    @property
    def facet_fields(self) -> tuple[FacetField, ...]:
        return facet_fields_for(self.selected_category)

    @property
    def show_facet_panel(self) -> bool:
        return bool(self.facet_fields)

    def _category_selection(self, value: int | str | None) -> int | None:
        try:
            return _selection(value, "category")
        except UnknownSelectionError:
            # A category name or slug rather than an id
            match = match_category(value, self.categories) if isinstance(value, str) else None
            if match is None:
                raise
            return match.id

    def select_category(self, category_id: int | str | None) -> None:
        """Select by id, name, slug or "all". Raises UnknownSelectionError otherwise.

        A change invalidates the rows on hand until ``load_products`` runs.
        """
        new_id = self._category_selection(category_id)
        if new_id != self.filters.category_id:
            self.filters.category_id = new_id
            # Any in-flight load is now for the wrong category
            self._generation += 1
            self._products_generation = None
            if self.product_status is LoadStatus.READY:
                self.product_status = LoadStatus.IDLE
            self.filters.reset_facets(self.facet_fields)
        self.page = 1

    def select_brand(self, brand_id: int | str | None) -> None:
        self.filters.brand_id = _selection(brand_id, "brand")
        self.page = 1

    def set_query(self, query: str) -> None:
        self.filters.query = query
        self.page = 1

    def set_facet(self, name: str, value: FacetValue) -> None:
        if name not in {field.name for field in self.facet_fields}:
            raise ValueError(f"Category has no facet named {name!r}")
        self.filters.facets[name] = value
        self.page = 1

    def set_page(self, page: int) -> None:
        self.page = clamp_page(page, total_pages(len(self.filtered_products), self.page_size))

    # ── Derived views ────────────────────────────────

    @property
    def products_current(self) -> bool:
        """True when the rows on hand were loaded for the selected category."""
        return self._products_generation is not None and self._products_generation == self._generation

    @property
    def filtered_products(self) -> list[ProductResponse]:
        if not self.products_current:
            return []
        return apply_filters(self.products, self.filters, self.facet_fields)

    @property
    def facet_options(self) -> dict[str, list[FacetValue]]:
        """Options for the facet panel, only from rows loaded for the selected category."""
        if not self.products_current:
            return {}
        return derive_facet_options(self.products, self.facet_fields)

    @property
    def current_page(self) -> Page:
        page = paginate(self.filtered_products, self.page, self.page_size)
        self.page = page.page
        return page

    @property
    def page_window(self) -> list[int | None]:
        page = self.current_page
        return page_window(page.page, page.total_pages)

    # ── Convenience flows ────────────────────────────

    async def start(self) -> bool:
        """Lookups, preset, then the first product page."""
        if not await self.load_lookups():
            return False
        return await self.load_products()

    async def choose_category(self, category_id: int | str | None) -> bool:
        self.select_category(category_id)
        return await self.load_products()

    async def choose_preset(self, selector: str) -> Resolution | None:
        """A core range click: resolve the selector, then load the resolved category's products.

        Before lookups have loaded the selector stays pending and ``start`` applies it.
        """
        resolution = self.request_category(selector)
        if self.lookup_status is LoadStatus.READY and not self.products_current:
            await self.load_products()
        return resolution
