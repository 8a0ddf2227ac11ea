"""Filter pipeline: category -> brand -> free text -> category facets.

The pipeline is a pure function of the loaded products and a FilterState. It
never re-sorts: output keeps the load order of the input collection.
"""

import enum
import math
from collections.abc import Iterable, Sequence
from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict, Field

from tradecounter.schemas.catalogue import AttributeSetResponse, CategoryResponse, ProductResponse

ALL = "all"
ANY = "any"

FacetValue = str | float


class FacetKind(str, enum.Enum):
    NUMERIC = "numeric"
    TEXT = "text"


class FacetField(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    kind: FacetKind


FIXINGS_FACETS: tuple[FacetField, ...] = (
    FacetField(name="length_mm", label="Length (mm)", kind=FacetKind.NUMERIC),
    FacetField(name="diameter_mm", label="Diameter (mm)", kind=FacetKind.NUMERIC),
    FacetField(name="pack_size", label="Pack size", kind=FacetKind.NUMERIC),
    FacetField(name="head_type", label="Head type", kind=FacetKind.TEXT),
    FacetField(name="drive_type", label="Drive type", kind=FacetKind.TEXT),
    FacetField(name="material", label="Material", kind=FacetKind.TEXT),
    FacetField(name="finish", label="Finish", kind=FacetKind.TEXT),
)

# Keyed by category slug. Categories not listed here have no facet panel.
FACETS_BY_CATEGORY: dict[str, tuple[FacetField, ...]] = {
    "fixings": FIXINGS_FACETS,
}


def facet_fields_for(category: CategoryResponse | None) -> tuple[FacetField, ...]:
    if category is None:
        return ()
    return FACETS_BY_CATEGORY.get(category.slug, ())


def is_any(value: object) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and value.strip().lower() in ("", ANY)


def as_number(value: object) -> float | None:
    """Parse a facet value as a finite number; None when it is not one."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(Decimal(str(value).strip()))
    except (InvalidOperation, ValueError):
        return None
    return number if math.isfinite(number) else None


def format_facet_value(value: FacetValue) -> str:
    """Display label for an option: 10.0 -> "10", 2.5 -> "2.5"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class FilterState(BaseModel):
    """User adjustable filters. ``None`` for category/brand means "all"."""

    category_id: int | None = None
    brand_id: int | None = None
    query: str = ""
    facets: dict[str, FacetValue] = Field(default_factory=dict)

    def reset_facets(self, fields: Iterable[FacetField] = ()) -> None:
        self.facets = {field.name: ANY for field in fields}

    def active_facets(self) -> dict[str, FacetValue]:
        return {name: value for name, value in self.facets.items() if not is_any(value)}


def _search_text(product: ProductResponse) -> str:
    parts = (product.name, product.sku, product.description)
    return " ".join(part for part in parts if part).lower()


def _facet_matches(attributes: AttributeSetResponse, field: FacetField, wanted: FacetValue) -> bool:
    have = getattr(attributes, field.name, None)
    if have is None:
        return False

    if field.kind is FacetKind.NUMERIC:
        # A text value stored in a numeric column never matches a numeric selection
        if not isinstance(have, float):
            return False
        target = as_number(wanted)
        return target is not None and have == target

    return str(have).strip().casefold() == str(wanted).strip().casefold()


def _matches(
    product: ProductResponse,
    state: FilterState,
    needle: str,
    selected: list[tuple[FacetField, FacetValue]],
) -> bool:
    if state.category_id is not None and product.category_id != state.category_id:
        return False
    if state.brand_id is not None and product.brand_id != state.brand_id:
        return False
    if needle and needle not in _search_text(product):
        return False
    if selected:
        if product.attributes is None:
            return False
        return all(_facet_matches(product.attributes, field, wanted) for field, wanted in selected)
    return True


def apply_filters(
    products: Sequence[ProductResponse],
    state: FilterState,
    facet_fields: Sequence[FacetField] = (),
) -> list[ProductResponse]:
    """Return the products passing every active predicate, in input order.

    Facet selections are only honoured for the fields the active category
    defines, so a selection left over from another category is ignored.
    """
    needle = state.query.strip().lower()
    known = {field.name: field for field in facet_fields}
    selected = [
        (known[name], value)
        for name, value in state.active_facets().items()
        if name in known
    ]
    return [p for p in products if _matches(p, state, needle, selected)]


def derive_facet_options(
    products: Iterable[ProductResponse],
    facet_fields: Sequence[FacetField],
) -> dict[str, list[FacetValue]]:
    """Distinct non-empty values per facet across the given products.

    Numeric options sort numerically; text options are de-duplicated and
    sorted case-insensitively, keeping the first spelling seen.
    """
    if not facet_fields:
        return {}

    numeric: dict[str, set[float]] = {f.name: set() for f in facet_fields if f.kind is FacetKind.NUMERIC}
    text: dict[str, dict[str, str]] = {f.name: {} for f in facet_fields if f.kind is FacetKind.TEXT}

    for product in products:
        attributes = product.attributes
        if attributes is None:
            continue
        for name, seen in numeric.items():
            value = getattr(attributes, name, None)
            if isinstance(value, float):
                seen.add(value)
        for name, seen in text.items():
            value = getattr(attributes, name, None)
            if value:
                seen.setdefault(str(value).casefold(), str(value))

    options: dict[str, list[FacetValue]] = {}
    for field in facet_fields:
        if field.kind is FacetKind.NUMERIC:
            options[field.name] = sorted(numeric[field.name])
        else:
            spelled = text[field.name]
            options[field.name] = [spelled[key] for key in sorted(spelled)]
    return options
