"""Client side catalogue core: presets, filters, pagination and the enquiry cart."""

from tradecounter.catalogue.cart import CartState, EnquiryCart, LineItem
from tradecounter.catalogue.errors import (
    CatalogueError, CatalogueLoadError, ContactValidationError, EmptyCartError,
    InvalidQuantityError, SubmissionError, SubmissionInProgressError, UnknownSelectionError,
)
from tradecounter.catalogue.filters import ALL, ANY, FacetField, FacetKind, FilterState
from tradecounter.catalogue.gateway import CatalogueGateway, ProductQuery
from tradecounter.catalogue.pagination import Page
from tradecounter.catalogue.preset import (
    FilePresetStore, MemoryPresetStore, PresetResolver, PresetSignal, PresetStatus,
)
from tradecounter.catalogue.session import CatalogueSession, LoadStatus
from tradecounter.catalogue.submission import EnquiryCheckout, EnquirySubmitter, SubmissionStatus

__all__ = [
    "CartState", "EnquiryCart", "LineItem",
    "CatalogueError", "CatalogueLoadError", "ContactValidationError", "EmptyCartError",
    "InvalidQuantityError", "SubmissionError", "SubmissionInProgressError", "UnknownSelectionError",
    "ALL", "ANY", "FacetField", "FacetKind", "FilterState",
    "CatalogueGateway", "ProductQuery",
    "Page",
    "FilePresetStore", "MemoryPresetStore", "PresetResolver", "PresetSignal", "PresetStatus",
    "CatalogueSession", "LoadStatus",
    "EnquiryCheckout", "EnquirySubmitter", "SubmissionStatus",
]
