"""SQLAlchemy models for the trade catalogue."""

from tradecounter.models.category import Category
from tradecounter.models.brand import Brand
from tradecounter.models.product import Product, ProductAttributes, ProductVariant
from tradecounter.models.service import SpecialistService
from tradecounter.models.enquiry import Enquiry, EnquiryItem, EnquiryStatus

__all__ = [
    "Category",
    "Brand",
    "Product",
    "ProductAttributes",
    "ProductVariant",
    "SpecialistService",
    "Enquiry",
    "EnquiryItem",
    "EnquiryStatus",
]
