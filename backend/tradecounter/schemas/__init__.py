from tradecounter.schemas.catalogue import (
    CategoryResponse, BrandResponse, ProductResponse, ProductDetailResponse,
    AttributeSetResponse, VariantResponse, SpecialistServiceResponse,
)
from tradecounter.schemas.enquiry import (
    CustomerDetails, EnquiryCreate, EnquiryItemCreate, EnquiryReceipt,
)
from tradecounter.schemas.contact import ContactRequest, ContactResponse
from tradecounter.schemas.site import CoreRange, SiteContent

__all__ = [
    "CategoryResponse", "BrandResponse", "ProductResponse", "ProductDetailResponse",
    "AttributeSetResponse", "VariantResponse", "SpecialistServiceResponse",
    "CustomerDetails", "EnquiryCreate", "EnquiryItemCreate", "EnquiryReceipt",
    "ContactRequest", "ContactResponse",
    "CoreRange", "SiteContent",
]
