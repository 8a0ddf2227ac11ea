"""Trade enquiry schemas: the wire contract between the enquiry cart and the API."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from tradecounter.models.enquiry import EnquiryStatus
from tradecounter.schemas.common import OptionalText


class CustomerDetails(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    company: OptionalText = None
    email: EmailStr
    phone: OptionalText = None


class EnquiryItemCreate(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: int
    variant_id: int
    quantity: int = Field(..., gt=0)


class EnquiryCreate(BaseModel):
    model_config = ConfigDict(frozen=True)

    customer: CustomerDetails
    message: OptionalText = None
    items: tuple[EnquiryItemCreate, ...] = Field(..., min_length=1)


class EnquiryReceipt(BaseModel):
    id: UUID
    status: EnquiryStatus
    item_count: int
