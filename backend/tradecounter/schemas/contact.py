"""Contact form schemas."""

from pydantic import BaseModel, ConfigDict

from tradecounter.schemas.common import OptionalText


class ContactRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    # Required fields are checked by the endpoint so the error keeps the
    # {success, message} shape the site expects.
    name: str = ""
    email: str = ""
    phone: OptionalText = None
    subject: OptionalText = None
    reason: OptionalText = None
    message: str = ""


class ContactResponse(BaseModel):
    success: bool
    message: str | None = None
