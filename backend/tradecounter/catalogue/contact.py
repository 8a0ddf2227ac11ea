"""Contact form state and submission."""

import logging
import re

import httpx
from pydantic import BaseModel, ValidationError

from tradecounter.catalogue.errors import ContactValidationError, SubmissionInProgressError
from tradecounter.catalogue.submission import SubmissionStatus
from tradecounter.schemas.contact import ContactRequest, ContactResponse

logger = logging.getLogger(__name__)

CONTACT_REASONS = ("general", "pricing", "account", "order", "delivery")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

SENT_MESSAGE = "Thank you, your message has been sent. We'll get back to you shortly."
FAILED_MESSAGE = "There was an error sending your message."


class ContactForm(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    subject: str = ""
    reason: str = "general"
    message: str = ""
    agree: bool = False

    def field_errors(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if not self.name.strip():
            errors["name"] = "Please enter your name."
        if not self.email.strip():
            errors["email"] = "Please enter your email."
        elif not EMAIL_PATTERN.match(self.email.strip()):
            errors["email"] = "Please enter a valid email address."
        if not self.message.strip():
            errors["message"] = "Please enter a message."
        if self.reason not in CONTACT_REASONS:
            errors["reason"] = "Please choose an enquiry type."
        if not self.agree:
            errors["agree"] = "You must agree to the privacy notice."
        return errors

    def to_request(self) -> ContactRequest:
        return ContactRequest(**self.model_dump(exclude={"agree"}))


class ContactDesk:
    def __init__(self, client: httpx.AsyncClient, path: str = "/contact"):
        self._client = client
        self._path = path
        self.form = ContactForm()
        self.errors: dict[str, str] = {}
        self.status = SubmissionStatus.IDLE
        self.message = ""

    async def submit(self) -> bool:
        """Validate and send the form. The form is reset only after a confirmed send."""
        if self.status is SubmissionStatus.SUBMITTING:
            raise SubmissionInProgressError("The message is already being sent")

        self.message = ""
        self.errors = self.form.field_errors()
        if self.errors:
            raise ContactValidationError(self.errors)

        self.status = SubmissionStatus.SUBMITTING
        try:
            return await self._send()
        finally:
            if self.status is SubmissionStatus.SUBMITTING:
                self.status = SubmissionStatus.FAILED

    async def _send(self) -> bool:
        body = self.form.to_request().model_dump(mode="json")
        try:
            resp = await self._client.post(self._path, json=body)
        except httpx.RequestError as exc:
            logger.error("Contact endpoint unreachable: %s", exc)
            return self._failed(FAILED_MESSAGE)

        try:
            reply = ContactResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            logger.error("Unreadable contact response: %s", exc)
            reply = ContactResponse(success=False)

        if not resp.is_success or not reply.success:
            return self._failed(reply.message or FAILED_MESSAGE)

        self.status = SubmissionStatus.SUCCEEDED
        self.message = SENT_MESSAGE
        self.form = ContactForm()
        return True

    def _failed(self, message: str) -> bool:
        self.status = SubmissionStatus.FAILED
        self.message = message
        return False
