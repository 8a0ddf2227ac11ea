"""Enquiry submission: posts the cart payload and drives the cart's post-submit state."""

import enum
import logging
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from tradecounter.catalogue.cart import EnquiryCart
from tradecounter.catalogue.errors import SubmissionError, SubmissionInProgressError
from tradecounter.schemas.enquiry import CustomerDetails, EnquiryCreate, EnquiryReceipt

logger = logging.getLogger(__name__)

SUBMIT_FAILED_MESSAGE = "We couldn't send your enquiry. Please try again."


class SubmissionStatus(str, enum.Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class EnquirySubmitter:
    def __init__(self, client: httpx.AsyncClient, path: str = "/enquiries"):
        self._client = client
        self._path = path

    async def submit(self, payload: EnquiryCreate) -> EnquiryReceipt | None:
        """POST the payload. Anything but HTTP 200 raises SubmissionError.

        Returns the parsed receipt, or None when the server confirmed with a
        body we cannot read.
        """
        try:
            resp = await self._client.post(self._path, json=payload.model_dump(mode="json"))
        except httpx.RequestError as exc:
            logger.error("Enquiry endpoint unreachable: %s", exc)
            raise SubmissionError(SUBMIT_FAILED_MESSAGE) from exc

        if resp.status_code != 200:
            logger.error("Enquiry rejected with HTTP %s", resp.status_code)
            raise SubmissionError(SUBMIT_FAILED_MESSAGE, status_code=resp.status_code)

        try:
            return EnquiryReceipt.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            logger.warning("Enquiry accepted but receipt unreadable: %s", exc)
            return None


class EnquiryCheckout:
    """Guards a cart against duplicate concurrent submissions and records the outcome."""

    def __init__(self, cart: EnquiryCart, submitter: EnquirySubmitter):
        self.cart = cart
        self.submitter = submitter
        self.status = SubmissionStatus.IDLE
        self.error: str | None = None
        self.receipt: EnquiryReceipt | None = None

    @property
    def submitting(self) -> bool:
        return self.status is SubmissionStatus.SUBMITTING

    async def submit(
        self,
        customer: CustomerDetails | Mapping[str, Any],
        note: str | None = None,
    ) -> bool:
        """Submit the cart. Returns True on success.

        Invalid customer details (pydantic ValidationError) and an empty cart
        (EmptyCartError) raise before anything is sent. A failed send leaves
        the cart untouched and sets ``error``.
        """
        if self.submitting:
            raise SubmissionInProgressError("An enquiry is already being sent")

        payload = self.cart.build_submission_payload(customer, note)
        self.status = SubmissionStatus.SUBMITTING
        self.error = None
        try:
            self.receipt = await self.submitter.submit(payload)
        except SubmissionError as exc:
            self.error = exc.message
            return False
        else:
            self.cart.mark_submitted()
            self.status = SubmissionStatus.SUCCEEDED
        finally:
            # Any exit other than success, cancellation included
            if self.submitting:
                self.status = SubmissionStatus.FAILED

        logger.info(f"Enquiry sent with {len(payload.items)} line(s)")
        return True
