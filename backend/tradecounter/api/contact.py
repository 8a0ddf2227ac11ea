"""Contact form endpoint."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from tradecounter.schemas.contact import ContactRequest, ContactResponse
from tradecounter.services.mailer import MailerError, contact_subject, render_contact_email, send_mail

router = APIRouter(prefix="/contact", tags=["contact"])


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ContactResponse(success=False, message=message).model_dump(),
    )


@router.post("", response_model=ContactResponse)
async def send_contact_message(body: ContactRequest):
    if not body.name or not body.email or not body.message:
        return _failure(status.HTTP_400_BAD_REQUEST, "Name, email and message are required.")

    subject = contact_subject(body.name, body.subject, body.reason)
    html_body = render_contact_email(
        name=body.name,
        email=body.email,
        phone=body.phone,
        reason=body.reason,
        subject=subject,
        message=body.message,
    )

    try:
        await run_in_threadpool(send_mail, subject, html_body, body.email)
    except MailerError:
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to send message. Please try again later.",
        )

    return ContactResponse(success=True)
