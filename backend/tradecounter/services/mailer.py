"""Notification e-mail for contact messages and trade enquiries."""

import logging
import smtplib
from collections.abc import Sequence
from email.message import EmailMessage
from html import escape

from tradecounter.core.config import settings

logger = logging.getLogger(__name__)


class MailerError(Exception):
    pass


def _line(label: str, value: object) -> str:
    return f"<p><strong>{escape(label)}:</strong> {escape(str(value)) if value else '-'}</p>"


def _paragraphs(text: str | None) -> str:
    return "<br/>".join(escape(line) for line in (text or "").splitlines())


def contact_subject(name: str, subject: str | None, reason: str | None) -> str:
    if subject and subject.strip():
        return subject.strip()
    return f"New {reason or 'general'} enquiry from {name}"


def render_contact_email(
    name: str,
    email: str,
    phone: str | None,
    reason: str | None,
    subject: str,
    message: str,
) -> str:
    return "\n".join([
        "<h2>New contact enquiry from Craighead website</h2>",
        _line("Name", name),
        _line("Email", email),
        _line("Phone", phone),
        _line("Reason", reason or "general"),
        _line("Subject", subject),
        "<p><strong>Message:</strong></p>",
        f"<p>{_paragraphs(message)}</p>",
    ])


def render_enquiry_email(
    reference: str,
    customer_name: str,
    customer_company: str | None,
    customer_email: str,
    customer_phone: str | None,
    message: str | None,
    lines: Sequence[tuple[str, str, int]],
) -> str:
    """``lines`` holds (product name, variant label, quantity) tuples."""
    rows = "\n".join(
        f"<tr><td>{escape(product)}</td><td>{escape(variant)}</td><td>{quantity}</td></tr>"
        for product, variant, quantity in lines
    )
    return "\n".join([
        "<h2>New trade enquiry from Craighead website</h2>",
        _line("Reference", reference),
        _line("Name", customer_name),
        _line("Company", customer_company),
        _line("Email", customer_email),
        _line("Phone", customer_phone),
        "<table>",
        "<tr><th>Product</th><th>Variant</th><th>Qty</th></tr>",
        rows,
        "</table>",
        "<p><strong>Additional information:</strong></p>",
        f"<p>{_paragraphs(message)}</p>",
    ])


def send_mail(subject: str, html_body: str, reply_to: str | None = None) -> None:
    """Send one HTML message to the sales inbox. Raises MailerError on any SMTP failure."""
    sender = settings.SMTP_FROM or settings.SMTP_USER or settings.CONTACT_RECEIVER_EMAIL
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = f'"Craighead Website" <{sender}>'
    msg["To"] = settings.CONTACT_RECEIVER_EMAIL
    if reply_to:
        msg["Reply-To"] = reply_to
    msg.set_content("This message requires an HTML capable mail client.")
    msg.add_alternative(html_body, subtype="html")

    try:
        with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=30) as smtp:
            smtp.ehlo()
            if smtp.has_extn("starttls"):
                smtp.starttls()
                smtp.ehlo()
            if settings.SMTP_USER:
                smtp.login(settings.SMTP_USER, settings.SMTP_PASS or "")
            smtp.send_message(msg)
    except (smtplib.SMTPException, OSError) as exc:
        logger.error("Mail delivery failed for %r: %s", subject, exc)
        raise MailerError(str(exc)) from exc

    logger.info(f"Mail sent: {subject}")
