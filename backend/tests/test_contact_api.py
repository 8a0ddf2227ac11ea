"""Unit tests for the contact endpoint and mail rendering."""

import json
import smtplib
from unittest.mock import MagicMock, patch

import pytest

from tradecounter.schemas.contact import ContactRequest
from tradecounter.services.mailer import (
    MailerError,
    contact_subject,
    render_contact_email,
    render_enquiry_email,
    send_mail,
)


@pytest.mark.asyncio
async def test_contact_requires_name_email_message():
    from tradecounter.api.contact import send_contact_message

    with patch("tradecounter.api.contact.send_mail") as mock_send:
        response = await send_contact_message(ContactRequest(name="Sam", email="  ", message="Hi"))

    assert response.status_code == 400
    assert json.loads(response.body) == {"success": False, "message": "Name, email and message are required."}
    mock_send.assert_not_called()


@pytest.mark.asyncio
async def test_contact_sends_mail_with_reply_to():
    from tradecounter.api.contact import send_contact_message

    body = ContactRequest(name="Sam", email="sam@example.com", message="Stock check", reason="pricing")
    with patch("tradecounter.api.contact.send_mail") as mock_send:
        response = await send_contact_message(body)

    assert response.success is True
    subject, html_body, reply_to = mock_send.call_args.args
    assert subject == "New pricing enquiry from Sam"
    assert "Stock check" in html_body
    assert reply_to == "sam@example.com"


@pytest.mark.asyncio
async def test_contact_mail_failure_returns_500():
    from tradecounter.api.contact import send_contact_message

    body = ContactRequest(name="Sam", email="sam@example.com", message="Hi")
    with patch("tradecounter.api.contact.send_mail", side_effect=MailerError("no relay")):
        response = await send_contact_message(body)

    assert response.status_code == 500
    assert json.loads(response.body)["success"] is False


def test_contact_subject_prefers_explicit_subject():
    assert contact_subject("Sam", "  Account query ", "account") == "Account query"
    assert contact_subject("Sam", None, None) == "New general enquiry from Sam"


def test_rendered_mail_escapes_user_input():
    html = render_contact_email(
        name="<b>Sam</b>", email="sam@example.com", phone=None,
        reason=None, subject="Hi", message="line one\nline <two>",
    )
    assert "&lt;b&gt;Sam&lt;/b&gt;" in html
    assert "line one<br/>line &lt;two&gt;" in html
    assert "<strong>Phone:</strong> -" in html


def test_render_enquiry_email_lists_lines():
    html = render_enquiry_email(
        reference="abc", customer_name="Jo", customer_company=None,
        customer_email="jo@example.com", customer_phone=None, message=None,
        lines=[("Coach Screw", "Box of 50", 3)],
    )
    assert "<tr><td>Coach Screw</td><td>Box of 50</td><td>3</td></tr>" in html


def test_send_mail_wraps_smtp_errors():
    smtp = MagicMock()
    smtp.__enter__.return_value = smtp
    smtp.send_message.side_effect = smtplib.SMTPServerDisconnected("gone")

    with patch("tradecounter.services.mailer.smtplib.SMTP", return_value=smtp):
        with pytest.raises(MailerError):
            send_mail("Subject", "<p>x</p>")


def test_send_mail_sets_reply_to():
    smtp = MagicMock()
    smtp.__enter__.return_value = smtp
    smtp.has_extn.return_value = False

    with patch("tradecounter.services.mailer.smtplib.SMTP", return_value=smtp):
        send_mail("Subject", "<p>x</p>", reply_to="sam@example.com")

    message = smtp.send_message.call_args.args[0]
    assert message["Reply-To"] == "sam@example.com"
    assert message["Subject"] == "Subject"
    smtp.starttls.assert_not_called()
