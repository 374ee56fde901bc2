"""
Email sender.

Delivers one message over SMTP. Returns True/False and never raises; in
development mode the send is only logged.
"""

import asyncio
import logging
import mimetypes
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from pathlib import Path

from portfolio.config import settings

logger = logging.getLogger(__name__)


@dataclass
class Attachment:
    filename: str
    path: str
    content_type: str | None = None


def build_message(
    to: str,
    subject: str,
    text: str,
    html: str | None = None,
    attachments: list[Attachment] | None = None,
) -> EmailMessage:
    """Build a multipart message with a plain-text and an HTML part."""
    message = EmailMessage()
    message["From"] = settings.email_from or settings.email_server_user
    message["To"] = to
    message["Subject"] = subject
    message.set_content(text)
    message.add_alternative(html or text.replace("\n", "<br>"), subtype="html")

    for attachment in attachments or []:
        content_type = attachment.content_type or mimetypes.guess_type(attachment.filename)[0]
        maintype, _, subtype = (content_type or "application/octet-stream").partition("/")
        message.add_attachment(
            Path(attachment.path).read_bytes(),
            maintype=maintype,
            subtype=subtype,
            filename=attachment.filename,
        )

    return message


def _deliver(message: EmailMessage) -> None:
    """Blocking SMTP delivery. Port 465 uses implicit TLS, others STARTTLS when offered."""
    host = settings.email_server_host
    port = settings.email_server_port
    timeout = settings.notification_timeout

    if port == 465:
        smtp = smtplib.SMTP_SSL(host, port, timeout=timeout)
    else:
        smtp = smtplib.SMTP(host, port, timeout=timeout)

    with smtp:
        if port != 465:
            smtp.ehlo()
            if smtp.has_extn("starttls"):
                smtp.starttls()
                smtp.ehlo()
        if settings.email_server_user:
            smtp.login(settings.email_server_user, settings.email_server_password)
        smtp.send_message(message)


async def send_mail(
    to: str,
    subject: str,
    text: str,
    html: str | None = None,
    attachments: list[Attachment] | None = None,
) -> bool:
    """
    Send an email.

    Args:
        to: Recipient address
        subject: Subject line
        text: Plain-text body
        html: Optional HTML body (defaults to the text with <br> line breaks)
        attachments: Optional files to attach

    Returns:
        True if delivered (or simulated in development mode), False otherwise
    """
    if settings.is_development:
        logger.info("Email would have been sent (dev mode): to=%s subject=%r", to, subject)
        return True

    try:
        message = build_message(to, subject, text, html, attachments)
        await asyncio.to_thread(_deliver, message)
    except (smtplib.SMTPException, OSError, ValueError) as e:
        # ValueError: CR/LF in a header value
        logger.error("Error sending email to %s: %s", to, e)
        return False

    logger.info("Email sent: to=%s subject=%r", to, subject)
    return True
