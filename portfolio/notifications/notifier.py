"""Owner notifications dispatched at the end of agent tasks."""

import logging
from collections.abc import Awaitable, Callable

from portfolio.config import settings
from portfolio.notifications.email import Attachment, send_mail
from portfolio.notifications.sms import send_sms

logger = logging.getLogger(__name__)

Mailer = Callable[..., Awaitable[bool]]
Texter = Callable[[str, str], Awaitable[bool]]


class Notifier:
    """Best-effort email/SMS dispatch.

    Owner messages are skipped when no owner email/phone is configured.
    A failing send is logged and reported as False, never raised.
    """

    def __init__(
        self,
        owner_email: str | None = None,
        owner_phone: str | None = None,
        mailer: Mailer = send_mail,
        texter: Texter = send_sms,
    ):
        self.owner_email = owner_email or None
        self.owner_phone = owner_phone or None
        self._mailer = mailer
        self._texter = texter

    @classmethod
    def from_settings(cls) -> "Notifier":
        return cls(owner_email=settings.user_email, owner_phone=settings.user_phone)

    async def send_email(
        self,
        to: str,
        subject: str,
        text: str,
        attachments: list[Attachment] | None = None,
    ) -> bool:
        try:
            return await self._mailer(to, subject, text, attachments=attachments)
        except Exception:
            logger.exception("Email notification to %s failed", to)
            return False

    async def send_text(self, to: str, body: str) -> bool:
        try:
            return await self._texter(to, body)
        except Exception:
            logger.exception("SMS notification to %s failed", to)
            return False

    async def email_owner(self, subject: str, text: str) -> bool:
        if not self.owner_email:
            return False
        return await self.send_email(self.owner_email, subject, text)

    async def text_owner(self, body: str) -> bool:
        if not self.owner_phone:
            return False
        return await self.send_text(self.owner_phone, body)
