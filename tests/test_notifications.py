"""Tests for the email and SMS senders and the owner notifier."""

import asyncio
import smtplib

import httpx
import pytest

from portfolio.config import settings
from portfolio.notifications import Attachment, Notifier, send_mail, send_sms
from portfolio.notifications.email import build_message


def unreachable_smtp(*args, **kwargs):
    raise ConnectionRefusedError("SMTP server unreachable")


async def unreachable_twilio(*args, **kwargs):
    raise httpx.ConnectError("Twilio unreachable")


@pytest.fixture
def production(monkeypatch):
    monkeypatch.setattr(settings, "environment", "production")
    monkeypatch.setattr(settings, "email_server_port", 587)


@pytest.fixture
def development(monkeypatch):
    monkeypatch.setattr(settings, "environment", "development")


@pytest.fixture
def twilio_credentials(monkeypatch):
    monkeypatch.setattr(settings, "twilio_account_sid", "AC123")
    monkeypatch.setattr(settings, "twilio_auth_token", "secret")
    monkeypatch.setattr(settings, "twilio_phone_number", "+15550000")


class TestDevelopmentMode:
    def test_email_reports_success_without_provider(self, development, monkeypatch):
        monkeypatch.setattr(smtplib, "SMTP", unreachable_smtp)
        monkeypatch.setattr(smtplib, "SMTP_SSL", unreachable_smtp)

        assert asyncio.run(send_mail("a@example.com", "Hi", "Body")) is True

    def test_sms_reports_success_without_provider(self, development, twilio_credentials, monkeypatch):
        monkeypatch.setattr(httpx.AsyncClient, "post", unreachable_twilio)

        assert asyncio.run(send_sms("+15550100", "Body")) is True

    def test_sms_without_credentials_still_fails(self, development, monkeypatch):
        monkeypatch.setattr(settings, "twilio_account_sid", "")

        assert asyncio.run(send_sms("+15550100", "Body")) is False


class TestEmail:
    def test_unreachable_server_returns_false(self, production, monkeypatch):
        monkeypatch.setattr(smtplib, "SMTP", unreachable_smtp)

        assert asyncio.run(send_mail("a@example.com", "Hi", "Body")) is False

    @pytest.mark.parametrize(
        "to,subject",
        [("a@example.com", "Portfolio Reminder: Add\nproject"), ("a@example.com\r\nBcc: x@example.com", "Hi")],
    )
    def test_line_break_in_header_returns_false(self, production, monkeypatch, to, subject):
        monkeypatch.setattr(smtplib, "SMTP", unreachable_smtp)

        assert asyncio.run(send_mail(to, subject, "Body")) is False

    def test_html_defaults_to_text_with_line_breaks(self):
        message = build_message("a@example.com", "Hi", "Line one\nLine two")

        html = message.get_body(preferencelist=("html",)).get_content()
        assert "Line one<br>Line two" in html
        assert message.get_body(preferencelist=("plain",)).get_content().startswith("Line one\nLine two")

    def test_attachment(self, tmp_path):
        resume = tmp_path / "resume.pdf"
        resume.write_bytes(b"%PDF-1.4 test")

        message = build_message(
            "a@example.com", "Application", "Body", attachments=[Attachment(filename="resume.pdf", path=str(resume))]
        )

        [attachment] = list(message.iter_attachments())
        assert attachment.get_filename() == "resume.pdf"
        assert attachment.get_content_type() == "application/pdf"
        assert attachment.get_content() == b"%PDF-1.4 test"


class TestSms:
    def test_missing_credentials_returns_false(self, production, monkeypatch):
        monkeypatch.setattr(settings, "twilio_account_sid", "")

        assert asyncio.run(send_sms("+15550100", "Body")) is False

    def test_transport_error_returns_false(self, production, twilio_credentials, monkeypatch):
        monkeypatch.setattr(httpx.AsyncClient, "post", unreachable_twilio)

        assert asyncio.run(send_sms("+15550100", "Body")) is False

    def test_accepted_message(self, production, twilio_credentials, monkeypatch):
        sent = {}

        async def accept(self, url, auth=None, data=None):
            sent.update(url=url, data=data)
            return httpx.Response(201, json={"sid": "SM1"}, request=httpx.Request("POST", url))

        monkeypatch.setattr(httpx.AsyncClient, "post", accept)

        assert asyncio.run(send_sms("+15550100", "Body")) is True
        assert sent["url"].endswith("/Accounts/AC123/Messages.json")
        assert sent["data"] == {"To": "+15550100", "From": "+15550000", "Body": "Body"}


class TestNotifier:
    def test_skips_owner_messages_without_contact(self, outbox):
        notifier = Notifier(mailer=outbox.mailer, texter=outbox.texter)

        assert asyncio.run(notifier.email_owner("Subject", "Text")) is False
        assert asyncio.run(notifier.text_owner("Text")) is False
        assert outbox.emails == [] and outbox.texts == []

    def test_sender_exception_is_contained(self):
        async def broken(*args, **kwargs):
            raise RuntimeError("provider exploded")

        notifier = Notifier(owner_email="o@example.com", owner_phone="+1555", mailer=broken, texter=broken)

        assert asyncio.run(notifier.email_owner("Subject", "Text")) is False
        assert asyncio.run(notifier.text_owner("Text")) is False

    def test_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "user_email", "me@example.com")
        monkeypatch.setattr(settings, "user_phone", "")

        notifier = Notifier.from_settings()

        assert notifier.owner_email == "me@example.com"
        assert notifier.owner_phone is None
