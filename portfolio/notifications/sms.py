"""
SMS sender.

Sends one text message through the Twilio REST API.
"""

import logging

import httpx

from portfolio.config import settings

logger = logging.getLogger(__name__)

TWILIO_API_URL = "https://api.twilio.com/2010-04-01/Accounts/{sid}/Messages.json"


async def send_sms(to: str, body: str) -> bool:
    """
    Send an SMS.

    Args:
        to: Recipient phone number (E.164)
        body: Message text

    Returns:
        True if accepted by Twilio (or simulated in development mode), False otherwise
    """
    account_sid = settings.twilio_account_sid
    auth_token = settings.twilio_auth_token
    sender = settings.twilio_phone_number

    if not account_sid or not auth_token or not sender:
        logger.warning("Missing Twilio credentials. SMS not sent.")
        return False

    if settings.is_development:
        logger.info("SMS would have been sent (dev mode): to=%s body=%r", to, body)
        return True

    try:
        async with httpx.AsyncClient(timeout=settings.notification_timeout) as client:
            response = await client.post(
                TWILIO_API_URL.format(sid=account_sid),
                auth=(account_sid, auth_token),
                data={"To": to, "From": sender, "Body": body},
            )
            response.raise_for_status()
            data = response.json()
    except httpx.HTTPStatusError as e:
        logger.error("Twilio HTTP error: %s", e.response.status_code)
        return False
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Error sending SMS: %s", e)
        return False

    logger.info("SMS sent: %s", data.get("sid"))
    return True
