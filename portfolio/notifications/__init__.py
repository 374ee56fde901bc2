"""
Notification channels.

- email: SMTP sender
- sms: Twilio sender
- notifier: Owner notifications used by the agent tasks
"""

from portfolio.notifications.email import Attachment, send_mail
from portfolio.notifications.notifier import Notifier
from portfolio.notifications.sms import send_sms

__all__ = ["Attachment", "Notifier", "send_mail", "send_sms"]
