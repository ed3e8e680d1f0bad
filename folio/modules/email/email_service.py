"""
Email Service Module
====================

Transactional email through the Resend API. Used by the contact form to
forward visitor messages to the site owner.
"""

import logging
import re
from typing import Any, Dict, List, Optional

import resend
from resend.exceptions import ResendError

from ...core.errors import ApiError

# Rejects consecutive dots, leading/trailing dots in local part
_VALID_EMAIL = re.compile(r'^[a-zA-Z0-9_%+-]+(\.[a-zA-Z0-9_%+-]+)*@[a-zA-Z0-9-]+(\.[a-zA-Z0-9-]+)*\.[a-zA-Z]{2,}$')

# Resend error messages that mean the API key itself is the problem
_AUTH_ERROR = re.compile(r'invalid api key|api key is invalid|missing api key', re.IGNORECASE)

logger = logging.getLogger(__name__)


def is_valid_email(address: str) -> bool:
    return bool(address) and _VALID_EMAIL.match(address) is not None


class EmailError(ApiError):
    status_code = 500
    default_code = 'EMAIL_SEND_FAILED'


class EmailService:
    """
    Resend-backed email service.

    Configuration (set in Flask app.config):
        RESEND_API_KEY: Your Resend API key
        CONTACT_FROM: Sender address (default: 'Portfolio <onboarding@resend.dev>')
        CONTACT_TO: Recipient of contact form messages
        SITE_NAME: Used in subjects and sender names
    """

    def __init__(self, app=None):
        self.api_key = None
        self.sender_email = None
        self.contact_to = None
        self.site_name = 'Portfolio'

        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """Initialize email service with Flask app configuration"""
        self.api_key = app.config.get('RESEND_API_KEY')
        self.sender_email = app.config.get('CONTACT_FROM') or 'Portfolio <onboarding@resend.dev>'
        self.contact_to = app.config.get('CONTACT_TO')
        self.site_name = app.config.get('SITE_NAME') or 'Portfolio'

        if not self.api_key:
            logger.warning("RESEND_API_KEY not configured - contact emails will be rejected")
        logger.info(f"Email service sender: {self.sender_email}")

    def send_email(self, to: List[str], subject: str, text_body: str,
                   html_body: Optional[str] = None, reply_to: Optional[str] = None) -> Dict[str, Any]:
        """
        Send one email via Resend.

        Returns:
            dict: Resend response (contains the message id)

        Raises:
            EmailError: EMAIL_AUTH_FAILED (401) for a missing/invalid API key,
                EMAIL_SEND_FAILED (500) for anything else.
        """
        if not self.api_key:
            raise EmailError('Missing API key', 'EMAIL_AUTH_FAILED', 401)

        if not to:
            raise EmailError('No recipients configured', 'EMAIL_SEND_FAILED')

        email_params = {
            "from": self.sender_email,
            "to": to,
            "subject": subject,
            "text": text_body,
        }
        if html_body:
            email_params["html"] = html_body
        if reply_to:
            email_params["reply_to"] = reply_to

        resend.api_key = self.api_key
        try:
            r = resend.Emails.send(email_params)
        except ResendError as e:
            message = getattr(e, 'message', None) or str(e) or 'Failed to send'
            logger.error(f"Resend error: {message}")
            if _AUTH_ERROR.search(message):
                raise EmailError(message, 'EMAIL_AUTH_FAILED', 401)
            raise EmailError(message, 'EMAIL_SEND_FAILED')

        logger.info(f"Resend response: {r}")
        if not r or not r.get('id'):
            raise EmailError('Failed to send', 'EMAIL_SEND_FAILED')
        return r

    def send_contact_message(self, name: str, email: str, message: str) -> Dict[str, Any]:
        """Forward a contact form submission to the site owner"""
        subject = f"{self.site_name} Inquiry from {name}"
        text = f"Name: {name}\nEmail: {email}\n\n{message}"
        recipients = [a.strip() for a in (self.contact_to or '').split(',') if a.strip()]
        return self.send_email(recipients, subject, text, reply_to=email)


email_service = EmailService()
