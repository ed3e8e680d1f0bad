"""
Email Module
============

Provides email sending functionality with Resend API integration.
"""

from .email_service import EmailService, EmailError, email_service, is_valid_email

__all__ = ['EmailService', 'EmailError', 'email_service', 'is_valid_email']
