from flask import jsonify

from ...core.errors import ValidationError
from ...core.http import get_json_body
from ...core.logging_service import LoggingService
from ..email.email_service import email_service, is_valid_email
from . import contact_bp


@contact_bp.route('', methods=['POST'], strict_slashes=False)
def submit_contact():
    """Forward {name, email, message} to the site owner"""
    data = get_json_body()
    name = str(data.get('name') or '').strip()
    email = str(data.get('email') or '').strip()
    message = str(data.get('message') or '').strip()

    if not name or not email or not message:
        raise ValidationError(
            'Missing required fields',
            'MISSING_FIELDS',
            details={'required': ['name', 'email', 'message']},
        )

    if not is_valid_email(email):
        raise ValidationError('Invalid email address', 'INVALID_EMAIL')

    result = email_service.send_contact_message(name, email, message)
    LoggingService.info('contact', f'Contact message from {email}', {'resend_id': result.get('id')})

    return jsonify({'ok': True})
