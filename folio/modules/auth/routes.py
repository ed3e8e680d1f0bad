from flask import g, jsonify

from ...core.errors import AuthenticationError, ValidationError
from ...core.http import get_json_body
from ...core.logging_service import LoggingService
from . import auth_bp
from .models import User
from .tokens import create_access_token
from .utils import require_auth, verify_password


@auth_bp.route('/login', methods=['POST'])
def login():
    """Exchange admin email/password for a bearer token"""
    data = get_json_body()
    email = str(data.get('email') or '').strip().lower()
    password = data.get('password') or ''

    if not email or not password:
        raise ValidationError('Email and password are required', 'MISSING_FIELDS')

    user = User.query.filter_by(email=email).first()
    if not user or not verify_password(password, user.password_hash):
        LoggingService.log_security_event('Failed login attempt', {'email': email})
        raise AuthenticationError('Invalid email or password', 'INVALID_CREDENTIALS')

    token = create_access_token(user)
    LoggingService.log_user_action('auth', 'login', user_id=user.id)

    return jsonify({
        'success': True,
        'token': token,
        'user': user.to_dict()
    })


@auth_bp.route('/verify', methods=['GET'])
@require_auth
def verify():
    """Echo the identity carried by the bearer token"""
    return jsonify({'success': True, 'user': g.current_user})
