from functools import wraps

from flask import g, request
from passlib.context import CryptContext

from ...core.errors import AuthenticationError
from ...core.http import parse_flag
from ...core.logging_service import LoggingService
from .tokens import decode_access_token, extract_token

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password):
    return pwd_context.hash(password)


def verify_password(password, password_hash):
    try:
        return pwd_context.verify(password, password_hash)
    except (ValueError, TypeError):
        return False


def get_verified_identity():
    """Identity from a valid bearer token on the current request, else None"""
    claims = decode_access_token(extract_token(request.headers.get('Authorization')))
    if not claims:
        return None
    return {
        'user_id': claims['userId'],
        'email': claims['email'],
        'role': claims.get('role'),
    }


def require_auth(f):
    """Decorator to require a valid bearer token"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth_header = request.headers.get('Authorization')
        if not auth_header:
            raise AuthenticationError('Authentication required', 'AUTH_REQUIRED')

        identity = get_verified_identity()
        if identity is None:
            LoggingService.log_security_event(
                'Rejected bearer token',
                {'path': request.path, 'method': request.method},
            )
            raise AuthenticationError('Invalid or expired token', 'INVALID_TOKEN')

        g.current_user = identity
        return f(*args, **kwargs)
    return decorated_function


def is_admin_request():
    """
    True only when ?admin=true comes with a valid admin bearer token.
    An unbacked admin flag is ignored and recorded as a security event.
    """
    if not parse_flag(request.args.get('admin', '')):
        return False

    identity = get_verified_identity()
    if identity and identity.get('role') == 'admin':
        g.current_user = identity
        return True

    LoggingService.log_security_event(
        'Ignored admin flag without admin credentials',
        {'path': request.path, 'has_token': bool(request.headers.get('Authorization'))},
    )
    return False
