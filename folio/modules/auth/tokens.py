"""
Token service
=============

HS256 bearer tokens. Verification is a pure function of (token, secret):
no session store, no refresh, no revocation.
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from ...core.config import get_config_value


def _secret(secret=None):
    return secret or get_config_value('JWT_SECRET') or get_config_value('SECRET_KEY')


def _algorithm():
    return get_config_value('JWT_ALGORITHM', 'HS256')


def create_access_token(user, expires_delta=None, secret=None):
    """Sign a token carrying the user's id, email and role"""
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(hours=int(get_config_value('JWT_EXPIRES_HOURS', 24)))

    claims = {
        'sub': str(user.id),
        'userId': user.id,
        'email': user.email,
        'role': user.role,
        'iat': int(now.timestamp()),
        'exp': int((now + expires_delta).timestamp()),
    }
    return jwt.encode(claims, _secret(secret), algorithm=_algorithm())


def decode_access_token(token, secret=None):
    """Claims dict for a valid token, None when malformed, expired or badly signed"""
    if not token:
        return None
    try:
        claims = jwt.decode(token, _secret(secret), algorithms=[_algorithm()])
    except JWTError:
        return None
    if claims.get('userId') is None or not claims.get('email'):
        return None
    return claims


def extract_token(auth_header):
    """Token part of an 'Authorization: Bearer <token>' header, or None"""
    if not auth_header:
        return None
    parts = auth_header.strip().split(None, 1)
    if len(parts) != 2 or parts[0].lower() != 'bearer':
        return None
    return parts[1].strip() or None
