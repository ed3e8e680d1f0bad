"""
Field validation
================

Small checks shared by the blog and project handlers. Each helper either
returns the cleaned value or raises ValidationError with a field-specific code.
"""

from urllib.parse import urlparse

from .config import get_config_value
from .errors import ValidationError


def is_valid_url(value):
    """True for absolute http(s) URLs with a host"""
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc) and bool(parsed.hostname)


def is_trusted_media_url(value, media_host=None):
    """True when the URL is valid and hosted on the media host or one of its subdomains"""
    if not is_valid_url(value):
        return False
    media_host = (media_host or get_config_value('MEDIA_HOST', 'cloudinary.com') or '').lower()
    if not media_host:
        return False
    hostname = urlparse(value.strip()).hostname.lower()
    return hostname == media_host or hostname.endswith('.' + media_host)


def clean_text(value):
    """Trimmed string, or None when the value was not supplied"""
    if value is None:
        return None
    return str(value).strip()


def require_text(data, field, code, label=None):
    """Trimmed non-empty value of a required field"""
    value = clean_text(data.get(field))
    if not value:
        raise ValidationError(f'{label or field.capitalize()} is required', code)
    return value


def require_non_blank(value, code, label):
    """For updates: a supplied required field cannot be blanked"""
    if not value:
        raise ValidationError(f'{label} cannot be empty', code)
    return value


def check_length(value, max_length, code, label):
    if value is not None and len(value) > max_length:
        raise ValidationError(
            f'{label} must be {max_length} characters or fewer',
            code,
            details={'max_length': max_length, 'length': len(value)},
        )
    return value


def validate_url_field(value, code, label, trusted_media=False):
    """
    Validate an optional URL field.
    Empty strings normalise to None so callers can clear the column.
    """
    value = clean_text(value)
    if not value:
        return None
    if not is_valid_url(value):
        raise ValidationError(f'{label} must be a valid http(s) URL', code)
    if trusted_media and not is_trusted_media_url(value):
        raise ValidationError(
            f'{label} must be hosted on {get_config_value("MEDIA_HOST")}',
            'INVALID_MEDIA_HOST',
        )
    return value
