"""
Folio Auth Module

Provides stateless admin authentication:
- Email/password login issuing signed JWT bearer tokens
- Token verification endpoint
- require_auth decorator gating write endpoints
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

from . import routes
from .models import User
from .utils import require_auth, get_verified_identity, is_admin_request

__all__ = ['auth_bp', 'User', 'require_auth', 'get_verified_identity', 'is_admin_request']
