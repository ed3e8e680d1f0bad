"""
Upload Module
=============

Authenticated image upload forwarded to the media host.
"""

from flask import Blueprint

upload_bp = Blueprint('upload', __name__, url_prefix='/api/upload')

from . import routes

__all__ = ['upload_bp']
