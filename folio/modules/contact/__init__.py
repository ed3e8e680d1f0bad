"""
Contact Module
==============

Public contact form endpoint that forwards messages by email.
"""

from flask import Blueprint

contact_bp = Blueprint('contact', __name__, url_prefix='/api/contact')

from . import routes

__all__ = ['contact_bp']
