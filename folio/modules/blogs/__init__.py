"""
Blogs Module
============

JSON API for blog articles.

Provides:
- Public listing and single-article reads (with view counting)
- Authenticated create / update / delete
- Slug uniqueness and field validation
"""

from flask import Blueprint

blogs_bp = Blueprint('blogs', __name__, url_prefix='/api/blogs')

from . import routes
from .models import Blog

__all__ = ['blogs_bp', 'Blog']
