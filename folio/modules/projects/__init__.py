"""
Projects Module
===============

JSON API for portfolio projects: public listing with featured/tag filters,
single reads, and authenticated create / update / delete.
"""

from flask import Blueprint

projects_bp = Blueprint('projects', __name__, url_prefix='/api/projects')

from . import routes
from .models import Project

__all__ = ['projects_bp', 'Project']
