"""
Folio Modules
=============

Flask blueprint modules registered by Folio(app).
"""

__all__ = ['auth', 'blogs', 'projects', 'upload', 'contact', 'email', 'ops']
