"""
Folio - Portfolio Site Backend
==============================

A Flask framework extension providing the JSON API behind a personal
portfolio site:
- Blog articles and portfolio projects with authenticated CRUD
- JWT admin authentication
- Image upload to the media host
- Contact form email
- Health endpoint

Usage:
    from flask import Flask
    from folio import Folio

    app = Flask(__name__)
    folio = Folio(app)

    # Or only some features:
    folio = Folio(app, {'features': {'upload': False, 'contact': False}})
"""

import logging
import os

from flask import Flask
from flask_cors import CORS

from .core.config import Config
from .core.database import Database, db
from .core.errors import register_error_handlers

__version__ = '0.1.0'

logger = logging.getLogger(__name__)

DEFAULT_FEATURES = {
    'auth': True,
    'blogs': True,
    'projects': True,
    'upload': True,
    'contact': True,
    'health': True,
}


def _feature_blueprints():
    from .modules.auth import auth_bp
    from .modules.blogs import blogs_bp
    from .modules.contact import contact_bp
    from .modules.ops import ops_health_bp
    from .modules.projects import projects_bp
    from .modules.upload import upload_bp

    return {
        'auth': auth_bp,
        'blogs': blogs_bp,
        'projects': projects_bp,
        'upload': upload_bp,
        'contact': contact_bp,
        'health': ops_health_bp,
    }


class Folio:
    """Registers the Folio feature modules and shared services on a Flask app"""

    def __init__(self, app=None, config=None):
        self._config = dict(config or {})
        self._registered = []
        self.app = None

        if app is not None:
            self.init_app(app)

    @property
    def features(self):
        features = dict(DEFAULT_FEATURES)
        features.update(self._config.get('features', {}))
        return features

    def init_app(self, app):
        self.app = app
        self._setup_config(app)
        self._setup_database(app)

        CORS(app, resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}})
        register_error_handlers(app)

        from .modules.email.email_service import email_service
        email_service.init_app(app)

        self._register_blueprints(app)

        from .seed import seed_command
        app.cli.add_command(seed_command)

        with app.app_context():
            db.create_all()

        app.extensions['folio'] = self
        logger.info("Folio initialised with modules: %s", ', '.join(self._registered))

    def _setup_config(self, app):
        """Fill any app.config key the host app left unset from Config"""
        if app.config.get('SQLALCHEMY_DATABASE_URI') is None and not os.getenv('DATABASE_URL'):
            db_dir = app.config.get('DB_DIR') or Config.DB_DIR
            app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite:///' + os.path.join(db_dir, 'portfolio.db')

        for key in dir(Config):
            if key.isupper() and app.config.get(key) is None:
                app.config[key] = getattr(Config, key)

        app.config['SQLALCHEMY_DATABASE_URI'] = Database.normalize_url(app.config['SQLALCHEMY_DATABASE_URI'])

    def _setup_database(self, app):
        Database.ensure_sqlite_dir(app.config['SQLALCHEMY_DATABASE_URI'])
        db.init_app(app)

    def _register_blueprints(self, app):
        blueprints = _feature_blueprints()
        for name, enabled in self.features.items():
            if not enabled or name not in blueprints:
                continue
            app.register_blueprint(blueprints[name])
            self._registered.append(name)

    def get_registered_modules(self):
        return list(self._registered)


def create_app(config=None, folio_config=None):
    """Application factory: Flask app with Folio registered"""
    app = Flask(__name__)
    if config:
        app.config.update(config)
    Folio(app, folio_config)
    return app


__all__ = ['Folio', 'create_app', 'db']
