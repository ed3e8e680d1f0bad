"""
Database
========

Shared Flask-SQLAlchemy handle plus the connection helpers Folio needs at
startup (URL normalisation, SQLite directory creation, liveness ping).
"""

import logging
import os

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import text
from sqlalchemy.engine import make_url

logger = logging.getLogger(__name__)

db = SQLAlchemy()


class Database:

    @staticmethod
    def normalize_url(url):
        """Rewrite Heroku-style postgres:// URLs to an explicit driver URL"""
        if url and url.startswith('postgres://'):
            return 'postgresql+psycopg2://' + url[len('postgres://'):]
        return url

    @staticmethod
    def ensure_sqlite_dir(url):
        """
        Make sure the directory holding a file-based SQLite database exists.
        Returns the directory created (or already present), None for other backends.
        """
        try:
            parsed = make_url(url)
        except Exception as e:
            logger.warning("Could not parse database URL: %s", e)
            return None

        if parsed.get_backend_name() != 'sqlite':
            return None
        database = parsed.database
        if not database or database == ':memory:':
            return None

        db_dir = os.path.dirname(os.path.abspath(database))
        os.makedirs(db_dir, exist_ok=True)
        return db_dir

    @staticmethod
    def ping():
        """Run SELECT 1 against the engine. Returns (ok, error_message)."""
        try:
            with db.engine.connect() as conn:
                conn.execute(text('SELECT 1'))
            return True, None
        except Exception as e:
            logger.error("Database ping failed: %s", e)
            return False, str(e)
