"""
Shared fixtures for the Folio test suite.

Install test tools with: pip install -e ".[dev]"
"""

import os
import shutil
import tempfile

import pytest
from flask import Flask

from folio import Folio
from folio.core.database import db
from folio.modules.auth.models import User
from folio.modules.auth.tokens import create_access_token
from folio.modules.auth.utils import hash_password

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "Sup3r-secret!"


def make_app(db_dir, features=None, **overrides):
    """Flask app with Folio registered against a SQLite file in db_dir."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["JWT_SECRET"] = "test-jwt-secret"
    app.config["DB_DIR"] = db_dir
    app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///" + os.path.join(db_dir, "portfolio.db")
    app.config["MEDIA_HOST"] = "cloudinary.com"
    app.config["CLOUDINARY_CLOUD_NAME"] = "demo"
    app.config["CLOUDINARY_API_KEY"] = "123456"
    app.config["CLOUDINARY_API_SECRET"] = "shh"
    app.config["RESEND_API_KEY"] = "re_test_fake_key_123"
    app.config["CONTACT_TO"] = "owner@example.com"
    app.config.update(overrides)

    folio_config = {'features': features} if features else None
    Folio(app, folio_config)
    return app


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for test databases, cleaned up after."""
    d = tempfile.mkdtemp(prefix="folio-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def app(tmp_db_dir):
    """Fully initialised Flask app with all Folio modules registered."""
    app = make_app(tmp_db_dir)
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_user(app):
    with app.app_context():
        user = User(
            email=ADMIN_EMAIL,
            name="Test Admin",
            role="admin",
            password_hash=hash_password(ADMIN_PASSWORD),
        )
        db.session.add(user)
        db.session.commit()
        return {"id": user.id, "email": user.email, "role": user.role}


@pytest.fixture
def admin_token(app, admin_user):
    with app.app_context():
        user = db.session.get(User, admin_user["id"])
        return create_access_token(user)


@pytest.fixture
def auth_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def editor_headers(app):
    """Valid token for a non-admin role."""
    with app.app_context():
        user = User(
            email="editor@example.com",
            name="Editor",
            role="editor",
            password_hash=hash_password("editor-pass"),
        )
        db.session.add(user)
        db.session.commit()
        return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def create_blog(client, auth_headers):
    """Factory: create a blog through the API and return its JSON."""
    def _create(**fields):
        payload = {"title": "Hello World", "content": "Some text"}
        payload.update(fields)
        response = client.post("/api/blogs/create", json=payload, headers=auth_headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()["blog"]
    return _create


@pytest.fixture
def create_project(client, auth_headers):
    """Factory: create a project through the API and return its JSON."""
    def _create(**fields):
        payload = {"title": "Portfolio Website", "description": "My personal portfolio"}
        payload.update(fields)
        response = client.post("/api/projects/create", json=payload, headers=auth_headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()["project"]
    return _create
