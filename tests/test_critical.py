"""
Critical Integration Tests for Folio
====================================

Focused tests covering the integration points most likely to break.
Run with: pytest tests/test_critical.py -v

NOTE: pytest is listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

import os
import shutil
import tempfile
from unittest.mock import patch

from flask import Flask
from sqlalchemy.exc import OperationalError

from folio import Folio, create_app
from folio.core.config import get_config_value

from conftest import make_app


# ---------------------------------------------------------------------------
# 1. Framework initialisation -- Folio(app) does not raise
# ---------------------------------------------------------------------------

def test_framework_initialisation(tmp_db_dir):
    """Folio(app) boots without errors and stores itself on the app."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["DB_DIR"] = tmp_db_dir

    folio = Folio(app)

    assert "folio" in app.extensions
    assert app.extensions["folio"] is folio


def test_create_app_factory(tmp_db_dir):
    app = create_app({"TESTING": True, "DB_DIR": tmp_db_dir})
    assert "folio" in app.extensions
    assert app.config["SQLALCHEMY_DATABASE_URI"].endswith("portfolio.db")


# ---------------------------------------------------------------------------
# 2. Config resolution -- app.config wins, Config fills the gaps
# ---------------------------------------------------------------------------

def test_config_defaults_seeded(app):
    """Keys the host app did not set are filled from Config."""
    assert app.config["JWT_ALGORITHM"] == "HS256"
    assert app.config["UPLOAD_MAX_BYTES"] == 2 * 1024 * 1024
    assert app.config["UPLOAD_FOLDER"] == "blog-images"
    assert app.config["DEFAULT_THUMBNAIL"] == "https://placehold.co/600x400/png"


def test_config_value_prefers_app_config(app):
    app.config["SITE_NAME"] = "Overridden"
    with app.app_context():
        assert get_config_value("SITE_NAME") == "Overridden"
        assert get_config_value("NOT_A_REAL_KEY", "fallback") == "fallback"


def test_postgres_url_normalised(tmp_db_dir):
    from folio.core.database import Database
    assert Database.normalize_url("postgres://u:p@h/db") == "postgresql+psycopg2://u:p@h/db"
    assert Database.normalize_url("sqlite:///x.db") == "sqlite:///x.db"


# ---------------------------------------------------------------------------
# 3. Blueprint registration -- every feature module is registered
# ---------------------------------------------------------------------------

EXPECTED_MODULES = [
    "auth",
    "blogs",
    "projects",
    "upload",
    "contact",
    "health",
]


def test_all_blueprints_registered(app):
    """All feature modules should be registered as blueprints."""
    registered = app.extensions["folio"].get_registered_modules()

    for mod in EXPECTED_MODULES:
        assert mod in registered, (
            f"Module '{mod}' was not registered. Registered: {registered}"
        )

    assert len(registered) == len(EXPECTED_MODULES)


def test_features_can_be_disabled(tmp_db_dir):
    app = make_app(tmp_db_dir, features={"upload": False, "contact": False})
    registered = app.extensions["folio"].get_registered_modules()

    assert "upload" not in registered
    assert "contact" not in registered
    rules = [rule.rule for rule in app.url_map.iter_rules()]
    assert "/api/upload" not in rules


def test_expected_routes_exist(app):
    rules = {rule.rule for rule in app.url_map.iter_rules()}
    for rule in (
        "/api/blogs/",
        "/api/blogs/<blog_id>",
        "/api/blogs/create",
        "/api/blogs/update",
        "/api/blogs/delete",
        "/api/projects/",
        "/api/projects/create",
        "/api/auth/login",
        "/api/upload",
        "/api/contact",
        "/health",
    ):
        assert rule in rules, f"{rule} not registered. Routes: {sorted(rules)}"


# ---------------------------------------------------------------------------
# 4. Database directory creation -- SQLite parent dir is created
# ---------------------------------------------------------------------------

def test_database_dir_creation():
    """Folio creates the directory holding the SQLite database."""
    d = tempfile.mkdtemp(prefix="folio-dbtest-")
    target = os.path.join(d, "sub", "databases")

    try:
        app = Flask(__name__)
        app.config["TESTING"] = True
        app.config["DB_DIR"] = target

        Folio(app)

        assert os.path.isdir(target), f"DB_DIR was not created at {target}"
    finally:
        shutil.rmtree(d, ignore_errors=True)


# ---------------------------------------------------------------------------
# 5. Health endpoint -- GET /health returns status and checks
# ---------------------------------------------------------------------------

def test_health_endpoint(client):
    """GET /health returns JSON with status field and checks dict."""
    response = client.get("/health")
    assert response.status_code == 200, (
        f"Expected 200, got {response.status_code}"
    )
    data = response.get_json()
    assert data["status"] in ("ok", "warning", "critical")
    assert data["checks"]["database"]["ok"] is True
    assert "disk" in data["checks"]
    assert "uptime" in data["checks"]


def test_health_reports_database_down(client):
    with patch("folio.modules.ops.routes.Database.ping", return_value=(False, "boom")):
        response = client.get("/health")

    assert response.status_code == 503
    data = response.get_json()
    assert data["status"] == "critical"
    assert data["checks"]["database"]["ok"] is False
    assert "boom" not in response.get_data(as_text=True)


# ---------------------------------------------------------------------------
# 6. Error shape -- every failure uses {error, code}
# ---------------------------------------------------------------------------

def test_unknown_route_is_json(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.get_json()["code"] == "NOT_FOUND"


def test_method_not_allowed_is_json(client):
    response = client.get("/api/contact")
    assert response.status_code == 405
    body = response.get_json()
    assert body["code"] == "METHOD_NOT_ALLOWED"
    assert "error" in body


def test_database_outage_maps_to_503(client):
    """Connection failures surface as DATABASE_UNAVAILABLE, not a raw 500."""
    err = OperationalError("SELECT 1", {}, Exception("could not connect"))
    with patch("folio.modules.blogs.routes.parse_pagination", side_effect=err):
        response = client.get("/api/blogs")

    assert response.status_code == 503
    body = response.get_json()
    assert body["code"] == "DATABASE_UNAVAILABLE"
    assert "could not connect" not in response.get_data(as_text=True)


def test_unexpected_error_does_not_leak(client):
    with patch("folio.modules.blogs.routes.parse_pagination", side_effect=RuntimeError("secret detail")):
        response = client.get("/api/blogs")

    assert response.status_code == 500
    assert response.get_json()["code"] == "INTERNAL_ERROR"
    assert "secret detail" not in response.get_data(as_text=True)


# ---------------------------------------------------------------------------
# 7. CORS -- API responses carry CORS headers
# ---------------------------------------------------------------------------

def test_cors_headers_on_api(client):
    response = client.get("/api/blogs", headers={"Origin": "https://example.com"})
    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") in ("*", "https://example.com")
