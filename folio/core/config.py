import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """
    Base configuration for the Folio portfolio backend.
    Every value can be overridden through environment variables or by setting
    the same key on the Flask app config before Folio(app) runs.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')

    # Database
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL') or 'sqlite:///' + os.path.join(DB_DIR, 'portfolio.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Keeps pooled connections from going stale on hosted Postgres
    SQLALCHEMY_ENGINE_OPTIONS = {'pool_pre_ping': True, 'pool_recycle': 300}

    # JWT settings
    JWT_SECRET = os.getenv('JWT_SECRET') or SECRET_KEY
    JWT_ALGORITHM = os.getenv('JWT_ALGORITHM', 'HS256')
    JWT_EXPIRES_HOURS = int(os.getenv('JWT_EXPIRES_HOURS', '24'))

    # Media host (Cloudinary)
    MEDIA_HOST = os.getenv('MEDIA_HOST', 'cloudinary.com')
    CLOUDINARY_CLOUD_NAME = os.getenv('CLOUDINARY_CLOUD_NAME') or os.getenv('NEXT_PUBLIC_CLOUDINARY_CLOUD_NAME')
    CLOUDINARY_API_KEY = os.getenv('CLOUDINARY_API_KEY')
    CLOUDINARY_API_SECRET = os.getenv('CLOUDINARY_API_SECRET')
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', 'blog-images')
    UPLOAD_MAX_BYTES = int(os.getenv('UPLOAD_MAX_BYTES', str(2 * 1024 * 1024)))
    DEFAULT_THUMBNAIL = os.getenv('DEFAULT_THUMBNAIL', 'https://placehold.co/600x400/png')

    # Resend API settings (contact form)
    RESEND_API_KEY = os.getenv('RESEND_API_KEY') or os.getenv('RESEND')
    CONTACT_FROM = os.getenv('CONTACT_FROM', 'Portfolio <onboarding@resend.dev>')
    CONTACT_TO = os.getenv('CONTACT_TO')

    # CORS for the JSON API
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    # Persist LoggingService entries to the app_logs table
    LOG_TO_DATABASE = os.getenv('LOG_TO_DATABASE', '1') not in ('0', 'false', 'False')

    # Site
    SITE_NAME = os.getenv('SITE_NAME', 'Portfolio')
    SITE_URL = os.getenv('NEXT_PUBLIC_SITE_URL') or os.getenv('SITE_URL', 'http://localhost:5000')


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val is not None:
        return val
    return os.getenv(key, default)
