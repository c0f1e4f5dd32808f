import os
from dotenv import load_dotenv

load_dotenv(override=True)

IS_PRODUCTION = (
    os.getenv('ENVIRONMENT') == 'production' or
    os.getenv('FLASK_ENV') == 'production' or
    os.getenv('PRODUCTION') == '1'
)

PRODUCTION_ORIGINS = ['https://amitjha.in']
DEVELOPMENT_ORIGINS = ['http://localhost:3000', 'http://localhost:3002']


def _origins_from_env():
    raw = os.getenv('CORS_ORIGINS')
    if raw:
        return [origin.strip() for origin in raw.split(',') if origin.strip()]
    return PRODUCTION_ORIGINS if IS_PRODUCTION else DEVELOPMENT_ORIGINS


class Config:
    """
    Base configuration for Folio.
    Every value can be overridden through the environment or a .env file,
    and again per app through app.config.
    """
    IS_PRODUCTION = IS_PRODUCTION

    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')

    # Port for the local server
    PORT = int(os.getenv('PORT', '3002'))

    # Get DB_DIR from environment, or use a default if not set
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))
    BLOG_DB = os.getenv('BLOG_DB', os.path.join(DB_DIR, 'blog.db'))

    # Log entries live beside the posts in the blog database
    LOGS_TABLE = 'app_logs'

    # Uploads
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', os.path.join(os.getcwd(), 'uploads'))
    UPLOAD_URL_PREFIX = '/uploads'
    UPLOAD_FIELD = 'featured_image'
    MAX_UPLOAD_SIZE = int(os.getenv('MAX_UPLOAD_SIZE', str(5 * 1024 * 1024)))  # 5MB

    # Per-field limit for non-file form data; post content is a rich-text blob
    MAX_FORM_MEMORY_SIZE = int(os.getenv('MAX_FORM_MEMORY_SIZE', str(16 * 1024 * 1024)))  # 16MB

    # Built single-page frontend
    FRONTEND_FOLDER = os.getenv('FRONTEND_FOLDER', os.path.join(os.getcwd(), 'public'))

    # CORS
    CORS_ORIGINS = _origins_from_env()
    CORS_METHODS = ['GET', 'POST', 'PUT', 'DELETE']
    CORS_HEADERS = ['Content-Type', 'Authorization']


def get_setting(key, default=None):
    """Resolve a setting: Flask app config first, then Config, then default."""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None:
            return val
    except RuntimeError:
        pass
    return getattr(Config, key, default)
