"""
Folio - Portfolio & Blog Backend
================================

A small Flask backend for a personal portfolio site:
- Blog post CRUD with tags and a featured image upload (/api/posts)
- Uploaded image serving (/uploads)
- Built single-page frontend serving with client-side routing fallback

Usage:
    from flask import Flask
    from folio import Folio

    app = Flask(__name__)
    Folio(app)
"""

import os
import logging
from flask import jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from .core import Config, Database, FolioError, LoggingService
from .core.storage import too_large_message

__version__ = '0.1.0'

logger = logging.getLogger(__name__)

# app.config keys Folio fills from Config when the host app hasn't set them
CONFIG_KEYS = [
    'SECRET_KEY', 'DB_DIR', 'BLOG_DB', 'UPLOAD_FOLDER', 'UPLOAD_URL_PREFIX', 'UPLOAD_FIELD',
    'MAX_UPLOAD_SIZE', 'FRONTEND_FOLDER', 'CORS_ORIGINS', 'CORS_METHODS', 'CORS_HEADERS',
    'LOGS_TABLE',
]

DEFAULT_FEATURES = {
    'posts': True,
    'uploads': True,
    'site': True,
}


class Folio:
    """Flask extension wiring the Folio modules into an app"""

    def __init__(self, app=None, config=None):
        self._config = config or {}
        self._registered_modules = []
        self.database = None
        self.post_service = None
        self.log_service = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        for key in CONFIG_KEYS:
            if app.config.get(key) is None:
                app.config[key] = getattr(Config, key)

        self._setup_form_limits(app)
        self._setup_directories(app)
        self._setup_storage(app)
        self._setup_cors(app)
        self._setup_request_logging(app)
        self._setup_error_handlers(app)
        self._register_modules(app)

        app.extensions['folio'] = self
        logger.info(f"Folio initialised with modules: {', '.join(self._registered_modules)}")

    def feature_enabled(self, name):
        features = dict(DEFAULT_FEATURES, **self._config.get('features', {}))
        return features.get(name, False)

    def get_registered_modules(self):
        return list(self._registered_modules)

    # ===== Setup =====

    def _setup_form_limits(self, app):
        """Raise the per-field form limit so long post bodies fit"""
        current = app.config.get('MAX_FORM_MEMORY_SIZE')
        if current is not None and current < Config.MAX_FORM_MEMORY_SIZE:
            app.config['MAX_FORM_MEMORY_SIZE'] = Config.MAX_FORM_MEMORY_SIZE

    def _setup_directories(self, app):
        """Create the database and upload directories"""
        os.makedirs(app.config['DB_DIR'], exist_ok=True)
        os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

    def _setup_storage(self, app):
        from .modules.posts import PostService, init_posts_db

        self.database = Database(app.config['BLOG_DB'])
        init_posts_db(self.database)
        self.log_service = LoggingService(self.database, app.config['LOGS_TABLE'])

        self.post_service = PostService(
            self.database,
            upload_dir=app.config['UPLOAD_FOLDER'],
            max_upload_size=app.config['MAX_UPLOAD_SIZE'],
            upload_url_prefix=app.config['UPLOAD_URL_PREFIX'],
        )

    def _setup_cors(self, app):
        CORS(
            app,
            origins=app.config['CORS_ORIGINS'],
            methods=app.config['CORS_METHODS'],
            allow_headers=app.config['CORS_HEADERS'],
            supports_credentials=True,
        )

    def _setup_request_logging(self, app):
        @app.before_request
        def log_request():
            logger.info(f"{request.method} {request.full_path.rstrip('?')}")

    def _setup_error_handlers(self, app):
        @app.errorhandler(RequestEntityTooLarge)
        def handle_too_large(e):
            message = too_large_message(
                request.content_length, request.content_type,
                app.config.get('MAX_CONTENT_LENGTH'), app.config['MAX_UPLOAD_SIZE'],
            )
            return jsonify({'error': message}), 400

        @app.errorhandler(FolioError)
        def handle_folio_error(e):
            return jsonify(e.to_dict()), e.status_code

        @app.errorhandler(Exception)
        def handle_unexpected(e):
            if isinstance(e, HTTPException):
                return e
            logger.exception(f"Unhandled error on {request.path}")
            self.log_service.error('app', 'Unhandled error', {'error': str(e), 'path': request.path})
            return jsonify({'error': 'Internal server error', 'details': str(e)}), 500

    def _register_modules(self, app):
        if self.feature_enabled('posts'):
            from .modules.posts import posts_bp
            app.register_blueprint(posts_bp)
            self._registered_modules.append('posts')

        if self.feature_enabled('uploads'):
            from .modules.uploads import uploads_bp
            app.register_blueprint(uploads_bp)
            self._registered_modules.append('uploads')

        if self.feature_enabled('site'):
            from .modules.site import site_bp
            app.register_blueprint(site_bp)
            self._registered_modules.append('site')


__all__ = ['Folio', '__version__']
