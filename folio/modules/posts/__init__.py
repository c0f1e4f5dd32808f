"""
Posts Module
============

JSON API for blog posts and their tags, mounted at /api/posts.

Provides:
- Post listing and lookup by slug
- Post creation and editing with an optional featured image upload
- Tag association sync on every write
- Post deletion
"""

from flask import Blueprint

posts_bp = Blueprint('posts', __name__, url_prefix='/api/posts')

from . import routes  # noqa: E402,F401
from .service import PostService, parse_tags  # noqa: E402
from .database import init_posts_db, slugify  # noqa: E402

__all__ = ['posts_bp', 'PostService', 'parse_tags', 'init_posts_db', 'slugify']
