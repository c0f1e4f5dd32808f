"""
Uploads Module
==============

Serves stored post images from the upload folder at /uploads/<filename>.
"""

from flask import Blueprint

uploads_bp = Blueprint('uploads', __name__, url_prefix='/uploads')

from . import routes  # noqa: E402,F401

__all__ = ['uploads_bp']
