"""
Site Module
===========

Serves the built single-page frontend (home, about, blog, contact, admin)
from FRONTEND_FOLDER. Unknown non-API paths get index.html so client-side
routing can take over; unknown /api/ paths get a JSON 404.
"""

from flask import Blueprint

site_bp = Blueprint('site', __name__)

from . import routes  # noqa: E402,F401

__all__ = ['site_bp']
