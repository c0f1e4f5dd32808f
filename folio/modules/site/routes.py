import os
import logging
from flask import jsonify, send_from_directory

from folio.core import get_setting
from . import site_bp

logger = logging.getLogger(__name__)


@site_bp.route('/api/<path:path>', methods=['GET', 'POST', 'PUT', 'DELETE'])
def api_not_found(path):
    """Any /api/ path no API blueprint matched"""
    return jsonify({'error': 'API endpoint not found'}), 404


@site_bp.route('/', defaults={'path': ''})
@site_bp.route('/<path:path>')
def frontend(path):
    """Static frontend file if it exists, otherwise the SPA entry point"""
    frontend_folder = get_setting('FRONTEND_FOLDER')

    if path and os.path.isfile(os.path.join(frontend_folder, path)):
        return send_from_directory(frontend_folder, path)

    if os.path.isfile(os.path.join(frontend_folder, 'index.html')):
        return send_from_directory(frontend_folder, 'index.html')

    logger.warning(f"Frontend not built: no index.html in {frontend_folder}")
    return jsonify({'error': 'Not found'}), 404
