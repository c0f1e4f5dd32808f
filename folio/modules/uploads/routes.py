from flask import send_from_directory

from folio.core import get_setting
from . import uploads_bp


@uploads_bp.route('/<path:filename>')
def uploaded_file(filename):
    """Serve an uploaded image; send_from_directory 404s outside the folder"""
    return send_from_directory(get_setting('UPLOAD_FOLDER'), filename)
