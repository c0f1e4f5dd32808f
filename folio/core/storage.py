"""
Storage Utility
===============

Single-image upload handling for posts: one file per request, size-capped,
saved under a randomized name in the upload folder.
"""

import os
import time
import random
import logging
from werkzeug.utils import secure_filename

from .errors import UploadError, UploadTooLargeError

logger = logging.getLogger(__name__)


def size_limit_message(max_size):
    return f"File size too large. Maximum size is {max_size // (1024 * 1024)}MB."


def too_large_message(content_length, content_type, max_content_length, max_upload_size):
    """Error message for a request Werkzeug refused as too large.

    A multipart body over MAX_CONTENT_LENGTH is reported as an oversized
    upload. A request under it tripped the form field limits instead.
    """
    over_body_limit = max_content_length is not None and (content_length or 0) > max_content_length
    if over_body_limit and (content_type or '').startswith('multipart/form-data'):
        return size_limit_message(max_upload_size)
    if over_body_limit:
        return 'Request body too large'
    return 'Form data too large'


def get_single_upload(files, field):
    """Pick the one file sent under `field` from a request's files.

    Args:
        files: werkzeug MultiDict of FileStorage (request.files).
        field: The only accepted form field name.

    Returns:
        The FileStorage, or None when no file (or an empty file input) was sent.

    Raises:
        UploadError: a file arrived under another field, or more than one
            file arrived under `field`.
    """
    for name in files.keys():
        if name != field:
            raise UploadError('File upload error', f"Unexpected field: {name}")

    uploads = [f for f in files.getlist(field) if f and f.filename]
    if not uploads:
        return None
    if len(uploads) > 1:
        raise UploadError('File upload error', f"Only one file allowed in '{field}'")
    return uploads[0]


def stream_size(file):
    """Size in bytes of an uploaded file, leaving the stream at the start"""
    stream = file.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def build_filename(original_filename):
    """Timestamp + random suffix, keeping the original extension"""
    # the stem may be non-ASCII, so only the extension goes through secure_filename
    ext = secure_filename(os.path.splitext(original_filename or '')[1]).lower()
    ext = f".{ext}" if ext else ''
    unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10 ** 9)}"
    return f"{unique_suffix}{ext}"


def save_upload(file, upload_dir, max_size, url_prefix='/uploads'):
    """Save an uploaded file to the local upload folder.

    The size check runs before anything touches the disk.

    Returns:
        Public path like "/uploads/1700000000000-123456789.jpg".
    """
    size = stream_size(file)
    if size > max_size:
        logger.warning(f"Rejected upload '{file.filename}' ({size} bytes > {max_size})")
        raise UploadTooLargeError(size_limit_message(max_size))

    os.makedirs(upload_dir, exist_ok=True)
    filename = build_filename(file.filename)
    filepath = os.path.join(upload_dir, filename)
    file.save(filepath)

    logger.info(f"Saved upload {filename} ({size} bytes)")
    return f"{url_prefix.rstrip('/')}/{filename}"
