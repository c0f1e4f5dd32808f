"""
Folio Core
==========

Core utilities shared by Folio modules.
"""

from .config import Config, get_setting
from .database import Database
from .errors import FolioError, ValidationError, NotFoundError, UploadError, UploadTooLargeError
from .logging_service import LoggingService, db_log

__all__ = [
    'Config', 'get_setting', 'Database',
    'FolioError', 'ValidationError', 'NotFoundError', 'UploadError', 'UploadTooLargeError',
    'LoggingService', 'db_log',
]
