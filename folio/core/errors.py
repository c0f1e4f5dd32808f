"""
Folio error types. Each carries the HTTP status the API answers with.
"""


class FolioError(Exception):
    status_code = 500

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        body = {'error': self.message}
        if self.details:
            body['details'] = self.details
        return body


class ValidationError(FolioError):
    """Missing or invalid required field"""
    status_code = 400


class NotFoundError(FolioError):
    status_code = 404


class UploadError(FolioError):
    """Malformed upload (unexpected field, too many files)"""
    status_code = 400


class UploadTooLargeError(UploadError):
    pass
