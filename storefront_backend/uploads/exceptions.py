# uploads/exceptions.py

"""
UPLOAD ERRORS

Centralized errors for the upload pipeline. Views map them to HTTP codes:
- UploadValidationError -> 400
- UnsafePathError       -> 400 (API) / 404 (file serving)
- UploadNotFoundError   -> 404
- UploadDirectoryError  -> 500
"""


class UploadError(Exception):
    """Base exception for all upload failures."""


class UploadValidationError(UploadError):
    """Raised when an uploaded file is empty, too large or not an allowed image."""


class UnsafePathError(UploadError):
    """Raised when a requested path would escape the upload directory."""


class UploadNotFoundError(UploadError):
    """Raised when the requested upload does not exist."""


class UploadDirectoryError(UploadError):
    """Raised when the upload directory cannot be created or written."""
