# catalog/exceptions.py

"""
CATALOG STORAGE ERRORS

Raised by the repositories; views translate them into HTTP 500/503.
"""


class StorageError(Exception):
    """Base exception for all storage backend failures."""


class DatabaseUnavailableError(StorageError):
    """Raised when the database cannot be reached after all retries."""


class StorageConfigurationError(StorageError):
    """Raised when the selected backend is missing required settings."""
