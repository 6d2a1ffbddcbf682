"""Common exception hierarchy for storage backends."""


class StorageError(Exception):
    """Base exception for all backend operations."""

    def __init__(self, message: str, key: str | None = None, cause: Exception | None = None):
        self.key = key
        self.cause = cause
        super().__init__(message)


class StorageNotFoundError(StorageError):
    """Raised when the remote object does not exist.

    ``Backend.fetch`` never raises this; absence is reported through
    ``FetchResult.exists`` instead.
    """


class StoragePermissionError(StorageError):
    """Raised when credentials are invalid or access is denied."""


class StorageConnectionError(StorageError):
    """Raised when the storage backend is unreachable."""
