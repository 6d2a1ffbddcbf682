"""Storage backends for a single remote object: S3, GCS, Azure Blob Storage, and in-memory."""

from .base import Backend, FetchResult
from .exceptions import (
    StorageConnectionError,
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
)
from .factory import create_backend
from .memory import MemoryBackend

__all__ = [
    "Backend",
    "FetchResult",
    "MemoryBackend",
    "StorageError",
    "StorageNotFoundError",
    "StoragePermissionError",
    "StorageConnectionError",
    "create_backend",
]
