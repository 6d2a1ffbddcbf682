"""Edit a single object from remote storage as a local temporary file."""

from .backends import (
    Backend,
    FetchResult,
    MemoryBackend,
    StorageConnectionError,
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
    create_backend,
)
from .remote_file import LocalState, RemoteFile

__all__ = [
    "RemoteFile",
    "LocalState",
    "Backend",
    "FetchResult",
    "MemoryBackend",
    "StorageError",
    "StorageNotFoundError",
    "StoragePermissionError",
    "StorageConnectionError",
    "create_backend",
]
