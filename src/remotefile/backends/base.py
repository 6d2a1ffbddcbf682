"""Abstract base class for the storage backend behind a RemoteFile."""

import io
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import BinaryIO


@dataclass(frozen=True)
class FetchResult:
    """Outcome of ``Backend.fetch``: whether the object exists, and its bytes."""

    exists: bool
    body: BinaryIO = field(default_factory=io.BytesIO)


class Backend(ABC):
    """Access to exactly one remote object.

    Implementations own all provider-specific detail (client, credentials,
    error codes). Each instance is bound to a single remote key at
    construction time.
    """

    @abstractmethod
    def fetch(self) -> FetchResult:
        """Return the object's contents if it exists.

        A missing object is not an error: it yields ``FetchResult(exists=False)``
        with an empty body. Any other failure is raised as a ``StorageError``.
        """

    @abstractmethod
    def store(self, content: BinaryIO) -> None:
        """Overwrite the remote object with the full contents of *content*.

        *content* is seekable; implementations may rewind it before sending.
        """

    @abstractmethod
    def remove(self) -> None:
        """Delete the remote object."""

    @abstractmethod
    def suggested_filename(self) -> str:
        """Return the last path segment of the remote key.

        Used to name the local copy, so that programs which care about a
        filename or extension see the same one as the remote.
        """


def basename(key: str) -> str:
    """Return the last segment of a slash-separated object key.

    Raises:
        ValueError: If the last segment is empty, "." or "..".
    """
    name = key.rstrip("/").rsplit("/", 1)[-1]
    if name in ("", ".", ".."):
        raise ValueError(f"Object key must name a file: {key!r}")
    return name
