"""In-process backend holding the remote object in memory."""

import io
import logging
from typing import BinaryIO

from .base import Backend, FetchResult, basename

log = logging.getLogger(__name__)


class MemoryBackend(Backend):
    """Backend whose "remote" object is a bytes attribute.

    ``data`` is ``None`` when the object does not exist. Intended for tests
    and dry runs.
    """

    def __init__(self, filename: str, data: bytes | None = None):
        self._filename = basename(filename)
        self.data = data

    def fetch(self) -> FetchResult:
        if self.data is None:
            return FetchResult(exists=False)
        return FetchResult(exists=True, body=io.BytesIO(self.data))

    def store(self, content: BinaryIO) -> None:
        content.seek(0)
        self.data = content.read()
        log.debug("Stored %d bytes for %s", len(self.data), self._filename)

    def remove(self) -> None:
        self.data = None

    def suggested_filename(self) -> str:
        return self._filename
