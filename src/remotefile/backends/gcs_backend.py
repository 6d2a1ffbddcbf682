"""Google Cloud Storage backend."""

import io
import logging
from typing import BinaryIO

from google.api_core.exceptions import Forbidden, NotFound
from google.cloud import storage as gcs
from google.oauth2 import service_account

from .base import Backend, FetchResult, basename
from .exceptions import (
    StorageConnectionError,
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
)

log = logging.getLogger(__name__)


class GcsBackend(Backend):
    """A single object in a Google Cloud Storage bucket."""

    def __init__(
        self,
        bucket_name: str,
        key: str,
        project: str | None = None,
        credentials_path: str | None = None,
    ):
        self._bucket_name = bucket_name
        self._key = key.lstrip("/")
        self._filename = basename(self._key)

        kwargs: dict = {}
        if project:
            kwargs["project"] = project
        if credentials_path:
            kwargs["credentials"] = service_account.Credentials.from_service_account_file(credentials_path)

        self._gcs_client = gcs.Client(**kwargs)
        self._bucket = self._gcs_client.bucket(bucket_name)

    @property
    def key(self) -> str:
        return self._key

    def fetch(self) -> FetchResult:
        try:
            content = self._bucket.blob(self._key).download_as_bytes()
        except NotFound as e:
            if _is_missing_bucket(e):
                raise self._translate_error(e) from e
            log.debug("gs://%s/%s does not exist", self._bucket_name, self._key)
            return FetchResult(exists=False)
        except Exception as e:
            raise self._translate_error(e) from e
        return FetchResult(exists=True, body=io.BytesIO(content))

    def store(self, content: BinaryIO) -> None:
        try:
            self._bucket.blob(self._key).upload_from_file(content, rewind=True)
        except Exception as e:
            raise self._translate_error(e) from e
        log.debug("Uploaded gs://%s/%s", self._bucket_name, self._key)

    def remove(self) -> None:
        try:
            self._bucket.blob(self._key).delete()
        except Exception as e:
            raise self._translate_error(e) from e
        log.debug("Deleted gs://%s/%s", self._bucket_name, self._key)

    def suggested_filename(self) -> str:
        return self._filename

    def _translate_error(self, error: Exception) -> StorageError:
        if isinstance(error, NotFound):
            return StorageNotFoundError(str(error), key=self._key, cause=error)
        if isinstance(error, Forbidden):
            return StoragePermissionError(str(error), key=self._key, cause=error)
        if isinstance(error, ValueError) and "credentials" in str(error).lower():
            return StoragePermissionError(str(error), key=self._key, cause=error)
        if isinstance(error, ConnectionError):
            return StorageConnectionError(str(error), key=self._key, cause=error)
        return StorageError(str(error), key=self._key, cause=error)


def _is_missing_bucket(error: NotFound) -> bool:
    # GCS answers 404 for both a missing object and a missing bucket.
    return "bucket does not exist" in str(error).lower()
