"""Azure Blob Storage backend."""

import io
import logging
from typing import BinaryIO

from azure.core.exceptions import (
    HttpResponseError,
    ResourceNotFoundError,
    ServiceRequestError,
    ServiceResponseError,
)
from azure.storage.blob import BlobServiceClient

from .base import Backend, FetchResult, basename
from .exceptions import (
    StorageConnectionError,
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
)

log = logging.getLogger(__name__)


class AzureBlobBackend(Backend):
    """A single blob in an Azure Blob Storage container."""

    def __init__(
        self,
        container_name: str,
        key: str,
        connection_string: str | None = None,
        account_name: str | None = None,
        account_key: str | None = None,
    ):
        self._container_name = container_name
        self._key = key.lstrip("/")
        self._filename = basename(self._key)

        if connection_string:
            service_client = BlobServiceClient.from_connection_string(connection_string)
        elif account_name and account_key:
            account_url = f"https://{account_name}.blob.core.windows.net"
            service_client = BlobServiceClient(account_url=account_url, credential=account_key)
        else:
            raise ValueError("Azure Blob Storage requires either connection_string or account_name + account_key")

        self._blob_client = service_client.get_blob_client(container=container_name, blob=self._key)

    @property
    def key(self) -> str:
        return self._key

    def fetch(self) -> FetchResult:
        try:
            content = self._blob_client.download_blob().readall()
        except ResourceNotFoundError as e:
            # ContainerNotFound is raised; only BlobNotFound means absent.
            if getattr(e, "error_code", None) != "BlobNotFound":
                raise self._translate_error(e) from e
            log.debug("Blob %s/%s does not exist", self._container_name, self._key)
            return FetchResult(exists=False)
        except Exception as e:
            raise self._translate_error(e) from e
        return FetchResult(exists=True, body=io.BytesIO(content))

    def store(self, content: BinaryIO) -> None:
        content.seek(0)
        try:
            self._blob_client.upload_blob(content, overwrite=True)
        except Exception as e:
            raise self._translate_error(e) from e
        log.debug("Uploaded blob %s/%s", self._container_name, self._key)

    def remove(self) -> None:
        try:
            self._blob_client.delete_blob()
        except Exception as e:
            raise self._translate_error(e) from e
        log.debug("Deleted blob %s/%s", self._container_name, self._key)

    def suggested_filename(self) -> str:
        return self._filename

    def _translate_error(self, error: Exception) -> StorageError:
        if isinstance(error, ResourceNotFoundError):
            return StorageNotFoundError(str(error), key=self._key, cause=error)
        if isinstance(error, HttpResponseError) and error.status_code == 403:
            return StoragePermissionError(str(error), key=self._key, cause=error)
        if isinstance(error, (ServiceRequestError, ServiceResponseError, ConnectionError)):
            return StorageConnectionError(str(error), key=self._key, cause=error)
        return StorageError(str(error), key=self._key, cause=error)
