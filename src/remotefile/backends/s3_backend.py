"""S3-compatible backend (AWS S3, SeaweedFS, MinIO)."""

import io
import logging
from typing import BinaryIO

import boto3
from botocore.config import Config
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)

from .base import Backend, FetchResult, basename
from .exceptions import (
    StorageConnectionError,
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
)

log = logging.getLogger(__name__)

# See: https://docs.aws.amazon.com/AmazonS3/latest/API/ErrorResponses.html#ErrorCodeList
_ERROR_CODE_MAP = {
    "NoSuchKey": StorageNotFoundError,
    "404": StorageNotFoundError,
    "AccessDenied": StoragePermissionError,
    "403": StoragePermissionError,
    "InvalidAccessKeyId": StoragePermissionError,
    "SignatureDoesNotMatch": StoragePermissionError,
}

_CONNECTION_ERRORS = (EndpointConnectionError, ConnectTimeoutError, ReadTimeoutError)


class S3Backend(Backend):
    """A single object in an S3-compatible bucket."""

    def __init__(
        self,
        bucket_name: str,
        key: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        aws_access_key_id: str | None = None,
        aws_secret_access_key: str | None = None,
        aws_session_token: str | None = None,
        server_side_encryption: str | None = "AES256",
    ):
        self._bucket = bucket_name
        self._key = key.lstrip("/")
        self._filename = basename(self._key)
        self._region = region
        self._endpoint_url = endpoint_url
        self._server_side_encryption = server_side_encryption

        kwargs: dict = {
            "config": Config(
                region_name=region,
                signature_version="s3v4",
                retries={"max_attempts": 3, "mode": "standard"},
            ),
        }
        if aws_access_key_id and aws_secret_access_key:
            kwargs["aws_access_key_id"] = aws_access_key_id
            kwargs["aws_secret_access_key"] = aws_secret_access_key
        if aws_session_token:
            kwargs["aws_session_token"] = aws_session_token
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url

        self._client = boto3.client("s3", **kwargs)

    @property
    def key(self) -> str:
        return self._key

    def fetch(self) -> FetchResult:
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=self._key)
            content = response["Body"].read()
        except (ClientError, BotoCoreError) as e:
            error = self._translate_error(e)
            if isinstance(error, StorageNotFoundError):
                log.debug("s3://%s/%s does not exist", self._bucket, self._key)
                return FetchResult(exists=False, body=io.BytesIO())
            raise error from e
        return FetchResult(exists=True, body=io.BytesIO(content))

    def store(self, content: BinaryIO) -> None:
        content.seek(0)
        params: dict = {
            "Bucket": self._bucket,
            "Key": self._key,
            "Body": content,
        }
        if self._server_side_encryption:
            params["ServerSideEncryption"] = self._server_side_encryption
        try:
            self._client.put_object(**params)
        except (ClientError, BotoCoreError) as e:
            raise self._translate_error(e) from e
        log.debug("Uploaded s3://%s/%s", self._bucket, self._key)

    def remove(self) -> None:
        try:
            self._client.delete_object(Bucket=self._bucket, Key=self._key)
        except (ClientError, BotoCoreError) as e:
            raise self._translate_error(e) from e
        log.debug("Deleted s3://%s/%s", self._bucket, self._key)

    def suggested_filename(self) -> str:
        return self._filename

    def _translate_error(self, error: ClientError | BotoCoreError) -> StorageError:
        if isinstance(error, _CONNECTION_ERRORS):
            return StorageConnectionError(str(error), key=self._key, cause=error)
        if isinstance(error, BotoCoreError):
            return StorageError(str(error), key=self._key, cause=error)
        code = error.response.get("Error", {}).get("Code", "")
        exc_cls = _ERROR_CODE_MAP.get(code, StorageError)
        return exc_cls(str(error), key=self._key, cause=error)
