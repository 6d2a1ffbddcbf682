"""Factory for creating a backend from a remote location URL."""

import logging
import os
from urllib.parse import urlsplit

from .base import Backend

log = logging.getLogger(__name__)

_SCHEMES = {
    "s3": "s3",
    "gs": "gcs",
    "gcs": "gcs",
    "az": "azure",
    "azure": "azure",
    "mem": "memory",
}


def create_backend(url: str) -> Backend:
    """Create the Backend for a single remote object.

    The URL scheme selects the provider and the host names the bucket or
    container; the path is the object key, e.g. ``s3://my-bucket/notes/todo.txt``.
    ``mem://todo.txt`` gives an empty in-memory backend.

    Credentials and endpoints are read from environment variables, the same
    ones used by each provider's own tooling where one exists.

    Raises:
        ValueError: If the scheme is unsupported, or the bucket or key is missing.
        ImportError: If the SDK for the requested provider is not installed.
    """
    parts = urlsplit(url)
    backend = _SCHEMES.get(parts.scheme.lower())
    if backend is None:
        raise ValueError(
            f"Unsupported storage scheme: {parts.scheme!r}. Supported: {', '.join(sorted(_SCHEMES))}"
        )

    if backend == "memory":
        return _create_memory_backend(parts.netloc + parts.path)

    bucket, key = parts.netloc, parts.path.lstrip("/")
    if not bucket:
        raise ValueError(f"Bucket name required in {url!r}")
    if not key:
        raise ValueError(f"Object key required in {url!r}")

    log.debug("Creating %s backend for bucket=%s key=%s", backend, bucket, key)
    if backend == "s3":
        return _create_s3_backend(bucket, key)
    if backend == "gcs":
        return _create_gcs_backend(bucket, key)
    return _create_azure_backend(bucket, key)


def _create_memory_backend(key: str) -> Backend:
    from .memory import MemoryBackend

    if not key.strip("/"):
        raise ValueError("Object key required for mem:// URLs")
    return MemoryBackend(key)


def _create_s3_backend(bucket: str, key: str) -> Backend:
    from .s3_backend import S3Backend

    return S3Backend(
        bucket_name=bucket,
        key=key,
        region=os.getenv("S3_REGION", "us-east-1"),
        endpoint_url=os.getenv("S3_ENDPOINT_URL"),
        aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
        aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
        aws_session_token=os.getenv("AWS_SESSION_TOKEN"),
        server_side_encryption=os.getenv("S3_SERVER_SIDE_ENCRYPTION", "AES256") or None,
    )


def _create_gcs_backend(bucket: str, key: str) -> Backend:
    from .gcs_backend import GcsBackend

    return GcsBackend(
        bucket_name=bucket,
        key=key,
        project=os.getenv("GCS_PROJECT"),
        credentials_path=os.getenv("GOOGLE_APPLICATION_CREDENTIALS"),
    )


def _create_azure_backend(container: str, key: str) -> Backend:
    from .azure_backend import AzureBlobBackend

    return AzureBlobBackend(
        container_name=container,
        key=key,
        connection_string=os.getenv("AZURE_STORAGE_CONNECTION_STRING"),
        account_name=os.getenv("AZURE_STORAGE_ACCOUNT_NAME"),
        account_key=os.getenv("AZURE_STORAGE_ACCOUNT_KEY"),
    )
