"""Tests for GcsBackend."""

import io
from unittest.mock import MagicMock, patch

import pytest
from google.api_core.exceptions import Forbidden, InternalServerError, NotFound

from remotefile.backends.exceptions import (
    StorageConnectionError,
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
)
from remotefile.backends.gcs_backend import GcsBackend

pytestmark = pytest.mark.usefixtures("clean_env")


@pytest.fixture()
def mock_gcs():
    with patch("remotefile.backends.gcs_backend.gcs") as mock:
        yield mock


@pytest.fixture()
def mock_blob(mock_gcs):
    blob = MagicMock()
    mock_gcs.Client.return_value.bucket.return_value.blob.return_value = blob
    return blob


@pytest.fixture()
def backend(mock_gcs, mock_blob):
    return GcsBackend(bucket_name="test-bucket", key="notes/todo.txt")


class TestConstruction:
    def test_uses_project(self, mock_gcs):
        GcsBackend(bucket_name="b", key="k", project="my-project")
        assert mock_gcs.Client.call_args.kwargs == {"project": "my-project"}

    @patch("remotefile.backends.gcs_backend.service_account")
    def test_loads_service_account_file(self, mock_sa, mock_gcs):
        GcsBackend(bucket_name="b", key="k", credentials_path="/secrets/sa.json")

        mock_sa.Credentials.from_service_account_file.assert_called_once_with("/secrets/sa.json")
        assert mock_gcs.Client.call_args.kwargs["credentials"] is (
            mock_sa.Credentials.from_service_account_file.return_value
        )

    def test_binds_bucket(self, mock_gcs):
        GcsBackend(bucket_name="test-bucket", key="k")
        mock_gcs.Client.return_value.bucket.assert_called_once_with("test-bucket")


class TestFetch:
    def test_returns_content(self, backend, mock_blob, mock_gcs):
        mock_blob.download_as_bytes.return_value = b"file-bytes"

        result = backend.fetch()

        assert result.exists is True
        assert result.body.read() == b"file-bytes"
        mock_gcs.Client.return_value.bucket.return_value.blob.assert_called_with("notes/todo.txt")

    def test_not_found_is_not_an_error(self, backend, mock_blob):
        mock_blob.download_as_bytes.side_effect = NotFound("no such object")

        result = backend.fetch()

        assert result.exists is False
        assert result.body.read() == b""

    def test_missing_bucket_is_an_error(self, backend, mock_blob):
        mock_blob.download_as_bytes.side_effect = NotFound("The specified bucket does not exist.")

        with pytest.raises(StorageNotFoundError):
            backend.fetch()

    def test_forbidden_raises_permission_error(self, backend, mock_blob):
        mock_blob.download_as_bytes.side_effect = Forbidden("denied")

        with pytest.raises(StoragePermissionError):
            backend.fetch()

    def test_connection_error_raises_connection_error(self, backend, mock_blob):
        mock_blob.download_as_bytes.side_effect = ConnectionError("unreachable")

        with pytest.raises(StorageConnectionError):
            backend.fetch()

    def test_server_error_raises_storage_error(self, backend, mock_blob):
        original = InternalServerError("oops")
        mock_blob.download_as_bytes.side_effect = original

        with pytest.raises(StorageError) as exc_info:
            backend.fetch()

        assert type(exc_info.value) is StorageError
        assert exc_info.value.cause is original
        assert exc_info.value.key == "notes/todo.txt"


class TestStore:
    def test_uploads_with_rewind(self, backend, mock_blob):
        content = io.BytesIO(b"payload")

        backend.store(content)
        mock_blob.upload_from_file.assert_called_once_with(content, rewind=True)

    def test_translates_errors(self, backend, mock_blob):
        mock_blob.upload_from_file.side_effect = Forbidden("denied")

        with pytest.raises(StoragePermissionError):
            backend.store(io.BytesIO(b"x"))


class TestRemove:
    def test_deletes_blob(self, backend, mock_blob):
        backend.remove()
        mock_blob.delete.assert_called_once_with()

    def test_not_found_is_surfaced(self, backend, mock_blob):
        mock_blob.delete.side_effect = NotFound("gone")

        with pytest.raises(StorageNotFoundError):
            backend.remove()


class TestSuggestedFilename:
    def test_last_path_segment(self, backend):
        assert backend.suggested_filename() == "todo.txt"
