import pytest

_STORAGE_ENV_VARS = [
    "S3_ENDPOINT_URL",
    "S3_REGION",
    "S3_SERVER_SIDE_ENCRYPTION",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SESSION_TOKEN",
    "GCS_PROJECT",
    "GOOGLE_APPLICATION_CREDENTIALS",
    "AZURE_STORAGE_CONNECTION_STRING",
    "AZURE_STORAGE_ACCOUNT_NAME",
    "AZURE_STORAGE_ACCOUNT_KEY",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Clear storage credentials so backend construction only sees what a test sets."""
    for var in _STORAGE_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
