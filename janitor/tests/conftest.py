import os

os.environ.setdefault("APPWRITE_ENDPOINT", "https://appwrite.test/v1")
os.environ.setdefault("APPWRITE_PROJECT_ID", "mycad-test")
os.environ.setdefault("APPWRITE_API_KEY", "test-key")
os.environ.setdefault("APPWRITE_DATABASE_ID", "mycad")
os.environ.setdefault("COLLECTION_VEHICLE_FILES_ID", "vehicle_files")
os.environ.setdefault("BUCKET_VEHICLES_ID", "vehicles")

import pytest
from mycad_core.appwrite import AppwriteClient

from appwrite_mock import MockAppwrite
from janitor.config import AppConfig, get_config

OLD = "2020-01-01T00:00:00.000+00:00"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def config() -> AppConfig:
    return get_config()


@pytest.fixture
def mock_appwrite() -> MockAppwrite:
    """Bucket with one linked, one orphaned, one disabled-link and one recent file."""
    m = MockAppwrite()
    m.add_file("vehicles", "linked", created_at=OLD)
    m.add_file("vehicles", "orphan", created_at=OLD)
    m.add_file("vehicles", "disabled", created_at=OLD)
    m.add_file("vehicles", "recent")
    m.add_document("vehicle_files", {"fileId": "linked", "enabled": True})
    m.add_document("vehicle_files", {"fileId": "disabled", "enabled": False})
    m.add_document("vehicle_files", {"fileId": "recent", "enabled": True})
    return m


@pytest.fixture
def client(mock_appwrite: MockAppwrite, config: AppConfig) -> AppwriteClient:
    return AppwriteClient.from_config(config, transport=mock_appwrite.transport)
