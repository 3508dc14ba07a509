import pytest
from mycad_core.appwrite import AppwriteClient

from appwrite_mock import MockAppwrite


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def mock_appwrite() -> MockAppwrite:
    return MockAppwrite()


@pytest.fixture
def client(mock_appwrite: MockAppwrite) -> AppwriteClient:
    return AppwriteClient(
        "https://appwrite.test/v1/", "project", "key", transport=mock_appwrite.transport
    )
