import os

os.environ.setdefault("APPWRITE_ENDPOINT", "https://appwrite.test/v1")
os.environ.setdefault("APPWRITE_PROJECT_ID", "mycad-test")
os.environ.setdefault("APPWRITE_API_KEY", "test-key")
os.environ.setdefault("APPWRITE_DATABASE_ID", "mycad")
os.environ.setdefault("COLLECTION_USERS_PROFILE_ID", "users_profile")
os.environ.setdefault("COLLECTION_GROUPS_ID", "groups")
os.environ.setdefault("COLLECTION_GROUP_MEMBERS_ID", "group_members")
os.environ.setdefault("COLLECTION_USER_ROLES_ID", "user_roles")

import pytest
from mycad_core.appwrite import AppwriteClient

from appwrite_mock import MockAppwrite
from provisioner.config import AppConfig, get_config


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def config() -> AppConfig:
    return get_config()


@pytest.fixture
def mock_appwrite() -> MockAppwrite:
    """One group (team "team-norte") and one account without a profile."""
    m = MockAppwrite()
    m.add_document("groups", {"$id": "g1", "teamId": "team-norte", "name": "Norte"})
    m.add_user({"$id": "u1", "email": "Luis@Example.com", "name": "Luis Pérez Gómez"})
    return m


@pytest.fixture
def client(mock_appwrite: MockAppwrite, config: AppConfig) -> AppwriteClient:
    return AppwriteClient.from_config(config, transport=mock_appwrite.transport)
