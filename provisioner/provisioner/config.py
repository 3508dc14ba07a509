from functools import cache

from mycad_core.appwrite import AppwriteConfig
from mycad_core.utils.config import load_config
from pydantic import Field


class AppConfig(AppwriteConfig):
    """Group membership and role assignment are skipped while their
    collection IDs are undefined."""

    database_id: str = Field(..., alias="APPWRITE_DATABASE_ID")
    collection_users_profile: str = Field(..., alias="COLLECTION_USERS_PROFILE_ID")
    collection_groups: str = Field("", alias="COLLECTION_GROUPS_ID")
    collection_group_members: str = Field("", alias="COLLECTION_GROUP_MEMBERS_ID")
    collection_user_roles: str = Field("", alias="COLLECTION_USER_ROLES_ID")
    default_group_role: str = Field("MEMBER", alias="DEFAULT_GROUP_ROLE")
    default_role_id: str = Field("", alias="DEFAULT_ROLE_ID")


@cache
def get_config() -> AppConfig:
    return load_config(AppConfig)
