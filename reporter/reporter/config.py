from functools import cache

from mycad_core.appwrite import AppwriteConfig
from mycad_core.utils.config import load_config
from pydantic import Field


class AppConfig(AppwriteConfig):
    database_id: str = Field(..., alias="APPWRITE_DATABASE_ID")
    bucket_report_files: str = Field(..., alias="APPWRITE_BUCKET_REPORT_FILES_ID")
    bucket_group_logos: str = Field(..., alias="APPWRITE_BUCKET_GROUP_LOGOS_ID")
    collection_service_histories: str = Field(
        ..., alias="APPWRITE_COLLECTION_SERVICE_HISTORIES_ID"
    )
    collection_repair_reports: str = Field(
        ..., alias="APPWRITE_COLLECTION_REPAIR_REPORTS_ID"
    )
    collection_replaced_parts: str = Field(
        ..., alias="APPWRITE_COLLECTION_REPLACED_PARTS_ID"
    )
    collection_repaired_parts: str = Field(
        ..., alias="APPWRITE_COLLECTION_REPAIRED_PARTS_ID"
    )
    collection_vehicles: str = Field(..., alias="APPWRITE_COLLECTION_VEHICLES_ID")
    collection_vehicle_types: str = Field(
        ..., alias="APPWRITE_COLLECTION_VEHICLE_TYPES_ID"
    )
    collection_vehicle_brands: str = Field(
        ..., alias="APPWRITE_COLLECTION_VEHICLE_BRANDS_ID"
    )
    collection_vehicle_models: str = Field(
        ..., alias="APPWRITE_COLLECTION_VEHICLE_MODELS_ID"
    )
    collection_groups: str = Field(..., alias="APPWRITE_COLLECTION_GROUPS_ID")
    collection_users_profile: str = Field(
        ..., alias="APPWRITE_COLLECTION_USERS_PROFILE_ID"
    )


@cache
def get_config() -> AppConfig:
    """Loads and caches the service config.

    Raises `MissingConfigError` naming every undefined variable.
    """
    return load_config(AppConfig)
