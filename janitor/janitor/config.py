from functools import cache

from mycad_core.appwrite import AppwriteConfig
from mycad_core.utils.config import load_config
from pydantic import Field


class AppConfig(AppwriteConfig):
    database_id: str = Field(..., alias="APPWRITE_DATABASE_ID")
    collection_vehicle_files: str = Field(..., alias="COLLECTION_VEHICLE_FILES_ID")
    bucket_vehicles: str = Field(..., alias="BUCKET_VEHICLES_ID")

    orphan_ttl_hours: int = Field(24, alias="ORPHAN_TTL_HOURS", ge=0)
    dry_run: bool = Field(True, alias="DRY_RUN")
    page_size: int = Field(100, alias="PAGE_SIZE", gt=0)
    max_files_per_run: int = Field(2000, alias="MAX_FILES_PER_RUN", ge=0)
    only_enabled_links: bool = Field(True, alias="ONLY_ENABLED_LINKS")
    file_id_attribute: str = Field("fileId", alias="FILE_ID_ATTRIBUTE")
    enabled_attribute: str = Field("enabled", alias="ENABLED_ATTRIBUTE")


@cache
def get_config() -> AppConfig:
    return load_config(AppConfig)
