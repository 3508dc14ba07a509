"""Deletes files in the vehicles bucket that no vehicle-file document points to.

Uploads are linked to a vehicle by a separate document, so a failed or
abandoned upload leaves an orphaned file behind. Files are only
considered once they are older than the configured TTL, and a file is
never deleted if its link check fails.
"""

from datetime import datetime
from typing import Any, Optional

from loguru import logger
from mycad_core.appwrite import AppwriteClient, Databases, Query, Storage
from mycad_core.utils.time import hours_ago, is_older_than
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .config import AppConfig


class CleanupResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ok: bool = True
    scanned: int = 0
    candidates: int = 0
    deleted: int = 0
    skipped_too_new: int = 0
    skipped_linked: int = 0
    dry_run: bool = True


class OrphanFileCleaner:
    def __init__(self, client: AppwriteClient, config: AppConfig) -> None:
        self.config = config
        self.databases = Databases(client)
        self.storage = Storage(client)

    async def is_linked(self, file_id: str) -> bool:
        cfg = self.config
        queries = [Query.equal(cfg.file_id_attribute, file_id), Query.limit(1)]
        if cfg.only_enabled_links:
            queries.append(Query.equal(cfg.enabled_attribute, True))
        res = await self.databases.list_documents(
            cfg.database_id, cfg.collection_vehicle_files, queries
        )
        return res.total > 0

    async def handle_file(
        self, f: dict[str, Any], threshold: datetime, result: CleanupResult
    ) -> None:
        file_id = f["$id"]
        created_at = f.get("$createdAt") or f.get("createdAt")
        if not created_at or not is_older_than(created_at, threshold):
            result.skipped_too_new += 1
            return

        result.candidates += 1
        try:
            linked = await self.is_linked(file_id)
        except Exception as e:
            logger.error(f"link_check_failed file={file_id} err={e}")
            return
        if linked:
            result.skipped_linked += 1
            return

        if self.config.dry_run:
            logger.info(
                f"would_delete_orphan file={file_id} name={f.get('name')} createdAt={created_at}"
            )
            return
        try:
            await self.storage.delete_file(self.config.bucket_vehicles, file_id)
        except Exception as e:
            logger.error(f"delete_failed file={file_id} err={e}")
            return
        result.deleted += 1
        logger.info(f"deleted_orphan file={file_id} name={f.get('name')}")

    async def run(self, now: Optional[datetime] = None) -> CleanupResult:
        """Scans up to `max_files_per_run` files, page by page.

        Listing errors abort the run. Link check and delete errors only
        skip the affected file.
        """
        cfg = self.config
        threshold = hours_ago(cfg.orphan_ttl_hours, now)
        logger.info(
            f"cleanup_start bucket={cfg.bucket_vehicles} ttlHours={cfg.orphan_ttl_hours} "
            f"threshold={threshold.isoformat()} dryRun={cfg.dry_run}"
        )
        result = CleanupResult(dry_run=cfg.dry_run)
        cursor: Optional[str] = None

        while result.scanned < cfg.max_files_per_run:
            limit = min(cfg.page_size, cfg.max_files_per_run - result.scanned)
            queries = [Query.limit(limit)]
            if cursor:
                queries.append(Query.cursor_after(cursor))
            page = await self.storage.list_files(cfg.bucket_vehicles, queries)
            if not page.files:
                break
            for f in page.files[:limit]:
                result.scanned += 1
                cursor = f["$id"]
                await self.handle_file(f, threshold, result)
            if len(page.files) < limit:
                break

        logger.info(f"cleanup_done {result.model_dump_json(by_alias=True)}")
        return result
