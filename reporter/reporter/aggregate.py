from dataclasses import dataclass
from typing import Any, Optional

from loguru import logger
from mycad_core.appwrite import AppwriteClient, Databases, Query, Storage
from mycad_core.exceptions import DocumentNotFound

from .config import AppConfig, get_config
from .viewmodel import Group, ReportType, ReportViewModel, Vehicle

Document = dict[str, Any]

# Appwrite returns 25 documents unless told otherwise
MAX_PARTS = 500


@dataclass(frozen=True)
class ReportSource:
    """Where the documents of one report type are stored."""

    collection: str
    parts_collection: str
    parent_field: str  # field on a part that points back to its report


def get_report_source(report_type: ReportType, config: AppConfig) -> ReportSource:
    if report_type == ReportType.SERVICE:
        return ReportSource(
            collection=config.collection_service_histories,
            parts_collection=config.collection_replaced_parts,
            parent_field="serviceHistoryId",
        )
    return ReportSource(
        collection=config.collection_repair_reports,
        parts_collection=config.collection_repaired_parts,
        parent_field="repairReportId",
    )


class ReportAggregator:
    """Fetches a report and every document it references.

    Read-only: no document is modified by the aggregator.
    """

    def __init__(self, client: AppwriteClient, config: AppConfig) -> None:
        self.config = config
        self.databases = Databases(client)
        self.storage = Storage(client)

    async def get(self, collection_id: str, document_id: Optional[str]) -> Document:
        if not document_id:
            # an unset mandatory reference is reported like a dangling one
            raise DocumentNotFound(collection_id, str(document_id))
        return await self.databases.get_document(
            self.config.database_id, collection_id, document_id
        )

    async def resolve_optional(
        self, collection_id: str, document_id: Optional[str]
    ) -> Optional[Document]:
        """Fetches a referenced document if the reference is set.

        A reference that is set but points to a missing document is
        still an error.
        """
        if not document_id:
            return None
        return await self.get(collection_id, document_id)

    async def fetch_group_logo(self, group: Document) -> Optional[bytes]:
        """Downloads the group logo. Failures are logged and yield no logo."""
        logo_file_id = group.get("logoFileId")
        if not logo_file_id:
            return None
        try:
            logo = await self.storage.get_file_view(
                self.config.bucket_group_logos, logo_file_id
            )
        except Exception as e:
            logger.warning(f"Could not load group logo '{logo_file_id}': {e}")
            return None
        logger.info(f"Group logo loaded: {logo_file_id}")
        return logo

    async def fetch_parts(self, source: ReportSource, report_id: str) -> list[Document]:
        res = await self.databases.list_documents(
            self.config.database_id,
            source.parts_collection,
            [
                Query.equal(source.parent_field, report_id),
                Query.equal("enabled", True),
                Query.limit(MAX_PARTS),
            ],
        )
        return res.documents

    async def aggregate(
        self, report_type: ReportType, report_id: str
    ) -> ReportViewModel:
        """Builds the view model for a single report.

        Raises
        ------
        `DocumentNotFound`
            If the report, its vehicle or its group does not exist.
        """
        cfg = self.config
        source = get_report_source(report_type, cfg)

        report = await self.get(source.collection, report_id)

        created_by = await self.resolve_optional(
            cfg.collection_users_profile, report.get("createdByProfileId")
        )
        finalized_by = await self.resolve_optional(
            cfg.collection_users_profile, report.get("finalizedByProfileId")
        )

        vehicle_doc = await self.get(cfg.collection_vehicles, report.get("vehicleId"))
        vehicle_type = await self.resolve_optional(
            cfg.collection_vehicle_types, vehicle_doc.get("typeId")
        )
        brand = await self.resolve_optional(
            cfg.collection_vehicle_brands, vehicle_doc.get("brandId")
        )
        model = await self.resolve_optional(
            cfg.collection_vehicle_models, vehicle_doc.get("modelId")
        )

        group_doc = await self.get(cfg.collection_groups, report.get("groupId"))
        logo = await self.fetch_group_logo(group_doc)

        parts = await self.fetch_parts(source, report_id)
        logger.debug(f"Found {len(parts)} enabled parts for {report_type.value} report {report_id}")

        return ReportViewModel.from_documents(
            report_type,
            report,
            vehicle=Vehicle.from_documents(vehicle_doc, vehicle_type, brand, model),
            group=Group.from_document(group_doc, logo=logo),
            parts=parts,
            created_by=created_by,
            finalized_by=finalized_by,
        )


async def aggregate(
    report_type: ReportType,
    report_id: str,
    client: AppwriteClient,
    config: Optional[AppConfig] = None,
) -> ReportViewModel:
    """Fetches a report and its related documents as a `ReportViewModel`."""
    return await ReportAggregator(client, config or get_config()).aggregate(
        report_type, report_id
    )
