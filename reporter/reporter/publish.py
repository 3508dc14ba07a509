from dataclasses import dataclass
from typing import Optional

from loguru import logger
from mycad_core.appwrite import AppwriteClient, Databases, Storage, unique_id
from mycad_core.utils.time import epoch_ms
from sanitize_filename import sanitize

from .aggregate import get_report_source
from .config import AppConfig, get_config
from .viewmodel import ReportType

PDF_CONTENT_TYPE = "application/pdf"
PUBLIC_READ = 'read("any")'


@dataclass
class PublishResult:
    """Outcome of publishing a report artifact."""

    file_id: str
    file_name: Optional[str] = None  # None if an existing artifact was reused
    created: bool = True


def reuses_existing(existing_file_id: Optional[str], regenerate: bool) -> bool:
    """Whether the artifact already stored for a report should be returned as-is."""
    return bool(existing_file_id) and not regenerate


def make_file_name(report_type: ReportType, report_id: str) -> str:
    return sanitize(f"{report_type.value}_{report_id}_{epoch_ms()}.pdf")


class ArtifactPublisher:
    """Stores rendered reports in the report-files bucket and links them
    to their report document."""

    def __init__(self, client: AppwriteClient, config: AppConfig) -> None:
        self.config = config
        self.databases = Databases(client)
        self.storage = Storage(client)

    async def delete_old(self, file_id: str) -> None:
        """Deletes a previously published artifact. Failures are only logged."""
        logger.info(f"Deleting old PDF: {file_id}")
        try:
            await self.storage.delete_file(self.config.bucket_report_files, file_id)
        except Exception as e:
            logger.warning(f"Failed to delete old PDF: {e}")

    async def publish(
        self,
        report_type: ReportType,
        report_id: str,
        buffer: bytes,
        regenerate: bool = False,
        existing_file_id: Optional[str] = None,
    ) -> PublishResult:
        """Uploads a rendered report and stores the file ID on the report.

        Parameters
        ----------
        report_type : `ReportType`
            Type of the report, decides which collection is updated.
        report_id : `str`
            ID of the report document.
        buffer : `bytes`
            The rendered PDF.
        regenerate : `bool`, optional
            Replace an existing artifact instead of returning it, by default False.
        existing_file_id : `Optional[str]`, optional
            The artifact currently referenced by the report, if any.

        Returns
        -------
        `PublishResult`
            The ID of the stored file and the name it was uploaded with.

        Raises
        ------
        `AppwriteError`
            If the upload or the report update fails. A file that was
            uploaded before the update failed is left in the bucket.
        """
        if reuses_existing(existing_file_id, regenerate):
            logger.info(f"PDF already exists: {existing_file_id}, skipping generation")
            return PublishResult(file_id=str(existing_file_id), created=False)

        if existing_file_id:
            await self.delete_old(existing_file_id)

        file_name = make_file_name(report_type, report_id)
        file_id = unique_id()
        logger.info(f"Uploading PDF: {file_name} with ID: {file_id}")
        file = await self.storage.create_file(
            self.config.bucket_report_files,
            file_id,
            file_name,
            buffer,
            content_type=PDF_CONTENT_TYPE,
            permissions=[PUBLIC_READ],
        )
        stored_id = file["$id"]
        logger.info(f"PDF uploaded successfully: {stored_id}")

        source = get_report_source(report_type, self.config)
        await self.databases.update_document(
            self.config.database_id,
            source.collection,
            report_id,
            {"reportFileId": stored_id},
        )
        logger.info("Report updated with PDF file ID")
        return PublishResult(file_id=stored_id, file_name=file_name)


async def publish(
    report_type: ReportType,
    report_id: str,
    buffer: bytes,
    client: AppwriteClient,
    regenerate: bool = False,
    existing_file_id: Optional[str] = None,
    config: Optional[AppConfig] = None,
) -> PublishResult:
    publisher = ArtifactPublisher(client, config or get_config())
    return await publisher.publish(
        report_type, report_id, buffer, regenerate, existing_file_id
    )
