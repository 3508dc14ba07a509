from typing import Optional

from loguru import logger
from mycad_core.appwrite import AppwriteClient

from .aggregate import aggregate
from .config import AppConfig, get_config
from .frontends.pdf import create_document
from .models import GenerateReportRequest, GenerateReportResponse
from .publish import ArtifactPublisher, PublishResult, reuses_existing


async def generate_report(
    request: GenerateReportRequest,
    client: AppwriteClient,
    config: Optional[AppConfig] = None,
) -> PublishResult:
    """Aggregates, renders and publishes a single report.

    Nothing is rendered if the report already references an artifact
    and regeneration was not requested.
    """
    config = config or get_config()
    report_type, report_id = request.report_type, request.report_id
    logger.info(f"Generating PDF for {report_type.value} report: {report_id}")

    view = await aggregate(report_type, report_id, client, config)
    publisher = ArtifactPublisher(client, config)
    if reuses_existing(view.report_file_id, request.regenerate):
        return await publisher.publish(
            report_type,
            report_id,
            b"",
            regenerate=False,
            existing_file_id=view.report_file_id,
        )

    logger.info("Generating PDF buffer...")
    buffer = await create_document(view)
    return await publisher.publish(
        report_type,
        report_id,
        buffer,
        regenerate=request.regenerate,
        existing_file_id=view.report_file_id,
    )


def to_response(result: PublishResult) -> GenerateReportResponse:
    return GenerateReportResponse(
        message="PDF generated successfully" if result.created else "PDF already exists",
        file_id=result.file_id,
        file_name=result.file_name,
    )
