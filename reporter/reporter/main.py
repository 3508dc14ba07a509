from functools import partial
from typing import AsyncIterator

from fastapi import Depends, FastAPI, Request
from loguru import logger
from mycad_core.appwrite import AppwriteClient, Storage
from mycad_core.models.status import ServiceStatus, ServiceStatusCode

from .config import get_config
from .exceptions import install_handlers
from .models import ErrorResponse, GenerateReportRequest, GenerateReportResponse
from .report import generate_report, to_response

app = FastAPI()
install_handlers(app)


@app.on_event("startup")
async def on_app_startup():
    # load config to check that all envvars are defined
    get_config()


async def get_client() -> AsyncIterator[AppwriteClient]:
    """Appwrite client scoped to a single request."""
    async with AppwriteClient.from_config(get_config()) as client:
        yield client


@app.post(
    "/",
    response_model=GenerateReportResponse,
    response_model_by_alias=True,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def generate(
    r: GenerateReportRequest, client: AppwriteClient = Depends(get_client)
) -> GenerateReportResponse:
    """Generate the PDF of a service or repair report and store it."""
    result = await generate_report(r, client)
    return to_response(result)


@app.get("/status", response_model=ServiceStatus)
async def get_status(
    request: Request, client: AppwriteClient = Depends(get_client)
) -> ServiceStatus:
    """Get the status of the service."""
    status = partial(ServiceStatus, url=request.url)
    try:
        await Storage(client).get_bucket(get_config().bucket_report_files)
    except Exception as e:
        logger.error(f"Report bucket unreachable: {e}")
        return status(
            status=ServiceStatusCode.ERROR,
            message="Storage unreachable",
        )
    return status(status=ServiceStatusCode.OK)
