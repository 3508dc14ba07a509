import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from mycad_core.exceptions import ClientError, DocumentNotFound, MyCADError


class ReportValidationError(ClientError):
    """Raised for malformed report generation requests."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=400)


def _error_response(code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=code, content={"success": False, "error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        field = loc[-1] if loc else ""
        if err.get("type") == "json_invalid":
            return "Invalid JSON payload"
        if field == "reportType":
            return 'reportType is required and must be "service" or "repair"'
        if field == "reportId":
            return "reportId is required"
        if field:
            return f"{field}: {err.get('msg')}"
        return str(err.get("msg"))
    return "Invalid request"


async def handle_RequestValidationError(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handles malformed request bodies (invalid JSON, missing or invalid fields)."""
    return await handle_ClientError(
        request, ReportValidationError(_describe_validation_error(exc))
    )


async def handle_ClientError(request: Request, exc: ClientError) -> JSONResponse:
    """Handles errors caused by the request."""
    logger.error(f"Error generating PDF: {exc}")
    return _error_response(exc.status_code, str(exc))


async def handle_DocumentNotFound(
    request: Request, exc: DocumentNotFound
) -> JSONResponse:
    """Missing report, vehicle or group documents surface as server errors."""
    logger.exception(f"Error generating PDF: {exc}")
    return _error_response(500, exc.upstream_message or str(exc))


async def handle_MyCADError(request: Request, exc: MyCADError) -> JSONResponse:
    logger.exception(f"Error generating PDF: {exc}")
    return _error_response(getattr(exc, "status_code", 500), str(exc))


async def handle_Exception(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for I/O and unexpected errors."""
    logger.exception(f"Error generating PDF: {exc}")
    return _error_response(500, str(exc) or exc.__class__.__name__)


def install_handlers(app: FastAPI):
    """Installs custom exception handlers for the FastAPI app."""
    handlers = {
        RequestValidationError: handle_RequestValidationError,
        DocumentNotFound: handle_DocumentNotFound,
        ClientError: handle_ClientError,
        MyCADError: handle_MyCADError,
        httpx.HTTPError: handle_Exception,
        Exception: handle_Exception,
    }
    for exc, handler in handlers.items():
        app.add_exception_handler(exc, handler)  # type: ignore
