import smtplib

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from mycad_core.exceptions import ClientError, MyCADError


class EmailValidationError(ClientError):
    """Raised when an email request lacks required parameters."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=400)


def _error_response(code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=code, content={"ok": False, "error": message})


async def handle_ClientError(request: Request, exc: ClientError) -> JSONResponse:
    logger.error(str(exc))
    return _error_response(exc.status_code, str(exc))


async def handle_Exception(request: Request, exc: Exception) -> JSONResponse:
    """Handles SMTP, configuration and unexpected errors."""
    logger.exception(f"Email request failed: {exc}")
    return _error_response(500, str(exc) or exc.__class__.__name__)


def install_handlers(app: FastAPI):
    """Installs custom exception handlers for the FastAPI app."""
    handlers = {
        ClientError: handle_ClientError,
        MyCADError: handle_Exception,
        smtplib.SMTPException: handle_Exception,
        OSError: handle_Exception,
        Exception: handle_Exception,
    }
    for exc, handler in handlers.items():
        app.add_exception_handler(exc, handler)  # type: ignore
