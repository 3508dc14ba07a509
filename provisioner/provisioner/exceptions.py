from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from mycad_core.exceptions import ClientError, MyCADError, ServerError


class ProvisioningValidationError(ClientError):
    """Raised for requests lacking required user or profile fields."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=400)


class ProvisioningError(ServerError):
    """Raised when creating a user with its profile fails midway.

    `user_id` and `profile_id` identify what had already been created.
    """

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        profile_id: Optional[str] = None,
    ) -> None:
        self.user_id = user_id
        self.profile_id = profile_id
        super().__init__(message)


def _error_response(code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=code, content={"ok": False, "error": message, **extra}
    )


async def handle_ClientError(request: Request, exc: ClientError) -> JSONResponse:
    logger.error(str(exc))
    return _error_response(exc.status_code, str(exc))


async def handle_ProvisioningError(
    request: Request, exc: ProvisioningError
) -> JSONResponse:
    logger.exception(f"Provisioning failed: {exc}")
    return _error_response(
        exc.status_code,
        str(exc),
        partialData={"userId": exc.user_id, "profileId": exc.profile_id},
    )


async def handle_Exception(request: Request, exc: Exception) -> JSONResponse:
    """Handles Appwrite, configuration and unexpected errors."""
    logger.exception(f"Provisioning failed: {exc}")
    return _error_response(500, str(exc) or exc.__class__.__name__)


def install_handlers(app: FastAPI):
    """Installs custom exception handlers for the FastAPI app."""
    handlers = {
        ClientError: handle_ClientError,
        ProvisioningError: handle_ProvisioningError,
        MyCADError: handle_Exception,
        httpx.HTTPError: handle_Exception,
        Exception: handle_Exception,
    }
    for exc, handler in handlers.items():
        app.add_exception_handler(exc, handler)  # type: ignore
