import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from mycad_core.exceptions import MyCADError


async def handle_Exception(request: Request, exc: Exception) -> JSONResponse:
    """Configuration, listing and unexpected errors abort the run."""
    logger.exception(f"Cleanup failed: {exc}")
    return JSONResponse(
        status_code=500,
        content={"ok": False, "error": str(exc) or exc.__class__.__name__},
    )


def install_handlers(app: FastAPI):
    """Installs custom exception handlers for the FastAPI app."""
    for exc in (MyCADError, httpx.HTTPError, Exception):
        app.add_exception_handler(exc, handle_Exception)  # type: ignore
